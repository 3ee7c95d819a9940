"""
Application settings and configuration management.

This module handles environment variables and application configuration
using Pydantic settings management for type safety and validation. The
outbound request parameters are frozen into a ``FetchConfig`` value that is
handed to the fetcher explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from marketplace_scraper.models.schemas import MAX_TITLE_LENGTH


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class FetchConfig(BaseModel):
    """Immutable parameters for one outbound search-page request."""

    model_config = ConfigDict(frozen=True)

    url_template: str = "https://www.amazon.com/s?k={keyword}"
    headers: dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=10.0, gt=0)
    request_delay_seconds: float = Field(default=1.0, ge=0)
    max_retries: int = Field(default=2, ge=1)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)

    def build_url(self, encoded_keyword: str) -> str:
        """Fill the search template with an already URL-encoded keyword."""
        return self.url_template.format(keyword=encoded_keyword)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings are validated on load and cached by ``get_settings``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Configuration
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL"
    )
    log_json: bool = Field(default=True, alias="LOG_JSON")

    # Upstream Request
    search_url_template: str = Field(
        default="https://www.amazon.com/s?k={keyword}",
        alias="SEARCH_URL_TEMPLATE",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="USER_AGENT")
    accept_language: str = Field(default="en-US,en;q=0.5", alias="ACCEPT_LANGUAGE")
    request_timeout_seconds: float = Field(default=10.0, alias="REQUEST_TIMEOUT_SECONDS")
    request_delay_seconds: float = Field(default=1.0, alias="REQUEST_DELAY_SECONDS")
    max_retries: int = Field(default=2, alias="MAX_RETRIES")
    retry_backoff_seconds: float = Field(default=1.0, alias="RETRY_BACKOFF_SECONDS")

    # Extraction
    min_keyword_length: int = Field(default=2, alias="MIN_KEYWORD_LENGTH")
    max_title_length: int = Field(
        default=MAX_TITLE_LENGTH, ge=1, le=MAX_TITLE_LENGTH, alias="MAX_TITLE_LENGTH"
    )
    image_size_suffix: str = Field(default="._AC_UL320_.jpg", alias="IMAGE_SIZE_SUFFIX")
    html_parser: str = Field(default="html.parser", alias="HTML_PARSER")

    # API Server
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=3000, alias="API_PORT")

    @field_validator("search_url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """Ensure the template has a keyword placeholder."""
        if "{keyword}" not in v:
            raise ValueError("SEARCH_URL_TEMPLATE must contain a {keyword} placeholder")
        return v

    @field_validator("request_delay_seconds")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("REQUEST_DELAY_SECONDS cannot be negative")
        return v

    def build_headers(self) -> dict[str, str]:
        """Browser-like header set sent with every search request."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": self.accept_language,
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }

    def fetch_config(self) -> FetchConfig:
        """Freeze the request-related settings into a ``FetchConfig``."""
        return FetchConfig(
            url_template=self.search_url_template,
            headers=self.build_headers(),
            timeout_seconds=self.request_timeout_seconds,
            request_delay_seconds=self.request_delay_seconds,
            max_retries=self.max_retries,
            retry_backoff_seconds=self.retry_backoff_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
