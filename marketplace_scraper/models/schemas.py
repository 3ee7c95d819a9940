"""
Pydantic models and schemas for the Marketplace Search Scraper.

This module defines the data structures produced by one scrape, ensuring
type safety, validation, and serialization consistency. Python attribute
names are snake_case; the JSON wire names (``id``, ``reviews``,
``imageUrl``, ``totalProducts``) are carried as aliases.

Models:
    - ProductRecord: One product listing extracted from a results page
    - ExtractionResult: Successful scrape response
    - ErrorResponse: Classified upstream failure
    - KeywordErrorResponse: Rejected keyword
    - ServiceStatus: Liveness payload
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Self, Union

from pydantic import (
    BaseModel as PydanticBaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)


# =============================================================================
# Constants
# =============================================================================

NOT_AVAILABLE = "N/A"
TITLE_NOT_FOUND = "title not found"
MAX_TITLE_LENGTH = 200
MIN_RATING = 0.0
MAX_RATING = 5.0

Rating = Union[float, Literal["N/A"]]


def utc_now() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime as ISO 8601 UTC with a trailing ``Z``."""
    if value.tzinfo is None:
        return value.isoformat() + "Z"
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# =============================================================================
# Base Configuration
# =============================================================================

class BaseModel(PydanticBaseModel):
    """Base model with common configuration for all schemas."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_json(self, **kwargs) -> str:
        """Serialize model to JSON string using wire names."""
        return self.model_dump_json(indent=2, by_alias=True, **kwargs)

    def to_dict(self, **kwargs) -> dict[str, Any]:
        """Serialize model to a JSON-compatible dictionary using wire names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)

    @classmethod
    def from_json(cls, json_str: str) -> Self:
        """Deserialize model from JSON string."""
        return cls.model_validate_json(json_str)


class TimestampMixin(BaseModel):
    """Mixin for payloads stamped with their completion time."""

    timestamp: datetime = Field(
        default_factory=utc_now,
        description="Completion time in ISO 8601 format",
    )

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


# =============================================================================
# Product Models
# =============================================================================

class ProductRecord(BaseModel):
    """A single product listing extracted from a search results page."""

    sequence_id: int = Field(..., ge=1, alias="id", description="1-based position in the emitted list")
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    rating: Rating = Field(default=NOT_AVAILABLE, description="Star rating or 'N/A'")
    review_count: int = Field(default=0, ge=0, alias="reviews")
    image_url: str = Field(default=NOT_AVAILABLE, alias="imageUrl")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject the extractor's fallback title."""
        if v == TITLE_NOT_FOUND:
            raise ValueError("Product title was not found")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: Rating) -> Rating:
        if v != NOT_AVAILABLE and not (MIN_RATING <= v <= MAX_RATING):
            raise ValueError(f"Rating {v} outside {MIN_RATING}-{MAX_RATING}")
        return v

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        if v != NOT_AVAILABLE and not v.startswith(("http://", "https://")):
            raise ValueError("Image URL must be absolute")
        return v

    @property
    def has_rating(self) -> bool:
        return self.rating != NOT_AVAILABLE

    @property
    def has_image(self) -> bool:
        return self.image_url != NOT_AVAILABLE


# =============================================================================
# Response Models
# =============================================================================

class ExtractionResult(TimestampMixin):
    """
    Successful scrape of one keyword.

    ``total_products`` is derived from ``products`` so the two can never
    disagree.
    """

    success: Literal[True] = True
    keyword: str
    products: list[ProductRecord] = Field(default_factory=list)

    @computed_field(alias="totalProducts")
    @property
    def total_products(self) -> int:
        return len(self.products)


class ErrorResponse(TimestampMixin):
    """Classified failure returned instead of products."""

    success: Literal[False] = False
    error: str
    keyword: str | None = None


class KeywordErrorResponse(BaseModel):
    """Body returned when the keyword is missing or too short."""

    error: str
    example: str = "/api/scrape?keyword=smartphone"


class ServiceStatus(TimestampMixin):
    """Liveness payload for the status endpoint."""

    status: Literal["online"] = "online"
    message: str = "Marketplace Scraper API is running"
