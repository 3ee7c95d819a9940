"""
Validation service for caller-supplied input.

Keywords are checked here, before anything is fetched, so a bad keyword
never reaches the extraction engine.
"""

from typing import Optional

from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Custom validation error."""

    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationService:
    """Service for validating search input."""

    def __init__(self, min_keyword_length: int = 2):
        self.min_keyword_length = min_keyword_length

    def validate_keyword(self, keyword: Optional[str]) -> str:
        """
        Validate and trim a search keyword.

        Raises:
            ValidationError: ``MISSING_KEYWORD`` when absent or blank,
                ``KEYWORD_TOO_SHORT`` below the minimum length.
        """
        cleaned = (keyword or "").strip()
        if not cleaned:
            raise ValidationError(
                code="MISSING_KEYWORD",
                message="The keyword parameter is required",
            )

        if len(cleaned) < self.min_keyword_length:
            logger.info("Keyword rejected", keyword=cleaned, reason="too_short")
            raise ValidationError(
                code="KEYWORD_TOO_SHORT",
                message=f"The keyword must be at least {self.min_keyword_length} characters long",
                details={"keyword": cleaned, "min_length": self.min_keyword_length},
            )

        return cleaned
