"""Data models module for the Marketplace Search Scraper."""

from marketplace_scraper.models.schemas import (
    # Base Models
    BaseModel,
    TimestampMixin,

    # Product Models
    ProductRecord,

    # Response Models
    ExtractionResult,
    ErrorResponse,
    KeywordErrorResponse,
    ServiceStatus,

    # Constants
    NOT_AVAILABLE,
    TITLE_NOT_FOUND,
    MAX_TITLE_LENGTH,

    # Helpers
    format_timestamp,
    utc_now,
)

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "ProductRecord",
    "ExtractionResult",
    "ErrorResponse",
    "KeywordErrorResponse",
    "ServiceStatus",
    "NOT_AVAILABLE",
    "TITLE_NOT_FOUND",
    "MAX_TITLE_LENGTH",
    "format_timestamp",
    "utc_now",
]
