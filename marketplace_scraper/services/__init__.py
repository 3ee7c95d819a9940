"""
Services package for the Marketplace Search Scraper.

Services:
    - SearchPageFetcher: Outbound search page request and failure classification
    - ValidationService: Keyword validation
"""

from marketplace_scraper.services.fetch_service import (
    # Fetcher
    SearchPageFetcher,
    classify_status,
    # Exceptions
    UpstreamError,
    UpstreamTimeout,
    UpstreamForbidden,
    UpstreamNotFound,
    UpstreamOther,
)
from marketplace_scraper.services.validation_service import (
    ValidationError,
    ValidationService,
)

__all__ = [
    # Fetch Service
    "SearchPageFetcher",
    "classify_status",
    # Fetch Exceptions
    "UpstreamError",
    "UpstreamTimeout",
    "UpstreamForbidden",
    "UpstreamNotFound",
    "UpstreamOther",
    # Validation
    "ValidationError",
    "ValidationService",
]
