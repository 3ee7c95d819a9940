"""
Extractors module for the Marketplace Search Scraper.

Components:
    - RegionLocator: Finds product listing regions in a results page
    - ProductExtractor: Turns one region into a product record
    - normalizers: Per-field cleaning and validation functions
"""

from marketplace_scraper.extractors.normalizers import (
    IMAGE_SIZE_SUFFIX,
    normalize_image_url,
    normalize_rating,
    normalize_review_count,
    normalize_title,
)
from marketplace_scraper.extractors.product_extractor import (
    ProductCandidate,
    ProductExtractor,
    first_match,
)
from marketplace_scraper.extractors.region_locator import (
    DEFAULT_STRATEGIES,
    LocatedRegions,
    RegionLocator,
    RegionStrategy,
    locate_regions,
)

__all__ = [
    # Normalizers
    "IMAGE_SIZE_SUFFIX",
    "normalize_image_url",
    "normalize_rating",
    "normalize_review_count",
    "normalize_title",
    # Extractor
    "ProductCandidate",
    "ProductExtractor",
    "first_match",
    # Locator
    "DEFAULT_STRATEGIES",
    "LocatedRegions",
    "RegionLocator",
    "RegionStrategy",
    "locate_regions",
]
