"""
Product extractor for a single search result region.

Every field has its own cascade of lookups. A lookup is a small function
``region -> text | None``; the cascade stops at the first lookup that yields
non-empty text, and the field's normalizer turns that text (or ``None``)
into the final value. Cascades are independent of one another.

A region becomes a record only if a title was found. Any other field that
cannot be read falls back to its default, and any unexpected failure inside
a region drops that region alone.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from bs4 import Tag
from pydantic import ValidationError

from marketplace_scraper.extractors.normalizers import (
    IMAGE_SIZE_SUFFIX,
    collapse_whitespace,
    is_absolute_url,
    normalize_image_url,
    normalize_rating,
    normalize_review_count,
    normalize_title,
)
from marketplace_scraper.models.schemas import (
    MAX_TITLE_LENGTH,
    TITLE_NOT_FOUND,
    ProductRecord,
    Rating,
)
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)

Lookup = Callable[[Tag], Optional[str]]


# =============================================================================
# Lookup Builders
# =============================================================================

def text_of(selector: str) -> Lookup:
    """Visible text of the first element matching ``selector``."""
    def lookup(region: Tag) -> Optional[str]:
        element = region.select_one(selector)
        if element is None:
            return None
        return collapse_whitespace(element.get_text(" ", strip=True)) or None
    return lookup


def label_or_text_of(selector: str) -> Lookup:
    """``aria-label`` of the first match, falling back to its visible text."""
    def lookup(region: Tag) -> Optional[str]:
        element = region.select_one(selector)
        if element is None:
            return None
        label = element.get("aria-label")
        if isinstance(label, str) and label.strip():
            return label.strip()
        return collapse_whitespace(element.get_text(" ", strip=True)) or None
    return lookup


def absolute_attr_of(selector: str, attribute: str) -> Lookup:
    """Attribute value of the first match, only when it is an absolute URL."""
    def lookup(region: Tag) -> Optional[str]:
        element = region.select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        if isinstance(value, str) and is_absolute_url(value.strip()):
            return value.strip()
        return None
    return lookup


def first_match(region: Tag, lookups: Iterable[Lookup]) -> Optional[str]:
    """Run lookups in order and return the first non-empty result."""
    for lookup in lookups:
        value = lookup(region)
        if value:
            return value
    return None


# =============================================================================
# Field Cascades
# =============================================================================

TITLE_LOOKUPS: tuple[Lookup, ...] = (
    text_of("h2 a span"),
    text_of('[data-cy="title-recipe-title"]'),
    text_of(".a-size-mini span"),
)

RATING_LOOKUPS: tuple[Lookup, ...] = (
    label_or_text_of(".a-icon-alt"),
    label_or_text_of('[aria-label*="star"]'),
)

REVIEW_COUNT_LOOKUPS: tuple[Lookup, ...] = (
    text_of('a[href*="#customerReviews"] span'),
    text_of(".a-size-base"),
)

IMAGE_LOOKUPS: tuple[Lookup, ...] = (
    absolute_attr_of("img", "src"),
    absolute_attr_of("img", "data-src"),
)


# =============================================================================
# Extractor
# =============================================================================

@dataclass(frozen=True)
class ProductCandidate:
    """Normalized fields of one region before the accept/reject decision."""
    title: str
    rating: Rating
    review_count: int
    image_url: str

    @property
    def is_acceptable(self) -> bool:
        # Title is the only required field.
        return self.title != TITLE_NOT_FOUND

    def to_record(self, sequence_id: int) -> ProductRecord:
        return ProductRecord(
            sequence_id=sequence_id,
            title=self.title,
            rating=self.rating,
            review_count=self.review_count,
            image_url=self.image_url,
        )


class ProductExtractor:
    """Builds product records from search result regions."""

    def __init__(
        self,
        max_title_length: int = MAX_TITLE_LENGTH,
        image_suffix: str = IMAGE_SIZE_SUFFIX,
    ):
        # Records reject titles longer than MAX_TITLE_LENGTH.
        self.max_title_length = min(max_title_length, MAX_TITLE_LENGTH)
        self.image_suffix = image_suffix

    def extract_candidate(self, region: Tag) -> ProductCandidate:
        """Apply every field cascade and normalizer to a region."""
        return ProductCandidate(
            title=normalize_title(
                first_match(region, TITLE_LOOKUPS),
                max_length=self.max_title_length,
            ),
            rating=normalize_rating(first_match(region, RATING_LOOKUPS)),
            review_count=normalize_review_count(first_match(region, REVIEW_COUNT_LOOKUPS)),
            image_url=normalize_image_url(
                first_match(region, IMAGE_LOOKUPS),
                suffix=self.image_suffix,
            ),
        )

    def extract(self, region: Tag, index: int) -> Optional[ProductRecord]:
        """
        Extract a product record from one region.

        Args:
            region: DOM subtree of a single listing.
            index: Zero-based position of the region in the document.

        Returns:
            A record numbered ``index + 1``, or ``None`` if the region has
            no title or could not be processed.
        """
        try:
            candidate = self.extract_candidate(region)
        except Exception as e:
            logger.warning(
                "Failed to extract product region",
                region_index=index,
                error=str(e),
            )
            return None

        if not candidate.is_acceptable:
            logger.debug("Region skipped: no title", region_index=index)
            return None

        try:
            return candidate.to_record(sequence_id=index + 1)
        except ValidationError as e:
            logger.warning(
                "Product record failed validation",
                region_index=index,
                error=str(e),
            )
            return None
