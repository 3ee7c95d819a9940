"""
Field normalizers for extracted product data.

Each function takes the raw text found by a lookup (or ``None`` when no
lookup matched) and returns a clean value or the field's default. None of
them raise on malformed input.
"""

import re
from typing import Optional

from marketplace_scraper.models.schemas import (
    MAX_RATING,
    MAX_TITLE_LENGTH,
    MIN_RATING,
    NOT_AVAILABLE,
    TITLE_NOT_FOUND,
    Rating,
)

RATING_PATTERN = re.compile(r"\d+(?:\.\d+)?")
# Comma-grouped thousands ("1,234") first, then a plain digit run.
REVIEW_COUNT_PATTERN = re.compile(r"\(?(\d{1,3}(?:,\d{3})+|\d+)\)?")
WHITESPACE_PATTERN = re.compile(r"\s+")

IMAGE_SIZE_DELIMITER = "._"
IMAGE_SIZE_SUFFIX = "._AC_UL320_.jpg"


def collapse_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim."""
    if not text:
        return ""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_title(text: Optional[str], max_length: int = MAX_TITLE_LENGTH) -> str:
    """Trim and truncate a title, or return the not-found fallback."""
    cleaned = collapse_whitespace(text)
    if not cleaned:
        return TITLE_NOT_FOUND
    return cleaned[:max_length].rstrip()


def normalize_rating(text: Optional[str]) -> Rating:
    """
    Pull the first decimal number out of a rating label.

    "4.5 out of 5 stars" -> 4.5. Text without a number, or a number outside
    the star range, yields the "N/A" sentinel.
    """
    if not text:
        return NOT_AVAILABLE
    match = RATING_PATTERN.search(text)
    if not match:
        return NOT_AVAILABLE
    try:
        value = float(match.group(0))
    except ValueError:
        return NOT_AVAILABLE
    if not MIN_RATING <= value <= MAX_RATING:
        return NOT_AVAILABLE
    return value


def normalize_review_count(text: Optional[str]) -> int:
    """Parse "(1,234)" style review counts. Anything unparseable is 0."""
    if not text:
        return 0
    match = REVIEW_COUNT_PATTERN.search(text)
    if not match:
        return 0
    digits = match.group(1).replace(",", "")
    try:
        return max(int(digits), 0)
    except ValueError:
        return 0


def is_absolute_url(value: Optional[str]) -> bool:
    return bool(value) and value.startswith(("http://", "https://"))


def normalize_image_url(
    url: Optional[str],
    suffix: str = IMAGE_SIZE_SUFFIX,
) -> str:
    """
    Rewrite an image URL to a single canonical size/quality suffix.

    Everything from the first ``._`` onward is dropped. When the URL has no
    size segment, the query string, fragment and file extension are dropped
    instead, so the result never carries two extensions. Relative or missing
    URLs yield the "N/A" sentinel.
    """
    if not is_absolute_url(url):
        return NOT_AVAILABLE
    url = url.strip()

    if IMAGE_SIZE_DELIMITER in url:
        base = url.split(IMAGE_SIZE_DELIMITER, 1)[0]
    else:
        base = url.split("?", 1)[0].split("#", 1)[0]
        head, _, filename = base.rpartition("/")
        if "." in filename:
            filename = filename.rsplit(".", 1)[0]
        base = f"{head}/{filename}"

    return base + suffix
