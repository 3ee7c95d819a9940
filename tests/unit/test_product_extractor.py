import pytest
from unittest.mock import patch
from bs4 import BeautifulSoup

from marketplace_scraper.extractors.product_extractor import (
    ProductCandidate,
    ProductExtractor,
    first_match,
    text_of,
    label_or_text_of,
    absolute_attr_of,
)
from marketplace_scraper.models.schemas import NOT_AVAILABLE, TITLE_NOT_FOUND, ProductRecord


def region(html: str):
    return BeautifulSoup(f"<div class='region'>{html}</div>", "html.parser").div


@pytest.fixture
def extractor():
    return ProductExtractor()


# =============================================================================
# Lookups
# =============================================================================

def test_first_match_stops_at_first_hit():
    r = region("<span class='b'>second</span><span class='c'>third</span>")
    calls = []

    def tracking(selector):
        lookup = text_of(selector)
        def wrapped(reg):
            calls.append(selector)
            return lookup(reg)
        return wrapped

    value = first_match(r, [tracking(".a"), tracking(".b"), tracking(".c")])
    assert value == "second"
    assert calls == [".a", ".b"]

def test_first_match_none_when_all_miss():
    assert first_match(region("<p></p>"), [text_of(".x"), text_of(".y")]) is None

def test_text_of_empty_element_is_none():
    assert text_of("span")(region("<span>   </span>")) is None

def test_label_or_text_prefers_aria_label():
    r = region('<i class="star" aria-label="4.2 out of 5 stars">4.0</i>')
    assert label_or_text_of(".star")(r) == "4.2 out of 5 stars"

def test_label_or_text_falls_back_to_text():
    r = region('<i class="star" aria-label="  ">3.0 out of 5</i>')
    assert label_or_text_of(".star")(r) == "3.0 out of 5"

def test_absolute_attr_rejects_relative():
    r = region('<img src="/img/a.jpg">')
    assert absolute_attr_of("img", "src")(r) is None


# =============================================================================
# Title
# =============================================================================

def test_title_primary_location(extractor):
    r = region('<h2><a href="#"><span>Primary Title</span></a></h2>'
               '<div data-cy="title-recipe-title">Secondary</div>')
    assert extractor.extract(r, 0).title == "Primary Title"

def test_title_secondary_location(extractor):
    r = region('<div data-cy="title-recipe-title"><span>Secondary Title</span></div>'
               '<div class="a-size-mini"><span>Tertiary</span></div>')
    assert extractor.extract(r, 0).title == "Secondary Title"

def test_title_tertiary_location(extractor):
    r = region('<div class="a-size-mini"><span>Tertiary Title</span></div>')
    assert extractor.extract(r, 0).title == "Tertiary Title"

def test_title_skips_empty_primary(extractor):
    r = region('<h2><a href="#"><span>  </span></a></h2>'
               '<div class="a-size-mini"><span>Fallback</span></div>')
    assert extractor.extract(r, 0).title == "Fallback"

def test_title_truncated(extractor):
    r = region(f'<h2><a href="#"><span>{"T" * 300}</span></a></h2>')
    assert len(extractor.extract(r, 0).title) == 200

def test_title_custom_max_length():
    extractor = ProductExtractor(max_title_length=10)
    r = region('<h2><a href="#"><span>A very long product title</span></a></h2>')
    assert extractor.extract(r, 0).title == "A very lon"

def test_title_length_above_ceiling_is_clamped():
    extractor = ProductExtractor(max_title_length=250)
    r = region(f'<h2><a href="#"><span>{"T" * 230}</span></a></h2>')

    record = extractor.extract(r, 0)

    assert record is not None
    assert len(record.title) == 200

def test_region_without_title_is_rejected(extractor):
    r = region('<span class="a-icon-alt">4.5 out of 5 stars</span>'
               '<img src="https://m.media-amazon.com/images/I/x._AC_.jpg">')
    assert extractor.extract(r, 0) is None

def test_candidate_without_title_not_acceptable(extractor):
    candidate = extractor.extract_candidate(region("<p>nothing</p>"))
    assert candidate.title == TITLE_NOT_FOUND
    assert candidate.is_acceptable is False


# =============================================================================
# Other Fields
# =============================================================================

def test_full_record(extractor):
    r = region("""
        <img src="https://m.media-amazon.com/images/I/61abc._AC_UY218_.jpg">
        <h2><a href="/dp/B0"><span>Mouse</span></a></h2>
        <span class="a-icon-alt">4.5 out of 5 stars</span>
        <a href="/dp/B0#customerReviews"><span>(1,234)</span></a>
    """)
    record = extractor.extract(r, 4)
    assert isinstance(record, ProductRecord)
    assert record.sequence_id == 5
    assert record.rating == 4.5
    assert record.review_count == 1234
    assert record.image_url == "https://m.media-amazon.com/images/I/61abc._AC_UL320_.jpg"

def test_missing_reviews_default_to_zero(extractor):
    r = region("""
        <h2><a href="#"><span>Mouse</span></a></h2>
        <span class="a-icon-alt">4.1 out of 5 stars</span>
    """)
    record = extractor.extract(r, 0)
    assert record.title == "Mouse"
    assert record.rating == 4.1
    assert record.review_count == 0

def test_rating_uses_aria_label_cascade(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>'
               '<span aria-label="3.7 out of 5 stars"></span>')
    assert extractor.extract(r, 0).rating == 3.7

def test_rating_without_number_is_sentinel(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>'
               '<span class="a-icon-alt">No ratings yet</span>')
    assert extractor.extract(r, 0).rating == NOT_AVAILABLE

def test_review_count_secondary_location(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>'
               '<span class="a-size-base">2,048</span>')
    assert extractor.extract(r, 0).review_count == 2048

def test_image_falls_back_to_data_src(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>'
               '<img src="data:image/gif;base64,AAAA" '
               'data-src="https://m.media-amazon.com/images/I/lazy._AC_UY218_.jpg">')
    assert extractor.extract(r, 0).image_url == "https://m.media-amazon.com/images/I/lazy._AC_UL320_.jpg"

def test_relative_image_is_sentinel(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2><img src="/images/I/x.jpg">')
    assert extractor.extract(r, 0).image_url == NOT_AVAILABLE

def test_missing_image_is_sentinel(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>')
    assert extractor.extract(r, 0).image_url == NOT_AVAILABLE


# =============================================================================
# Failure Isolation
# =============================================================================

def test_unexpected_error_drops_region(extractor):
    r = region('<h2><a href="#"><span>Mouse</span></a></h2>')
    with patch(
        "marketplace_scraper.extractors.product_extractor.normalize_rating",
        side_effect=RuntimeError("malformed"),
    ):
        assert extractor.extract(r, 0) is None

def test_candidate_to_record():
    candidate = ProductCandidate(title="Mouse", rating=NOT_AVAILABLE, review_count=0, image_url=NOT_AVAILABLE)
    record = candidate.to_record(sequence_id=3)
    assert record.sequence_id == 3
    assert record.has_rating is False
    assert record.has_image is False
