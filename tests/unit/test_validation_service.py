import pytest
from marketplace_scraper.services.validation_service import ValidationService, ValidationError

@pytest.fixture
def service():
    return ValidationService(min_keyword_length=2)

def test_two_character_keyword_accepted(service):
    assert service.validate_keyword("ab") == "ab"

def test_keyword_trimmed(service):
    assert service.validate_keyword("  wireless mouse ") == "wireless mouse"

def test_single_character_rejected(service):
    with pytest.raises(ValidationError) as exc:
        service.validate_keyword("a")
    assert exc.value.code == "KEYWORD_TOO_SHORT"
    assert "at least 2" in exc.value.message
    assert exc.value.details["min_length"] == 2

def test_padded_single_character_rejected(service):
    with pytest.raises(ValidationError) as exc:
        service.validate_keyword("  a  ")
    assert exc.value.code == "KEYWORD_TOO_SHORT"

@pytest.mark.parametrize("keyword", [None, "", "   "])
def test_missing_keyword(service, keyword):
    with pytest.raises(ValidationError) as exc:
        service.validate_keyword(keyword)
    assert exc.value.code == "MISSING_KEYWORD"

def test_custom_min_length():
    service = ValidationService(min_keyword_length=4)
    with pytest.raises(ValidationError):
        service.validate_keyword("abc")
    assert service.validate_keyword("abcd") == "abcd"
