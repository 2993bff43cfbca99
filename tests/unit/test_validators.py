from core.validators import validate_text


def test_valid_text_has_no_errors():
    result = validate_text("A perfectly ordinary paragraph with enough words to pass the checks.")
    assert result.is_valid is True
    assert result.errors == []


def test_non_string_input():
    result = validate_text(None)
    assert result.is_valid is False
    assert result.errors == ["Text must be a non-empty string"]


def test_short_text_reports_length_and_content():
    result = validate_text("hello")
    assert result.errors == [
        "Text must be at least 50 characters long",
        "Text must contain meaningful content",
    ]


def test_long_text_reports_maximum():
    result = validate_text("a" * 15001)
    assert result.errors == ["Text must be no more than 15000 characters long"]


def test_punctuation_only_text_is_not_meaningful():
    result = validate_text(". ! ? " * 20)
    assert result.is_valid is False
    assert result.errors == ["Text must contain meaningful content"]


def test_custom_bounds():
    assert validate_text("abcdefghij", min_length=5, max_length=10).is_valid
    assert not validate_text("abcdefghijk", min_length=5, max_length=10).is_valid


def test_minimum_length_boundary():
    assert validate_text("a" * 50).is_valid
    assert validate_text("a" * 49).errors == ["Text must be at least 50 characters long"]
