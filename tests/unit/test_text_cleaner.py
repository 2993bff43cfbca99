import pytest

from core.exceptions import InvalidInputError
from summarization.text_cleaner import clean_text, deduplicate_content


def test_clean_text_strips_markup_and_keeps_paragraphs():
    raw = "<p>Hello   world</p>\n\n\n   <b>Next</b> paragraph\there"
    assert clean_text(raw) == "Hello world\n\nNext paragraph here"


def test_clean_text_canonicalizes_glyphs_and_punctuation():
    raw = "“Quoted” it’s… fine!!! really??"
    assert clean_text(raw) == "\"Quoted\" it's... fine! really?"


def test_clean_text_collapses_long_ellipsis_runs():
    assert clean_text("Wait..... what") == "Wait... what"


def test_clean_text_removes_ads_and_boilerplate():
    raw = "Click here to read the article. [Ad] Subscribe to our newsletter."
    assert clean_text(raw) == "to read the article. our newsletter."


def test_clean_text_removes_control_characters():
    assert clean_text("abc\x00def\x07 ghi") == "abcdef ghi"


def test_clean_text_removes_boilerplate_revealed_by_removal():
    cleaned = clean_text("Intro text. Click click here here. Outro text.")
    assert "click" not in cleaned.lower()
    assert cleaned.startswith("Intro text.")
    assert cleaned.endswith("Outro text.")


@pytest.mark.parametrize(
    "raw",
    [
        "<div>Some <i>nested</i> markup</div>\n\n\n[Sponsored] Follow us on social media!!",
        "Click click here here.  “Quotes”… and ....... dots??",
        "Line one\n\n\n\nLine two with  spaces\x0b and tabs\t\t",
    ],
)
def test_clean_text_is_idempotent(raw):
    once = clean_text(raw)
    assert clean_text(once) == once


@pytest.mark.parametrize("bad", ["", None, 123])
def test_clean_text_rejects_non_text(bad):
    with pytest.raises(InvalidInputError) as exc_info:
        clean_text(bad)
    assert exc_info.value.status_code == 400


def test_deduplicate_keeps_first_occurrence_case_insensitively():
    text = "Line one is here\n  line one is HERE  \nshort\nAnother line of text"
    assert deduplicate_content(text) == "Line one is here\nAnother line of text"


def test_deduplicate_drops_lines_with_short_keys():
    text = "abcdefghij\nabcdefghijk\n   \n"
    assert deduplicate_content(text) == "abcdefghijk"


def test_deduplicate_preserves_order():
    lines = ["Third line of the text", "First line of the text", "Second line of the text"]
    assert deduplicate_content("\n".join(lines + lines)) == "\n".join(lines)
