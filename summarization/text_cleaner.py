"""
Text cleaning and normalization for summarization input.
"""
import re

from core.exceptions import InvalidInputError

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_MARKUP_TAG = re.compile(r"<[^>]*>")
_AD_MARKERS = re.compile(r"\[(?:ad|advertisement|sponsored)\]", re.IGNORECASE)
_BOILERPLATE = re.compile(
    r"\b(?:follow\s+us\s+on|subscribe\s+to|click\s+here|read\s+more)\b",
    re.IGNORECASE,
)
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

_GLYPHS = {
    "“": '"', "”": '"', "„": '"', "‟": '"',
    "‘": "'", "’": "'", "‚": "'", "‛": "'",
    "…": "...",
}
_GLYPH_TABLE = str.maketrans(_GLYPHS)

_ELLIPSIS_RUN = re.compile(r"\.{3,}")
_EXCLAMATION_RUN = re.compile(r"!{2,}")
_QUESTION_RUN = re.compile(r"\?{2,}")

# Minimum characters in a line's key for the line to be kept
MIN_LINE_KEY_LENGTH = 11


def _strip_markup(text: str) -> str:
    """Remove tags and boilerplate until nothing more matches."""
    while True:
        stripped = _MARKUP_TAG.sub("", text)
        stripped = _AD_MARKERS.sub("", stripped)
        stripped = _BOILERPLATE.sub("", stripped)
        if stripped == text:
            return stripped
        text = stripped


def _collapse_whitespace(text: str) -> str:
    """Collapse whitespace to single spaces, keeping paragraph breaks."""
    paragraphs = (" ".join(p.split()) for p in _PARAGRAPH_BREAK.split(text))
    return "\n\n".join(p for p in paragraphs if p)


def clean_text(text: str) -> str:
    """
    Clean and normalize input text.

    Removes markup and boilerplate, canonicalizes quotes and ellipses,
    collapses repeated punctuation and whitespace. Applying it to its own
    output returns the same string.

    Args:
        text: Raw input text

    Returns:
        Cleaned text

    Raises:
        InvalidInputError: if text is not a non-empty string
    """
    if not text or not isinstance(text, str):
        raise InvalidInputError("Text must be a non-empty string")

    cleaned = _CONTROL_CHARS.sub("", text)
    cleaned = _strip_markup(cleaned)

    cleaned = cleaned.translate(_GLYPH_TABLE)
    cleaned = _ELLIPSIS_RUN.sub("...", cleaned)
    cleaned = _EXCLAMATION_RUN.sub("!", cleaned)
    cleaned = _QUESTION_RUN.sub("?", cleaned)

    return _collapse_whitespace(cleaned).strip()


def deduplicate_content(text: str) -> str:
    """
    Drop repeated and trivially short lines, keeping first occurrences in order.

    Lines are compared trimmed and lower-cased.
    """
    seen = set()
    unique_lines = []

    for line in text.split("\n"):
        key = line.strip().lower()
        if len(key) < MIN_LINE_KEY_LENGTH or key in seen:
            continue
        seen.add(key)
        unique_lines.append(line)

    return "\n".join(unique_lines)
