"""
Core Validators

Validation functions shared by the summarization pipeline.
"""

import re
from dataclasses import dataclass, field
from typing import List

_NON_CONTENT = re.compile(r"[\s\W]", re.UNICODE)

# Share of min_length that must be letters or digits
MEANINGFUL_CONTENT_RATIO = 0.5


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_text."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def validate_text(text, min_length: int = 50, max_length: int = 15000) -> ValidationResult:
    """
    Validate text length and content density.

    Never raises; callers decide how to surface the errors.

    Args:
        text: Text to validate (any value is accepted)
        min_length: Minimum allowed characters
        max_length: Maximum allowed characters

    Returns:
        ValidationResult with is_valid and ordered error messages
    """
    errors: List[str] = []

    if not text or not isinstance(text, str):
        errors.append("Text must be a non-empty string")
        return ValidationResult(is_valid=False, errors=errors)

    if len(text) < min_length:
        errors.append(f"Text must be at least {min_length} characters long")
    if len(text) > max_length:
        errors.append(f"Text must be no more than {max_length} characters long")

    # Technically long but only whitespace/punctuation
    meaningful_chars = len(_NON_CONTENT.sub("", text))
    if meaningful_chars < min_length * MEANINGFUL_CONTENT_RATIO:
        errors.append("Text must contain meaningful content")

    return ValidationResult(is_valid=not errors, errors=errors)
