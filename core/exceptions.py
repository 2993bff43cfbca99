"""
Exceptions for the summarization pipeline.

Every error carries the HTTP status the hosting layer reports for it.

Exception Hierarchy:
    SummarizerError (500)
    ├── InvalidInputError (400)           - input is not a non-empty string
    ├── TextValidationError (400)         - length / content density bounds
    ├── UnknownLengthProfileError (400)   - unknown length preference
    ├── SummarizationDeadlineError (408)  - pipeline deadline exceeded
    ├── ResponseParseError (500)          - model output unusable
    │   ├── InvalidResponseFormatError
    │   └── InsufficientBulletsError
    └── CompletionError (500)             - upstream completion service
        ├── AuthenticationError (401)
        ├── RateLimitedError (429)
        ├── BadRequestError (500)
        ├── CompletionTimeoutError (408)
        ├── ServiceUnavailableError (502)
        └── NetworkError (502)
"""

from typing import List, Optional


class SummarizerError(Exception):
    """Base exception for all summarizer errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status reported by the API layer
    """

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(SummarizerError):
    """Raised when text to normalize is not a non-empty string."""

    status_code = 400


class TextValidationError(SummarizerError):
    """Raised when cleaned text fails length or content checks.

    Attributes:
        errors: Ordered validation messages from validate_text
    """

    status_code = 400

    def __init__(self, errors: List[str], message: str = "Text validation failed"):
        self.errors = list(errors)
        super().__init__(message)


class UnknownLengthProfileError(SummarizerError):
    """Raised when a length preference has no configured profile."""

    status_code = 400

    def __init__(self, length: str):
        self.length = length
        super().__init__(f"Invalid summary length: {length}")


class SummarizationDeadlineError(SummarizerError):
    """Raised when the whole pipeline runs past its configured deadline."""

    status_code = 408


class ResponseParseError(SummarizerError):
    """Base for model output that cannot be turned into a summary."""


class InvalidResponseFormatError(ResponseParseError):
    """Raised when the model returned empty or non-string content."""

    def __init__(self, message: str = "Invalid response format"):
        super().__init__(message)


class InsufficientBulletsError(ResponseParseError):
    """Raised when fewer than the minimum usable bullets could be extracted."""

    def __init__(self, found: int, required: int = 3):
        self.found = found
        self.required = required
        super().__init__(
            f"Insufficient bullet points generated ({found} usable, {required} required)"
        )


class CompletionError(SummarizerError):
    """Base for failures talking to the completion service.

    Attributes:
        upstream_status: HTTP status returned by the service, if any
    """

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(message)


class AuthenticationError(CompletionError):
    """Invalid API key or authentication failed."""

    status_code = 401


class RateLimitedError(CompletionError):
    """Upstream rate limit exceeded."""

    status_code = 429


class BadRequestError(CompletionError):
    """Upstream rejected the request as malformed."""


class CompletionTimeoutError(CompletionError):
    """Upstream did not answer within the request timeout."""

    status_code = 408


class ServiceUnavailableError(CompletionError):
    """Upstream returned a server error."""

    status_code = 502


class NetworkError(CompletionError):
    """Upstream could not be reached."""

    status_code = 502
