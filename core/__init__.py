"""
Core Module

Shared infrastructure components:
- LLM completion client
- Exception taxonomy
- Validators
"""

from .llm_client_base import (
    BaseLLMClient,
    LLMConfig,
    Prompt,
    CompletionResult,
    CompletionClient,
)
from .validators import ValidationResult, validate_text
from .exceptions import (
    SummarizerError,
    InvalidInputError,
    TextValidationError,
    UnknownLengthProfileError,
    SummarizationDeadlineError,
    ResponseParseError,
    InvalidResponseFormatError,
    InsufficientBulletsError,
    CompletionError,
    AuthenticationError,
    RateLimitedError,
    BadRequestError,
    CompletionTimeoutError,
    ServiceUnavailableError,
    NetworkError,
)

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "Prompt",
    "CompletionResult",
    "CompletionClient",
    "ValidationResult",
    "validate_text",
    "SummarizerError",
    "InvalidInputError",
    "TextValidationError",
    "UnknownLengthProfileError",
    "SummarizationDeadlineError",
    "ResponseParseError",
    "InvalidResponseFormatError",
    "InsufficientBulletsError",
    "CompletionError",
    "AuthenticationError",
    "RateLimitedError",
    "BadRequestError",
    "CompletionTimeoutError",
    "ServiceUnavailableError",
    "NetworkError",
]
