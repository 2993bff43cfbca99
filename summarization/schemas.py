"""
Schemas for bullet summarization.

Internal pipeline values are frozen dataclasses; the HTTP boundary uses
pydantic models serialized with camelCase keys.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Literal, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import (
    SUMMARIZATION_DEFAULT_LENGTH,
    SUMMARIZATION_LENGTH_SETTINGS,
    SUMMARIZATION_MIN_TEXT_LENGTH,
    SUMMARIZATION_MAX_TEXT_LENGTH,
)

# Length preferences
LengthPreference = Literal["short", "medium", "long"]


# =========================
# Pipeline values
# =========================

@dataclass(frozen=True)
class LengthProfile:
    """Target size of a summary for one length preference."""
    word_target: int
    max_tokens: int
    description: str


def build_length_profiles(settings: Mapping[str, Mapping] = SUMMARIZATION_LENGTH_SETTINGS) -> Mapping[str, LengthProfile]:
    """Build the read-only length profile table from configuration."""
    return MappingProxyType({
        name: LengthProfile(
            word_target=int(values["word_target"]),
            max_tokens=int(values["max_tokens"]),
            description=str(values["description"]),
        )
        for name, values in settings.items()
    })


# Process-wide profiles, fixed at import
LENGTH_PROFILES = build_length_profiles()


@dataclass(frozen=True)
class Chunk:
    """A sentence-aligned slice of cleaned text."""
    index: int
    content: str


@dataclass(frozen=True)
class SummaryPayload:
    """Bullets and TL;DR extracted from one model response."""
    bullets: Tuple[str, ...]
    tldr: str


@dataclass(frozen=True)
class SummaryResult:
    """Result of one summarization pass."""
    bullets: Tuple[str, ...]
    tldr: str
    tokens_used: Optional[int]
    model: str


@dataclass(frozen=True)
class AggregateResult:
    """Final summary plus provenance metadata."""
    bullets: Tuple[str, ...]
    tldr: str
    tokens_used: Optional[int]
    model: str
    length: str
    chunks_processed: int
    original_length: int
    cleaned_length: int
    processing_time_ms: int
    fallback: bool = False


# =========================
# HTTP boundary
# =========================

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TextSummarizationRequest(BaseModel):
    """Summarization request body."""
    text: str = Field(
        ...,
        description="Text to summarize",
        min_length=SUMMARIZATION_MIN_TEXT_LENGTH,
        max_length=SUMMARIZATION_MAX_TEXT_LENGTH,
    )
    length: LengthPreference = Field(SUMMARIZATION_DEFAULT_LENGTH, description="Summary length preference")
    request_id: Optional[str] = Field(
        None,
        max_length=128,
        validation_alias=AliasChoices("request_id", "requestId"),
        description="Client correlation id; defaults to the X-Request-ID header",
    )


class SummaryMeta(_CamelModel):
    """Provenance metadata of a summary."""
    tokens_used: Optional[int] = Field(None, description="Tokens used by the final completion call")
    model: str = Field(..., description="Model that produced the summary")
    length: str = Field(..., description="Requested length preference")
    processing_time: int = Field(..., description="Processing time in milliseconds")
    original_length: int = Field(..., description="Characters in the submitted text")
    cleaned_length: int = Field(..., description="Characters after cleaning")
    chunks_processed: int = Field(..., description="Number of chunks summarized")
    fallback: bool = Field(False, description="True when the summary was built locally")


class SummaryData(_CamelModel):
    bullets: List[str]
    tldr: str
    meta: SummaryMeta


class SummarizationResponse(_CamelModel):
    """Successful summarization envelope."""
    success: bool = True
    data: SummaryData

    @classmethod
    def from_result(cls, result: AggregateResult) -> "SummarizationResponse":
        return cls(
            data=SummaryData(
                bullets=list(result.bullets),
                tldr=result.tldr,
                meta=SummaryMeta(
                    tokens_used=result.tokens_used,
                    model=result.model,
                    length=result.length,
                    processing_time=result.processing_time_ms,
                    original_length=result.original_length,
                    cleaned_length=result.cleaned_length,
                    chunks_processed=result.chunks_processed,
                    fallback=result.fallback,
                ),
            )
        )
