"""
Summarization Module

Turns long-form prose into 3-7 bullet points plus a short TL;DR:
- Cleans, deduplicates and validates the input text
- Splits long text into sentence-aligned chunks
- Summarizes each chunk, then summarizes the chunk summaries (map-reduce)
- Parses model output with layered fallbacks

Length preferences:
- short: Brief overview with key points
- medium: Balanced summary with context
- long: Comprehensive summary with details
"""

from .service import router
from .summarizer import (
    Summarizer,
    SummarizerConfig,
    summarize_text,
    create_fallback_summary,
)
from .text_cleaner import clean_text, deduplicate_content
from .chunker import chunk_text, split_sentences
from .prompts import PromptBuilder
from .response_parser import ResponseParser
from .schemas import (
    TextSummarizationRequest,
    SummarizationResponse,
    AggregateResult,
    SummaryResult,
    SummaryPayload,
    Chunk,
    LengthProfile,
    LengthPreference,
    LENGTH_PROFILES,
)

__all__ = [
    # Router
    "router",
    # Pipeline
    "Summarizer",
    "SummarizerConfig",
    "summarize_text",
    "create_fallback_summary",
    "clean_text",
    "deduplicate_content",
    "chunk_text",
    "split_sentences",
    "PromptBuilder",
    "ResponseParser",
    # Schemas
    "TextSummarizationRequest",
    "SummarizationResponse",
    "AggregateResult",
    "SummaryResult",
    "SummaryPayload",
    "Chunk",
    "LengthProfile",
    "LengthPreference",
    "LENGTH_PROFILES",
]
