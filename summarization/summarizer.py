"""
Hierarchical bullet summarization.

Handles inputs larger than one context budget using a map-reduce approach:
1. Split cleaned text into sentence-aligned chunks
2. Summarize each chunk with the short profile (MAP phase)
3. Summarize the combined chunk TL;DRs with the requested profile (REDUCE phase)

Text that fits in one chunk is summarized directly with a single call.
"""
import time
import asyncio
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional

from core.exceptions import (
    ResponseParseError,
    SummarizationDeadlineError,
    TextValidationError,
)
from core.llm_client_base import CompletionClient
from core.validators import validate_text
from logs.logging_config import get_llm_logger
from .config import (
    SUMMARIZATION_DEFAULT_MODEL,
    SUMMARIZATION_MIN_TEXT_LENGTH,
    SUMMARIZATION_MAX_TEXT_LENGTH,
    SUMMARIZATION_CHUNK_SIZE,
    SUMMARIZATION_CHUNK_LENGTH,
    SUMMARIZATION_FALLBACK_BULLETS,
    SUMMARIZATION_MAP_CONCURRENT,
    SUMMARIZATION_DEADLINE_SECONDS,
)
from .chunker import chunk_text, split_sentences
from .prompts import PromptBuilder
from .response_parser import ResponseParser, MAX_TLDR_WORDS, MIN_SENTENCE_CHARS, TLDR_UNAVAILABLE
from .schemas import (
    AggregateResult,
    Chunk,
    LengthProfile,
    SummaryResult,
    LENGTH_PROFILES,
)
from .text_cleaner import clean_text, deduplicate_content

logger = get_llm_logger()

FALLBACK_BULLET = "Content summary not available"


@dataclass(frozen=True)
class SummarizerConfig:
    """Configuration for bullet summarization. Built once and shared read-only."""
    model: str = SUMMARIZATION_DEFAULT_MODEL
    min_text_length: int = SUMMARIZATION_MIN_TEXT_LENGTH
    max_text_length: int = SUMMARIZATION_MAX_TEXT_LENGTH
    chunk_size: int = SUMMARIZATION_CHUNK_SIZE
    chunk_length: str = SUMMARIZATION_CHUNK_LENGTH
    length_profiles: Mapping[str, LengthProfile] = field(default_factory=lambda: LENGTH_PROFILES)
    fallback_bullets: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(SUMMARIZATION_FALLBACK_BULLETS))
    )
    max_concurrent: int = SUMMARIZATION_MAP_CONCURRENT
    deadline_seconds: float = SUMMARIZATION_DEADLINE_SECONDS


def create_fallback_summary(text: str, length: str, fallback_bullets: Mapping[str, int] = None) -> SummaryResult:
    """
    Build a summary locally from the first sentences of the text.

    Used when the model's final answer cannot be parsed.
    """
    counts = fallback_bullets or SUMMARIZATION_FALLBACK_BULLETS
    sentences = [s for s in split_sentences(text) if len(s) > MIN_SENTENCE_CHARS]
    bullets = sentences[:counts.get(length, 5)]

    tldr = ". ".join(sentences[:2]).strip()
    tldr = ResponseParser._truncate_words(f"{tldr}.", MAX_TLDR_WORDS) if tldr else TLDR_UNAVAILABLE

    return SummaryResult(
        bullets=tuple(bullets) if bullets else (FALLBACK_BULLET,),
        tldr=tldr,
        tokens_used=None,
        model="",
    )


class Summarizer:
    """
    Orchestrates prompt building, completion calls and parsing.

    The completion client is injected so tests can substitute a stub.
    """

    def __init__(
        self,
        client: CompletionClient,
        config: Optional[SummarizerConfig] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.client = client
        self.config = config or SummarizerConfig()
        self.prompt_builder = prompt_builder or PromptBuilder(self.config.length_profiles)
        self.response_parser = response_parser or ResponseParser()

    async def summarize_chunk(self, text: str, length: str, label: str = "direct") -> SummaryResult:
        """Run one prompt → completion → parse pass."""
        prompt = self.prompt_builder.build_prompt(text, length)
        completion = await self.client.complete(prompt)
        payload = self.response_parser.parse(completion.content, label=label)

        logger.info(
            f"[SUMMARIZE] {label} | bullets={len(payload.bullets)} | "
            f"tldr_chars={len(payload.tldr)} | tokens={completion.usage_tokens}"
        )
        return SummaryResult(
            bullets=payload.bullets,
            tldr=payload.tldr,
            tokens_used=completion.usage_tokens,
            model=completion.model,
        )

    async def summarize(
        self,
        cleaned_text: str,
        length: str,
        original_length: Optional[int] = None,
    ) -> AggregateResult:
        """
        Summarize cleaned text, using map-reduce when it spans several chunks.

        Args:
            cleaned_text: Normalized, deduplicated, validated text
            length: short, medium or long
            original_length: Characters in the text before cleaning

        Returns:
            AggregateResult; fallback=True when the final answer could not be parsed
        """
        start_time = time.monotonic()
        deadline = start_time + self.config.deadline_seconds if self.config.deadline_seconds > 0 else None

        # Fail on an unknown length before any completion call
        self.prompt_builder.get_profile(length)

        chunks = chunk_text(cleaned_text, self.config.chunk_size)
        logger.info(f"[SUMMARIZE] START | chars={len(cleaned_text)} | chunks={len(chunks)} | length={length}")

        if len(chunks) == 1:
            final_text = chunks[0].content
        else:
            logger.info(f"[SUMMARIZE] Using HIERARCHICAL method (map-reduce) | chunks={len(chunks)}")
            map_start = time.monotonic()
            chunk_results = await self._map_chunks(chunks, deadline)
            logger.info(f"[SUMMARIZE] MAP_PHASE | elapsed={time.monotonic() - map_start:.2f}s")
            final_text = "\n\n".join(
                f"Chunk {i + 1}: {result.tldr}" for i, result in enumerate(chunk_results)
            )
            self._check_deadline(deadline, "final")

        fallback = False
        try:
            result = await self.summarize_chunk(final_text, length, label="final")
        except ResponseParseError as e:
            logger.warning(f"[SUMMARIZE] Final pass unparseable; using fallback summary | error={e}")
            result = create_fallback_summary(cleaned_text, length, self.config.fallback_bullets)
            fallback = True

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"[SUMMARIZE] END | chunks={len(chunks)} | bullets={len(result.bullets)} | "
            f"fallback={fallback} | elapsed={elapsed_ms}ms"
        )

        return AggregateResult(
            bullets=result.bullets,
            tldr=result.tldr,
            tokens_used=result.tokens_used,
            model=result.model or self.config.model,
            length=length,
            chunks_processed=len(chunks),
            original_length=len(cleaned_text) if original_length is None else original_length,
            cleaned_length=len(cleaned_text),
            processing_time_ms=elapsed_ms,
            fallback=fallback,
        )

    async def _map_chunks(self, chunks: List[Chunk], deadline: Optional[float]) -> List[SummaryResult]:
        """
        Summarize every chunk with the chunk profile, results in chunk order.

        Any chunk failure aborts the whole map phase.
        """
        total = len(chunks)
        length = self.config.chunk_length

        if self.config.max_concurrent <= 1:
            results = []
            for chunk in chunks:
                self._check_deadline(deadline, f"chunk_{chunk.index + 1}")
                results.append(
                    await self.summarize_chunk(chunk.content, length, label=f"chunk_{chunk.index + 1}_of_{total}")
                )
            return results

        logger.info(f"[ASYNC_MAP] START | chunks={total} | max_concurrent={self.config.max_concurrent}")
        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        async def process_single_chunk(chunk: Chunk) -> SummaryResult:
            async with semaphore:
                self._check_deadline(deadline, f"chunk_{chunk.index + 1}")
                return await self.summarize_chunk(
                    chunk.content, length, label=f"chunk_{chunk.index + 1}_of_{total}"
                )

        tasks = [asyncio.ensure_future(process_single_chunk(chunk)) for chunk in chunks]
        try:
            _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        if pending:
            # Let cancelled chunks unwind before reporting the failure
            await asyncio.gather(*pending, return_exceptions=True)
            logger.warning(f"[ASYNC_MAP] Cancelled {len(pending)} pending chunks after a failure")

        # Tasks are kept in submission order, so labels follow input order
        for chunk, task in zip(chunks, tasks):
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"[ASYNC_MAP] Chunk {chunk.index + 1}/{total} failed: {task.exception()}")
                raise task.exception()

        logger.info(f"[ASYNC_MAP] END | all {total} chunks completed")
        return [task.result() for task in tasks]

    @staticmethod
    def _check_deadline(deadline: Optional[float], stage: str) -> None:
        if deadline is not None and time.monotonic() > deadline:
            logger.error(f"[SUMMARIZE] Deadline exceeded before {stage}")
            raise SummarizationDeadlineError(f"Summarization deadline exceeded before {stage}")


async def summarize_text(text: str, length: str, summarizer: Summarizer) -> AggregateResult:
    """
    Full pipeline: clean → deduplicate → validate → summarize.

    Raises:
        InvalidInputError: text is not a non-empty string
        TextValidationError: cleaned text fails length/content checks
    """
    cleaned = deduplicate_content(clean_text(text))

    config = summarizer.config
    validation = validate_text(cleaned, config.min_text_length, config.max_text_length)
    if not validation.is_valid:
        logger.warning(f"[VALIDATION] Rejected | cleaned_chars={len(cleaned)} | errors={validation.errors}")
        raise TextValidationError(validation.errors)

    return await summarizer.summarize(cleaned, length, original_length=len(text))
