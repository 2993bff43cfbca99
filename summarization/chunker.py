"""
Sentence-aligned chunking for long inputs.
"""
import re
from typing import List

from logs.logging_config import get_llm_logger
from .config import SUMMARIZATION_CHUNK_SIZE
from .schemas import Chunk

logger = get_llm_logger()

SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
SENTENCE_JOINER = ". "


def split_sentences(text: str) -> List[str]:
    """Split text on runs of '.', '!' and '?', dropping empty pieces."""
    return [s.strip() for s in SENTENCE_DELIMITERS.split(text) if s.strip()]


def chunk_text(text: str, max_chunk_size: int = SUMMARIZATION_CHUNK_SIZE) -> List[Chunk]:
    """
    Split text into chunks of at most max_chunk_size characters.

    Text that already fits is returned whole. Otherwise sentences are packed
    greedily, joined with ". ". A sentence is never cut: one longer than the
    cap becomes its own oversized chunk.

    Args:
        text: Cleaned text
        max_chunk_size: Character budget per chunk

    Returns:
        Ordered, non-empty list of chunks
    """
    if len(text) <= max_chunk_size:
        return [Chunk(index=0, content=text)]

    pieces: List[str] = []
    current = ""

    for sentence in split_sentences(text):
        if current and len(current) + len(SENTENCE_JOINER) + len(sentence) > max_chunk_size:
            pieces.append(current)
            current = sentence
        else:
            current = f"{current}{SENTENCE_JOINER}{sentence}" if current else sentence

    if current:
        pieces.append(current)

    if not pieces:
        # Nothing but delimiters; keep the text as a single chunk
        return [Chunk(index=0, content=text)]

    oversized = sum(1 for p in pieces if len(p) > max_chunk_size)
    logger.debug(
        f"[CHUNKING] chars={len(text)} | max_chunk_size={max_chunk_size} | "
        f"chunks={len(pieces)} | oversized={oversized}"
    )

    return [Chunk(index=i, content=piece) for i, piece in enumerate(pieces)]
