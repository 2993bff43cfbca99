"""Response parsing for bullet + TL;DR summaries."""
from __future__ import annotations

import re
from typing import List, Tuple

from core.exceptions import InvalidResponseFormatError, InsufficientBulletsError
from logs.logging_config import get_llm_logger
from .chunker import split_sentences
from .schemas import SummaryPayload

logger = get_llm_logger()

BULLET_GLYPHS = ("•", "-", "*")

MIN_BULLETS = 3
MAX_BULLETS = 7
# Bullet length must be strictly between these bounds
MIN_BULLET_CHARS = 10
MAX_BULLET_CHARS = 200
MIN_SENTENCE_CHARS = 10
MIN_TLDR_LINE_CHARS = 20
MAX_TLDR_LINES = 2
MAX_TLDR_WORDS = 60

TLDR_UNAVAILABLE = "Summary not available"

_BULLETS_HEADER = re.compile(r"^[*#\s]*bullets\s*:\**", re.IGNORECASE)
_TLDR_HEADER = re.compile(r"^[*#\s]*tl\s*;?\s*dr\s*:\**", re.IGNORECASE)
_DISCLAIMER = re.compile(
    r"\b(?:cannot|can't|can not|unable to|not able to)\b.*\b(?:summari[sz]e|provide|complete)",
    re.IGNORECASE,
)
_COMPLETE_SENTENCE = re.compile(r"^[A-Z].*[.!?][\"')\]]?$")


class ResponseParser:
    """Parses raw model output into bullets and a TL;DR.

    Tiers, in order:
    1. Structured scan of the BULLETS: / TL;DR: format
    2. Sentence split of the whole response when no bullets were found
    3. TL;DR from complete-sentence prose lines, then from the first bullets
    """

    def parse(self, raw: str, *, label: str = "Response") -> SummaryPayload:
        """Parse raw LLM output.

        Args:
            raw: Raw text from the model
            label: Description for logging (e.g. "chunk_2_of_4", "final")

        Returns:
            SummaryPayload with 3 to 7 bullets and a non-empty tldr

        Raises:
            InvalidResponseFormatError: raw is empty or not a string
            InsufficientBulletsError: fewer than 3 usable bullets
        """
        if not raw or not isinstance(raw, str):
            raise InvalidResponseFormatError()

        bullets, tldr = self._scan_sections(raw)

        if not bullets:
            logger.warning(f"[PARSER] {label} | no structured bullets; using sentence fallback")
            bullets = [s for s in split_sentences(raw) if len(s) > MIN_SENTENCE_CHARS][:MAX_BULLETS]

        if not tldr:
            tldr = self._fallback_tldr(raw, bullets)
            logger.debug(f"[PARSER] {label} | tldr synthesized | chars={len(tldr)}")

        tldr = self._truncate_words(self._strip_tldr_label(tldr), MAX_TLDR_WORDS)

        clean_bullets = [
            b for b in bullets
            if MIN_BULLET_CHARS < len(b) < MAX_BULLET_CHARS
        ][:MAX_BULLETS]

        if len(clean_bullets) < MIN_BULLETS:
            logger.warning(
                f"[PARSER] {label} | insufficient bullets | candidates={len(bullets)} | usable={len(clean_bullets)}"
            )
            raise InsufficientBulletsError(found=len(clean_bullets), required=MIN_BULLETS)

        return SummaryPayload(bullets=tuple(clean_bullets), tldr=tldr or TLDR_UNAVAILABLE)

    def _scan_sections(self, raw: str) -> Tuple[List[str], str]:
        """Collect bullets under BULLETS: and the text of the TL;DR: line."""
        bullets: List[str] = []
        tldr = ""
        in_bullets = False
        awaiting_tldr = False

        for line in raw.splitlines():
            stripped = line.strip()

            if _BULLETS_HEADER.match(stripped):
                in_bullets = True
                continue

            tldr_match = _TLDR_HEADER.match(stripped)
            if tldr_match:
                in_bullets = False
                tldr = stripped[tldr_match.end():].strip()
                # Label alone on its line; the summary follows
                awaiting_tldr = not tldr
                continue

            if awaiting_tldr and stripped:
                tldr = stripped
                awaiting_tldr = False
                continue

            if in_bullets and self._is_bullet(stripped):
                bullet = stripped[1:].strip()
                if bullet:
                    bullets.append(bullet)

        return bullets, tldr

    def _fallback_tldr(self, raw: str, bullets: List[str]) -> str:
        """Build a TL;DR from prose lines, else from the first two bullets."""
        candidates = [
            line.strip() for line in raw.splitlines()
            if self._is_tldr_candidate(line.strip())
        ]
        # Complete sentences first, any remaining prose line otherwise
        preferred = [c for c in candidates if _COMPLETE_SENTENCE.match(c)] or candidates
        if preferred:
            return " ".join(preferred[:MAX_TLDR_LINES])

        if bullets:
            return ". ".join(bullets[:2])
        return ""

    @staticmethod
    def _is_bullet(line: str) -> bool:
        return line.startswith(BULLET_GLYPHS)

    def _is_tldr_candidate(self, line: str) -> bool:
        if len(line) <= MIN_TLDR_LINE_CHARS or self._is_bullet(line):
            return False
        if _BULLETS_HEADER.match(line):
            return False
        return not _DISCLAIMER.search(line)

    @staticmethod
    def _strip_tldr_label(tldr: str) -> str:
        match = _TLDR_HEADER.match(tldr)
        if match:
            return tldr[match.end():].strip()
        return tldr.strip()

    @staticmethod
    def _truncate_words(text: str, max_words: int) -> str:
        words = text.split()
        if len(words) <= max_words:
            return text
        return " ".join(words[:max_words]) + "..."
