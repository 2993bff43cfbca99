"""
Prompt templates for bullet + TL;DR summarization.
"""
from typing import Mapping

from core.exceptions import UnknownLengthProfileError
from core.llm_client_base import Prompt
from .config import (
    SUMMARIZATION_TEMPERATURE,
    SUMMARIZATION_TOP_P,
    SUMMARIZATION_FREQUENCY_PENALTY,
    SUMMARIZATION_PRESENCE_PENALTY,
)
from .schemas import LengthProfile, LENGTH_PROFILES

BULLETS_MARKER = "BULLETS:"
TLDR_MARKER = "TL;DR:"
BULLET_GLYPH = "•"


# =========================
# System prompt
# =========================
SYSTEM_PROMPT = """You are a precise summarizer for articles and long-form prose. Your role is to:

1. Extract factual information accurately
2. Maintain neutrality and objectivity
3. Preserve important names, dates, numbers, and locations
4. Avoid speculation or adding facts not present in the source
5. Structure information clearly and concisely

Guidelines:
- Focus on who, what, when, where, why, and how
- Prioritize the most important information first
- Use clear, professional language
- Flag if content appears to be opinion-heavy or biased
- Maintain the original meaning without distortion"""


# =========================
# User prompt
# =========================
USER_PROMPT = """Please summarize the following text into a {description} (target: ~{word_target} words).

Requirements:
1. Create 5-7 bullet points that capture the key information
2. Include a 2-3 sentence TL;DR (Too Long; Didn't Read) summary
3. Preserve important names, dates, numbers, and locations
4. Maintain factual accuracy and neutrality
5. Avoid adding information not present in the source

Format your response as:
{bullets_marker}
{bullet_lines}

{tldr_marker} [2-3 sentence summary capturing the essence]

Text to summarize:
{text}"""

_ORDINALS = ("First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh")


class PromptBuilder:
    """Renders (system, user) prompt pairs for a length profile."""

    def __init__(
        self,
        length_profiles: Mapping[str, LengthProfile] = LENGTH_PROFILES,
        temperature: float = SUMMARIZATION_TEMPERATURE,
        top_p: float = SUMMARIZATION_TOP_P,
        frequency_penalty: float = SUMMARIZATION_FREQUENCY_PENALTY,
        presence_penalty: float = SUMMARIZATION_PRESENCE_PENALTY,
    ):
        self.length_profiles = length_profiles
        self.temperature = temperature
        self.top_p = top_p
        self.frequency_penalty = frequency_penalty
        self.presence_penalty = presence_penalty

    def get_profile(self, length: str) -> LengthProfile:
        profile = self.length_profiles.get(length)
        if profile is None:
            raise UnknownLengthProfileError(length)
        return profile

    def build_system_message(self) -> str:
        return SYSTEM_PROMPT

    def build_user_message(self, text: str, length: str) -> str:
        """
        Build the user instructions followed by the text to summarize.

        Raises:
            UnknownLengthProfileError: if length has no profile
        """
        profile = self.get_profile(length)
        bullet_lines = "\n".join(
            f"{BULLET_GLYPH} [{ordinal} key point]" for ordinal in _ORDINALS
        )
        return USER_PROMPT.format(
            description=profile.description,
            word_target=profile.word_target,
            bullets_marker=BULLETS_MARKER,
            bullet_lines=bullet_lines,
            tldr_marker=TLDR_MARKER,
            text=text,
        )

    def build_prompt(self, text: str, length: str) -> Prompt:
        """Build the complete prompt, sized by the length profile."""
        profile = self.get_profile(length)
        return Prompt(
            system_message=self.build_system_message(),
            user_message=self.build_user_message(text, length),
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=profile.max_tokens,
            frequency_penalty=self.frequency_penalty,
            presence_penalty=self.presence_penalty,
        )
