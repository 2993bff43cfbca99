"""
Summarization Configuration

Module-specific settings for bullet + TL;DR summarization.
"""
import os

from config import LLM_BACKEND, LLM_BASE_URL, LLM_API_KEY, DEFAULT_MODEL

# =========================
# LLM Backend Configuration
# =========================

# Backend type: openai | ollama (falls back to global config)
SUMMARIZATION_LLM_BACKEND = os.getenv("SUMMARIZATION_LLM_BACKEND", LLM_BACKEND)

# Base URL of the completion service
SUMMARIZATION_LLM_BASE_URL = os.getenv("SUMMARIZATION_LLM_BASE_URL", LLM_BASE_URL)

SUMMARIZATION_LLM_API_KEY = os.getenv("SUMMARIZATION_LLM_API_KEY", LLM_API_KEY)

# =========================
# Model Settings
# =========================

SUMMARIZATION_DEFAULT_MODEL = os.getenv("SUMMARIZATION_DEFAULT_MODEL", DEFAULT_MODEL)

# =========================
# Text Limits
# =========================

SUMMARIZATION_MIN_TEXT_LENGTH = int(os.getenv("SUMMARIZATION_MIN_TEXT_LENGTH", "50"))
SUMMARIZATION_MAX_TEXT_LENGTH = int(os.getenv("SUMMARIZATION_MAX_TEXT_LENGTH", "15000"))

# Character budget per chunk
SUMMARIZATION_CHUNK_SIZE = int(os.getenv("SUMMARIZATION_CHUNK_SIZE", "2000"))

# =========================
# Summary Length Settings
# =========================

SUMMARIZATION_DEFAULT_LENGTH = os.getenv("SUMMARIZATION_DEFAULT_LENGTH", "medium")

# Chunk-level passes always use this profile
SUMMARIZATION_CHUNK_LENGTH = "short"

SUMMARIZATION_LENGTH_SETTINGS = {
    "short": {
        "word_target": int(os.getenv("SUMMARIZATION_SHORT_WORDS", "120")),
        "max_tokens": int(os.getenv("SUMMARIZATION_SHORT_MAX_TOKENS", "200")),
        "description": "Brief overview with key points",
    },
    "medium": {
        "word_target": int(os.getenv("SUMMARIZATION_MEDIUM_WORDS", "240")),
        "max_tokens": int(os.getenv("SUMMARIZATION_MEDIUM_MAX_TOKENS", "400")),
        "description": "Balanced summary with context",
    },
    "long": {
        "word_target": int(os.getenv("SUMMARIZATION_LONG_WORDS", "420")),
        "max_tokens": int(os.getenv("SUMMARIZATION_LONG_MAX_TOKENS", "600")),
        "description": "Comprehensive summary with details",
    },
}

# Bullets in a fallback summary, by length
SUMMARIZATION_FALLBACK_BULLETS = {"short": 3, "medium": 5, "long": 7}

# =========================
# Sampling Settings
# =========================

SUMMARIZATION_TEMPERATURE = 0.3
SUMMARIZATION_TOP_P = 0.9
SUMMARIZATION_FREQUENCY_PENALTY = 0.1
SUMMARIZATION_PRESENCE_PENALTY = 0.1

# =========================
# Connection Settings
# =========================

SUMMARIZATION_CONNECTION_TIMEOUT = int(os.getenv("SUMMARIZATION_CONNECTION_TIMEOUT", "30"))
SUMMARIZATION_CONNECTION_POOL_LIMIT = int(os.getenv("SUMMARIZATION_CONNECTION_POOL_LIMIT", "50"))

# =========================
# Map Phase
# =========================

# Concurrent chunk calls; 1 keeps chunk calls strictly sequential
SUMMARIZATION_MAP_CONCURRENT = int(os.getenv("SUMMARIZATION_MAP_CONCURRENT", "1"))

# Whole-pipeline deadline in seconds; 0 disables it
SUMMARIZATION_DEADLINE_SECONDS = float(os.getenv("SUMMARIZATION_DEADLINE_SECONDS", "0"))
