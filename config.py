"""
Global Configuration

Shared settings used across all modules.
Module-specific settings are in each module's config.py file.

All settings can be overridden via environment variables or a .env file.
"""
import os
from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()
from functools import lru_cache

import tiktoken

# For airgapped systems, set TIKTOKEN_CACHE_DIR to a directory containing pre-cached encoding files.
try:
    _encoder = tiktoken.get_encoding("cl100k_base")
    TIKTOKEN_AVAILABLE = True
except Exception:
    TIKTOKEN_AVAILABLE = False
    _encoder = None

# =========================
# Application
# =========================

APP_NAME = "bullet-summarizer"
APP_VERSION = "1.0.0"
APP_ENV = os.getenv("APP_ENV", "development")  # development | production

# Comma-separated list of allowed browser origins ("*" for any)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
CORS_ALLOW_CREDENTIALS = os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"

# =========================
# LLM Backend Configuration
# =========================

LLM_BACKEND = os.getenv("LLM_BACKEND", "openai")  # openai | ollama
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.cerebras.ai")
LLM_API_KEY = os.getenv("LLM_API_KEY", "")
DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "llama-3.3-70b")

# =========================
# Model Context Lengths
# =========================

MODEL_CONTEXT_LENGTHS = {
    "llama-3.3-70b": 8192,
    "llama3.1-8b": 8192,
    "gemma3:4b": 8192,
    "gemma3:12b": 8192,
}

DEFAULT_CONTEXT_LENGTH = 8192  # Fallback for unknown models

# Context usage warning thresholds (percentage)
CONTEXT_WARNING_THRESHOLD = 80
CONTEXT_ERROR_THRESHOLD = 95


# =========================
# Utility Functions
# =========================

@lru_cache(maxsize=32)
def get_model_context_length(model: str) -> int:
    """Get context length for a model (cached)."""
    return MODEL_CONTEXT_LENGTHS.get(model, DEFAULT_CONTEXT_LENGTH)


def estimate_tokens(text: str) -> int:
    """
    Estimate token count using tiktoken if the encoding loaded, otherwise fallback to char-based estimation.

    Fallback uses ~4 chars per token approximation.
    """
    if TIKTOKEN_AVAILABLE and _encoder is not None:
        return len(_encoder.encode(text))
    return len(text) // 4
