"""
Summarization LLM Client

Module-specific completion client for the summarization service.
Uses BaseLLMClient with summarization-specific configuration.
"""

from core import BaseLLMClient, LLMConfig
from .config import (
    SUMMARIZATION_LLM_BACKEND,
    SUMMARIZATION_LLM_BASE_URL,
    SUMMARIZATION_LLM_API_KEY,
    SUMMARIZATION_DEFAULT_MODEL,
    SUMMARIZATION_CONNECTION_TIMEOUT,
    SUMMARIZATION_CONNECTION_POOL_LIMIT,
)

# Create module-specific configuration
_config = LLMConfig(
    backend=SUMMARIZATION_LLM_BACKEND,
    base_url=SUMMARIZATION_LLM_BASE_URL,
    api_key=SUMMARIZATION_LLM_API_KEY,
    model=SUMMARIZATION_DEFAULT_MODEL,
    timeout=SUMMARIZATION_CONNECTION_TIMEOUT,
    pool_limit=SUMMARIZATION_CONNECTION_POOL_LIMIT,
    task_name="summarize"
)

# Create module-specific client instance
_client = BaseLLMClient(_config)


def get_client() -> BaseLLMClient:
    """The shared summarization completion client."""
    return _client


async def close_session():
    """Close the summarization session. Call this on application shutdown."""
    await _client.close()


def get_backend_info() -> dict:
    """Get information about the summarization LLM backend configuration."""
    return _client.get_backend_info()
