import os

import pytest

import config
from summarization import config as summarization_config


@pytest.mark.skipif(
    "SUMMARIZATION_DEFAULT_MODEL" in os.environ or "SUMMARIZATION_LLM_BACKEND" in os.environ,
    reason="summarization-specific overrides are set",
)
def test_summarization_settings_fall_back_to_global_config():
    assert summarization_config.SUMMARIZATION_DEFAULT_MODEL == config.DEFAULT_MODEL
    assert summarization_config.SUMMARIZATION_LLM_BACKEND == config.LLM_BACKEND


def test_cors_origins_are_a_list():
    assert isinstance(config.CORS_ORIGINS, list)
    assert all(origin == origin.strip() and origin for origin in config.CORS_ORIGINS)
