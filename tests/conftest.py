from __future__ import annotations

import os

import pytest

# Console logging only during tests; must be set before logs.config is imported
os.environ.setdefault("LOG_TO_FILE", "false")


def make_article(length: int) -> str:
    """Deterministic prose of exactly `length` characters with distinct sentences."""
    sentences = []
    i = 0
    while sum(len(s) + 1 for s in sentences) < length + 200:
        i += 1
        sentences.append(
            f"Report section {i} describes how the regional office handled budget item {i * 7}."
        )
    return " ".join(sentences)[:length]


@pytest.fixture
def fake_client():
    from tests.fakes import FakeCompletionClient

    return FakeCompletionClient()


@pytest.fixture
def article():
    return make_article
