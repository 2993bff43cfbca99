"""
Fake implementations for testing.

Fakes implement the same interface as real components but avoid network
access, so pipeline tests are fast and deterministic.

Key fakes:
- FakeCompletionClient: scripted replies, records every prompt
"""

from tests.fakes.completion import FakeCompletionClient, well_formed_response

__all__ = [
    "FakeCompletionClient",
    "well_formed_response",
]
