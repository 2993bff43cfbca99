"""Scripted completion client for tests."""
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Union

from core.llm_client_base import CompletionResult, Prompt

Reply = Union[str, CompletionResult, BaseException]


def well_formed_response(
    bullets: Optional[List[str]] = None,
    tldr: str = "The document reports steady growth across every regional office.",
) -> str:
    """A response that follows the BULLETS: / TL;DR: format exactly."""
    if bullets is None:
        bullets = [
            f"Regional office {i} reported revenue growth for the quarter"
            for i in range(1, 6)
        ]
    lines = "\n".join(f"• {b}" for b in bullets)
    return f"BULLETS:\n{lines}\n\nTL;DR: {tldr}"


class FakeCompletionClient:
    """Completion client returning scripted replies.

    Args:
        responder: Called with each prompt; returns the reply text, a full
            CompletionResult, or an exception to raise. Defaults to a
            well-formed response for every call.
        delay: Optional per-prompt delay in seconds, to simulate latency.
        healthy: Value returned by check_connection.
    """

    def __init__(
        self,
        responder: Optional[Callable[[Prompt], Reply]] = None,
        delay: Optional[Callable[[Prompt], float]] = None,
        healthy: bool = True,
        model: str = "fake-model",
    ):
        self.responder = responder or (lambda prompt: well_formed_response())
        self.delay = delay
        self.healthy = healthy
        self.model = model
        self.prompts: List[Prompt] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: Prompt) -> CompletionResult:
        self.prompts.append(prompt)
        if self.delay is not None:
            await asyncio.sleep(self.delay(prompt))

        reply = self.responder(prompt)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, CompletionResult):
            return reply
        return CompletionResult(content=reply, usage_tokens=100 + len(self.prompts), model=self.model)

    async def check_connection(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        pass
