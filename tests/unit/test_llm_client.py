"""Unit tests for the completion client, with the HTTP call replaced."""
import pytest

from core.exceptions import (
    AuthenticationError,
    BadRequestError,
    NetworkError,
    RateLimitedError,
    ServiceUnavailableError,
)
from core.llm_client_base import BaseLLMClient, LLMConfig, Prompt, _error_for_status


def _prompt(max_tokens: int = 200) -> Prompt:
    return Prompt(
        system_message="system",
        user_message="user",
        temperature=0.3,
        top_p=0.9,
        max_tokens=max_tokens,
        frequency_penalty=0.1,
        presence_penalty=0.1,
    )


def _client_with_reply(monkeypatch, backend: str, reply):
    client = BaseLLMClient(LLMConfig(backend=backend, base_url="http://llm.local/", model="test-model"))
    calls = []

    async def fake_post(url, payload):
        calls.append((url, payload))
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(client, "_post", fake_post)
    return client, calls


@pytest.mark.parametrize(
    "status, error_type, status_code",
    [
        (401, AuthenticationError, 401),
        (403, AuthenticationError, 401),
        (429, RateLimitedError, 429),
        (400, BadRequestError, 500),
        (404, BadRequestError, 500),
        (500, ServiceUnavailableError, 502),
        (503, ServiceUnavailableError, 502),
    ],
)
def test_error_for_status(status, error_type, status_code):
    error = _error_for_status(status, "detail")
    assert type(error) is error_type
    assert error.status_code == status_code
    assert error.upstream_status == status


@pytest.mark.asyncio
async def test_openai_response_is_parsed(monkeypatch):
    reply = {
        "choices": [{"message": {"content": "  BULLETS:\n• one  "}}],
        "usage": {"total_tokens": 42},
        "model": "served-model",
    }
    client, calls = _client_with_reply(monkeypatch, "openai", reply)

    result = await client.complete(_prompt(max_tokens=400))

    assert result.content == "BULLETS:\n• one"
    assert result.usage_tokens == 42
    assert result.model == "served-model"

    url, payload = calls[0]
    assert url == "http://llm.local/v1/chat/completions"
    assert payload["model"] == "test-model"
    assert payload["max_tokens"] == 400
    assert payload["stream"] is False
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]


@pytest.mark.asyncio
async def test_openai_response_without_usage(monkeypatch):
    client, _ = _client_with_reply(monkeypatch, "openai", {"choices": [{"message": {"content": "hi"}}]})
    result = await client.complete(_prompt())
    assert result.usage_tokens is None
    assert result.model == "test-model"


@pytest.mark.asyncio
async def test_ollama_response_is_parsed(monkeypatch):
    reply = {"message": {"content": "ok"}, "prompt_eval_count": 10, "eval_count": 5}
    client, calls = _client_with_reply(monkeypatch, "ollama", reply)

    result = await client.complete(_prompt(max_tokens=600))

    assert result.content == "ok"
    assert result.usage_tokens == 15
    assert result.model == "test-model"

    url, payload = calls[0]
    assert url == "http://llm.local/api/chat"
    assert payload["options"]["num_predict"] == 600


@pytest.mark.asyncio
async def test_completion_errors_are_reraised(monkeypatch):
    client, _ = _client_with_reply(monkeypatch, "openai", RateLimitedError("Rate limit exceeded"))
    with pytest.raises(RateLimitedError):
        await client.complete(_prompt())


@pytest.mark.asyncio
async def test_check_connection(monkeypatch):
    healthy, _ = _client_with_reply(monkeypatch, "openai", {"choices": [{"message": {"content": "hi"}}]})
    assert await healthy.check_connection() is True

    unreachable, _ = _client_with_reply(monkeypatch, "openai", NetworkError("Unable to connect"))
    assert await unreachable.check_connection() is False


def test_config_to_dict_redacts_api_key():
    info = LLMConfig(api_key="secret").to_dict()
    assert info["api_key_set"] is True
    assert "secret" not in info.values()
