import pytest

from core.exceptions import UnknownLengthProfileError
from summarization.prompts import SYSTEM_PROMPT, PromptBuilder
from summarization.schemas import LENGTH_PROFILES, LengthProfile


def test_build_prompt_uses_profile_budget():
    builder = PromptBuilder()
    prompt = builder.build_prompt("Body of the article.", "long")

    profile = LENGTH_PROFILES["long"]
    assert prompt.max_tokens == profile.max_tokens
    assert prompt.system_message == SYSTEM_PROMPT
    assert prompt.temperature == builder.temperature
    assert prompt.top_p == builder.top_p


def test_user_message_describes_output_format():
    message = PromptBuilder().build_user_message("Body of the article.", "medium")
    profile = LENGTH_PROFILES["medium"]

    assert profile.description in message
    assert f"~{profile.word_target} words" in message
    assert "BULLETS:" in message
    assert "TL;DR:" in message
    assert message.count("• [") == 7
    assert message.endswith("Body of the article.")


def test_custom_profiles():
    profiles = {"tiny": LengthProfile(word_target=20, max_tokens=50, description="One-liner")}
    prompt = PromptBuilder(profiles).build_prompt("text", "tiny")
    assert prompt.max_tokens == 50
    assert "One-liner" in prompt.user_message


def test_unknown_length_is_rejected():
    with pytest.raises(UnknownLengthProfileError) as exc_info:
        PromptBuilder().build_prompt("text", "huge")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid summary length: huge"


def test_prompt_messages_order():
    messages = PromptBuilder().build_prompt("text", "short").to_messages()
    assert [m["role"] for m in messages] == ["system", "user"]
