"""Tests for ClaudeLanguageModel."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from anthropic.types import TextBlock, ToolUseBlock

from crisis_profiles.data import Usage
from crisis_profiles.errors import GenerationFailure
from crisis_profiles.generation import ClaudeLanguageModel

SCHEMA = {
    "type": "object",
    "properties": {"headline": {"type": "string"}},
    "required": ["headline"],
    "additionalProperties": False,
}


def _make_mock_usage(input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Create a mock usage object."""
    usage = MagicMock()
    usage.input_tokens = input_tokens
    usage.output_tokens = output_tokens
    usage.cache_creation_input_tokens = None
    usage.cache_read_input_tokens = 20
    return usage


def _make_response(*content: object) -> MagicMock:
    response = MagicMock()
    response.content = list(content)
    response.usage = _make_mock_usage()
    response.stop_reason = "end_turn"
    return response


@pytest.fixture
def tool_response() -> MagicMock:
    return _make_response(
        TextBlock(type="text", text="Here is the card."),
        ToolUseBlock(
            type="tool_use",
            id="toolu_01",
            name="swipe_card",
            input={"headline": "Floods in Testland"},
        ),
    )


@pytest.fixture
def model(tool_response: MagicMock) -> ClaudeLanguageModel:
    """Create a model with mocked API client."""
    lm = ClaudeLanguageModel(api_key="test-key")
    object.__setattr__(lm._client.messages, "create", AsyncMock(return_value=tool_response))
    return lm


async def test_generate_returns_tool_input(model: ClaudeLanguageModel) -> None:
    payload, usage = await model.generate(
        name="swipe_card", schema=SCHEMA, system="sys", prompt="prompt"
    )
    assert payload == {"headline": "Floods in Testland"}


async def test_generate_returns_usage(model: ClaudeLanguageModel) -> None:
    _, usage = await model.generate(name="swipe_card", schema=SCHEMA, system="sys", prompt="p")

    assert isinstance(usage, Usage)
    assert len(usage.api_calls) == 1
    assert usage.input_tokens == 100
    assert usage.output_tokens == 50
    assert usage.cache_creation_input_tokens == 0
    assert usage.cache_read_input_tokens == 20
    assert usage.api_calls[0].model == "claude-sonnet-4-5"


async def test_generate_forces_tool_use(model: ClaudeLanguageModel) -> None:
    await model.generate(name="swipe_card", schema=SCHEMA, system="sys", prompt="the prompt")

    mock_create: AsyncMock = model._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["model"] == "claude-sonnet-4-5"
    assert call_kwargs["max_tokens"] == 4096
    assert call_kwargs["temperature"] == 0.3
    assert call_kwargs["system"] == "sys"
    assert call_kwargs["tool_choice"] == {"type": "tool", "name": "swipe_card"}
    assert call_kwargs["tools"][0]["name"] == "swipe_card"
    assert call_kwargs["tools"][0]["input_schema"] == SCHEMA
    assert call_kwargs["messages"] == [{"role": "user", "content": "the prompt"}]


async def test_generate_without_tool_call_fails() -> None:
    lm = ClaudeLanguageModel(api_key="test-key")
    response = _make_response(TextBlock(type="text", text="I cannot help with that."))
    object.__setattr__(lm._client.messages, "create", AsyncMock(return_value=response))

    with pytest.raises(GenerationFailure, match="no swipe_card content"):
        await lm.generate(name="swipe_card", schema=SCHEMA, system="sys", prompt="p")


async def test_generate_ignores_other_tools() -> None:
    lm = ClaudeLanguageModel(api_key="test-key")
    response = _make_response(
        ToolUseBlock(type="tool_use", id="toolu_01", name="detailed_view", input={}),
    )
    object.__setattr__(lm._client.messages, "create", AsyncMock(return_value=response))

    with pytest.raises(GenerationFailure):
        await lm.generate(name="swipe_card", schema=SCHEMA, system="sys", prompt="p")


def test_init_uses_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAUDE_API_KEY", "env-key")
    lm = ClaudeLanguageModel()
    assert lm._client.api_key == "env-key"


def test_custom_settings() -> None:
    lm = ClaudeLanguageModel(
        api_key="test-key", model="claude-haiku-4-5", max_tokens=1024, temperature=0.0
    )
    assert lm._model == "claude-haiku-4-5"
    assert lm._max_tokens == 1024
    assert lm._temperature == 0.0
