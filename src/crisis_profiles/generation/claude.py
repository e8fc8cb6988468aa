"""Claude-backed structured generation using forced tool use."""

import logging
import os
from typing import Any

import anthropic

from crisis_profiles.data import APICallUsage, Usage
from crisis_profiles.errors import GenerationFailure

logger = logging.getLogger(__name__)


class ClaudeLanguageModel:
    """Generate schema-conforming JSON with Anthropic's Claude API.

    The schema is offered as the only tool and the model is forced to call
    it, so the tool input is the structured response.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Maximum output tokens per request.
        temperature: Sampling temperature (low for factual content).
    """

    def __init__(
        self,
        *,
        model: str = "claude-sonnet-4-5",
        api_key: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def generate(
        self,
        *,
        name: str,
        schema: dict[str, Any],
        system: str,
        prompt: str,
    ) -> tuple[dict[str, Any], Usage]:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=system,
                tools=[
                    {
                        "name": name,
                        "description": f"Record the generated {name.replace('_', ' ')}.",
                        "input_schema": schema,
                    }
                ],
                tool_choice={"type": "tool", "name": name},
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise GenerationFailure(f"Language model request for {name} failed: {e}") from e

        usage = Usage(
            api_calls=[
                APICallUsage(
                    model=self._model,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                    cache_creation_input_tokens=getattr(
                        response.usage, "cache_creation_input_tokens", 0
                    )
                    or 0,
                    cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                    or 0,
                ),
            ],
        )

        for block in response.content:
            if getattr(block, "type", None) == "tool_use" and block.name == name:
                if not isinstance(block.input, dict):
                    raise GenerationFailure(f"Tool input for {name} is not a JSON object")
                return (block.input, usage)

        logger.warning(f"No {name} tool call in response (stop_reason={response.stop_reason})")
        raise GenerationFailure(f"Language model returned no {name} content")
