"""OpenAI-compatible agent provider (OpenAI, Azure OpenAI, vLLM)."""

from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from evals.config import EvalConfig, LLMProvider
from evals.providers.base import (
    AgentLLMProvider,
    ProviderResponse,
    ProviderToolCall,
    ToolCallResult,
)

logger = logging.getLogger(__name__)


def _parse_arguments(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Model sent tool arguments that are not JSON: {raw[:80]}")
        return {}
    return parsed if isinstance(parsed, dict) else {}


class OpenAIAgentProvider(AgentLLMProvider):
    """Chat Completions provider; conversations are already OpenAI-style."""

    def __init__(self, config: EvalConfig) -> None:
        super().__init__(config.llm_model, config.llm_temperature)
        if config.llm_provider == LLMProvider.VLLM and not config.llm_base_url:
            raise ValueError("llm_base_url is required for vLLM provider")
        kwargs: dict[str, Any] = {"api_key": config.llm_api_key or None}
        if config.llm_base_url:
            kwargs["base_url"] = config.llm_base_url
        self._client = AsyncOpenAI(**kwargs)

    def format_tools(self, mcp_tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Wrap each tool as an OpenAI function definition."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool["name"],
                    "description": tool["description"],
                    "parameters": tool["parameters"],
                },
            }
            for tool in mcp_tools
        ]

    def start_conversation(self, messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [dict(m) for m in messages]

    async def send(self, conversation: list[Any], tools: Any) -> ProviderResponse:
        """Request one chat completion."""
        kwargs: dict[str, Any] = {"model": self._model, "messages": conversation}
        if tools:
            kwargs["tools"] = tools
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature

        completion = await self._client.chat.completions.create(**kwargs)
        message = completion.choices[0].message

        tool_calls = [
            ProviderToolCall(
                id=tc.id,
                name=tc.function.name,
                arguments=_parse_arguments(tc.function.arguments),
            )
            for tc in message.tool_calls or []
        ]
        return ProviderResponse(text=message.content, tool_calls=tool_calls, raw=message)

    def append_assistant_message(
        self, conversation: list[Any], response: ProviderResponse
    ) -> None:
        conversation.append(response.raw.model_dump(exclude_none=True))

    def append_tool_results(
        self,
        conversation: list[Any],
        response: ProviderResponse,
        results: list[ToolCallResult],
    ) -> None:
        """Add one tool-role message per result."""
        conversation.extend(
            {"role": "tool", "tool_call_id": r.id, "content": r.result} for r in results
        )

    def to_openai(self, conversation: list[Any]) -> list[dict[str, Any]]:
        return list(conversation)
