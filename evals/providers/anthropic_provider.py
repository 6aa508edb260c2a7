"""Anthropic agent provider (direct API and Vertex AI)."""

from __future__ import annotations

import json
from typing import Any

from anthropic import AsyncAnthropic, AsyncAnthropicVertex

from evals.config import EvalConfig, LLMProvider
from evals.providers.base import (
    AgentLLMProvider,
    ProviderResponse,
    ProviderToolCall,
    ToolCallResult,
    split_system,
)

_MAX_TOKENS = 4096


def _block_dict(block: Any) -> dict[str, Any] | None:
    if block.type == "text":
        return {"type": "text", "text": block.text}
    if block.type == "tool_use":
        return {
            "type": "tool_use",
            "id": block.id,
            "name": block.name,
            "input": block.input if isinstance(block.input, dict) else {},
        }
    return None


def _assistant_to_openai(content: Any) -> dict[str, Any]:
    if isinstance(content, str):
        return {"role": "assistant", "content": content}
    texts = [b.get("text", "") for b in content if b.get("type") == "text"]
    message: dict[str, Any] = {
        "role": "assistant",
        "content": "\n".join(texts) if texts else None,
    }
    tool_calls = [
        {
            "id": b.get("id", ""),
            "type": "function",
            "function": {"name": b.get("name", ""), "arguments": json.dumps(b.get("input", {}))},
        }
        for b in content
        if b.get("type") == "tool_use"
    ]
    if tool_calls:
        message["tool_calls"] = tool_calls
    return message


def _user_to_openai(content: Any) -> list[dict[str, Any]]:
    if isinstance(content, str):
        return [{"role": "user", "content": content}]
    return [
        {
            "role": "tool",
            "tool_call_id": b.get("tool_use_id", ""),
            "content": b.get("content", ""),
        }
        for b in content
        if b.get("type") == "tool_result"
    ]


class AnthropicAgentProvider(AgentLLMProvider):
    """Messages API provider.

    The system prompt is a top-level request parameter for Anthropic, so
    it is kept aside and re-inserted when converting back to OpenAI style.
    """

    def __init__(self, config: EvalConfig) -> None:
        super().__init__(config.llm_model, config.llm_temperature)
        self._client = self._create_client(config)
        self._system_prompt = ""

    @staticmethod
    def _create_client(config: EvalConfig) -> AsyncAnthropic | AsyncAnthropicVertex:
        if config.llm_provider == LLMProvider.ANTHROPIC_VERTEX:
            if not config.vertex_project_id:
                raise ValueError("vertex_project_id is required for anthropic-vertex provider")
            return AsyncAnthropicVertex(
                project_id=config.vertex_project_id,
                region=config.vertex_location,
            )
        return AsyncAnthropic(api_key=config.llm_api_key or None)

    def format_tools(self, mcp_tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Map tool parameters to Anthropic's input_schema."""
        return [
            {
                "name": tool["name"],
                "description": tool["description"],
                "input_schema": tool["parameters"],
            }
            for tool in mcp_tools
        ]

    def start_conversation(self, messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self._system_prompt, rest = split_system(messages)
        return [{"role": m["role"], "content": m.get("content") or ""} for m in rest]

    async def send(self, conversation: list[Any], tools: Any) -> ProviderResponse:
        """Create one message and split it into text and tool_use blocks."""
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": _MAX_TOKENS,
            "messages": conversation,
        }
        if self._system_prompt:
            kwargs["system"] = self._system_prompt
        if tools:
            kwargs["tools"] = tools
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature

        response = await self._client.messages.create(**kwargs)

        texts = [block.text for block in response.content if block.type == "text"]
        tool_calls = [
            ProviderToolCall(
                id=block.id,
                name=block.name,
                arguments=block.input if isinstance(block.input, dict) else {},
            )
            for block in response.content
            if block.type == "tool_use"
        ]
        return ProviderResponse(
            text="\n".join(texts) if texts else None,
            tool_calls=tool_calls,
            raw=response,
        )

    def append_assistant_message(
        self, conversation: list[Any], response: ProviderResponse
    ) -> None:
        blocks = [b for b in (_block_dict(block) for block in response.raw.content) if b]
        conversation.append({"role": "assistant", "content": blocks})

    def append_tool_results(
        self,
        conversation: list[Any],
        response: ProviderResponse,
        results: list[ToolCallResult],
    ) -> None:
        """Tool results go back as tool_result blocks in a user message."""
        conversation.append(
            {
                "role": "user",
                "content": [
                    {"type": "tool_result", "tool_use_id": r.id, "content": r.result}
                    for r in results
                ],
            }
        )

    def to_openai(self, conversation: list[Any]) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if self._system_prompt:
            messages.append({"role": "system", "content": self._system_prompt})
        for message in conversation:
            if message.get("role") == "assistant":
                messages.append(_assistant_to_openai(message.get("content", "")))
            elif message.get("role") == "user":
                messages.extend(_user_to_openai(message.get("content", "")))
        return messages
