"""Google GenAI agent provider (Gemini API key and Vertex AI)."""

from __future__ import annotations

import json
from typing import Any

from google import genai
from google.genai import types

from evals.config import EvalConfig, LLMProvider
from evals.providers.base import (
    AgentLLMProvider,
    ProviderResponse,
    ProviderToolCall,
    ToolCallResult,
    split_system,
)

# JSON Schema keywords FunctionDeclaration rejects.
_UNSUPPORTED_SCHEMA_KEYS = frozenset(
    {"additionalProperties", "default", "$schema", "$ref", "$defs"}
)


def clean_schema(schema: Any) -> Any:
    """Drop unsupported JSON Schema keywords, recursively."""
    if isinstance(schema, dict):
        return {
            key: clean_schema(value)
            for key, value in schema.items()
            if key not in _UNSUPPORTED_SCHEMA_KEYS
        }
    if isinstance(schema, list):
        return [clean_schema(item) for item in schema]
    return schema


def _call_id(name: str | None, index: int) -> str:
    # Gemini function calls carry no id.
    return f"{name}_{index}"


def _content_to_openai(content: types.Content) -> list[dict[str, Any]]:
    parts = content.parts or []
    responses = [p.function_response for p in parts if p.function_response]
    if responses:
        return [
            {
                "role": "tool",
                "tool_call_id": f"{fr.name}_response",
                "content": json.dumps(dict(fr.response) if fr.response else {}),
            }
            for fr in responses
        ]

    texts = [p.text for p in parts if p.text]
    message: dict[str, Any] = {
        "role": "assistant" if content.role == "model" else content.role or "user",
        "content": "\n".join(texts) if texts else None,
    }
    tool_calls = [
        {
            "id": _call_id(p.function_call.name, i),
            "type": "function",
            "function": {
                "name": p.function_call.name,
                "arguments": json.dumps(dict(p.function_call.args or {})),
            },
        }
        for i, p in enumerate(parts)
        if p.function_call
    ]
    if tool_calls:
        message["tool_calls"] = tool_calls
    return [message]


class GoogleAgentProvider(AgentLLMProvider):
    """Gemini provider; the system prompt travels as system_instruction."""

    def __init__(self, config: EvalConfig) -> None:
        super().__init__(config.llm_model, config.llm_temperature)
        self._client = self._create_client(config)
        self._system_prompt = ""

    @staticmethod
    def _create_client(config: EvalConfig) -> genai.Client:
        if config.llm_provider == LLMProvider.GOOGLE_VERTEX:
            if not config.vertex_project_id:
                raise ValueError("vertex_project_id is required for google-vertex provider")
            return genai.Client(
                vertexai=True,
                project=config.vertex_project_id,
                location=config.vertex_location,
            )
        return genai.Client(api_key=config.llm_api_key or None)

    def format_tools(self, mcp_tools: list[dict[str, Any]]) -> list[types.Tool]:
        """Bundle all tools as function declarations of a single Tool."""
        declarations = [
            types.FunctionDeclaration(
                name=tool["name"],
                description=tool["description"],
                parameters=clean_schema(tool["parameters"]),
            )
            for tool in mcp_tools
        ]
        return [types.Tool(function_declarations=declarations)]

    def start_conversation(self, messages: list[dict[str, Any]]) -> list[types.Content]:
        self._system_prompt, rest = split_system(messages)
        return [
            types.Content(
                role="model" if m.get("role") == "assistant" else "user",
                parts=[types.Part.from_text(text=str(m.get("content") or ""))],
            )
            for m in rest
        ]

    async def send(self, conversation: list[Any], tools: Any) -> ProviderResponse:
        """Generate one model turn."""
        config = types.GenerateContentConfig(
            tools=tools or None,
            system_instruction=self._system_prompt or None,
            temperature=self._temperature,
        )
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=conversation,
            config=config,
        )

        texts: list[str] = []
        tool_calls: list[ProviderToolCall] = []
        if response.candidates and response.candidates[0].content:
            for i, part in enumerate(response.candidates[0].content.parts or []):
                if part.text:
                    texts.append(part.text)
                elif part.function_call:
                    fc = part.function_call
                    tool_calls.append(
                        ProviderToolCall(
                            id=_call_id(fc.name, i),
                            name=fc.name or "",
                            arguments=dict(fc.args) if fc.args else {},
                        )
                    )

        return ProviderResponse(
            text="\n".join(texts) if texts else None,
            tool_calls=tool_calls,
            raw=response,
        )

    def append_assistant_message(
        self, conversation: list[Any], response: ProviderResponse
    ) -> None:
        candidates = response.raw.candidates
        if candidates and candidates[0].content:
            conversation.append(candidates[0].content)

    def append_tool_results(
        self,
        conversation: list[Any],
        response: ProviderResponse,
        results: list[ToolCallResult],
    ) -> None:
        """Send tool outputs back as function_response parts."""
        parts = [
            types.Part.from_function_response(name=r.name, response={"result": r.result})
            for r in results
        ]
        conversation.append(types.Content(role="user", parts=parts))

    def to_openai(self, conversation: list[Any]) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if self._system_prompt:
            messages.append({"role": "system", "content": self._system_prompt})
        for content in conversation:
            if isinstance(content, types.Content):
                messages.extend(_content_to_openai(content))
            elif isinstance(content, dict):
                messages.append(content)
        return messages
