"""Tests for agent provider construction and transcript conversion."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from evals.config import EvalConfig, LLMProvider
from evals.providers import create_agent_provider
from evals.providers.base import ProviderResponse, ProviderToolCall, ToolCallResult, split_system

SEED = [
    {"role": "system", "content": "Be a document assistant."},
    {"role": "user", "content": "List documents"},
]


def _config(provider: LLMProvider, **overrides: object) -> EvalConfig:
    values = {"llm_provider": provider, "llm_api_key": "test-key", **overrides}
    return EvalConfig(**values)


class TestSplitSystem:
    """Tests for split_system."""

    def test_separates_system_messages(self) -> None:
        """System text is returned apart from the rest."""
        system, rest = split_system(SEED)

        assert system == "Be a document assistant."
        assert rest == [{"role": "user", "content": "List documents"}]


class TestFactory:
    """Tests for create_agent_provider."""

    @patch("evals.providers.openai_provider.AsyncOpenAI")
    def test_openai(self, mock_client_cls: MagicMock) -> None:
        """OpenAI config builds the OpenAI provider."""
        from evals.providers.openai_provider import OpenAIAgentProvider

        provider = create_agent_provider(_config(LLMProvider.OPENAI, llm_model="gpt-4o-mini"))

        assert isinstance(provider, OpenAIAgentProvider)
        assert provider.model == "gpt-4o-mini"
        mock_client_cls.assert_called_once_with(api_key="test-key")

    @patch("evals.providers.openai_provider.AsyncOpenAI")
    def test_vllm_requires_base_url(self, mock_client_cls: MagicMock) -> None:
        """vLLM without a base URL is rejected."""
        with pytest.raises(ValueError, match="llm_base_url is required"):
            create_agent_provider(_config(LLMProvider.VLLM))

    @patch("evals.providers.anthropic_provider.AsyncAnthropic")
    def test_anthropic(self, mock_client_cls: MagicMock) -> None:
        """Anthropic config builds the Anthropic provider."""
        from evals.providers.anthropic_provider import AnthropicAgentProvider

        provider = create_agent_provider(_config(LLMProvider.ANTHROPIC))

        assert isinstance(provider, AnthropicAgentProvider)

    def test_anthropic_vertex_requires_project(self) -> None:
        """Vertex without a project is rejected."""
        with pytest.raises(ValueError, match="vertex_project_id is required"):
            create_agent_provider(_config(LLMProvider.ANTHROPIC_VERTEX))

    @patch("google.genai.Client")
    def test_google_vertex(self, mock_client_cls: MagicMock) -> None:
        """Vertex config passes project and location."""
        create_agent_provider(
            _config(LLMProvider.GOOGLE_VERTEX, vertex_project_id="proj", vertex_location="eu")
        )

        mock_client_cls.assert_called_once_with(vertexai=True, project="proj", location="eu")


class TestOpenAIProvider:
    """Tests for the OpenAI provider."""

    @pytest.fixture
    def provider(self):
        """Create an OpenAI provider with a mocked client."""
        with patch("evals.providers.openai_provider.AsyncOpenAI") as mock_client_cls:
            mock_client_cls.return_value.chat.completions.create = AsyncMock()
            yield create_agent_provider(_config(LLMProvider.OPENAI, llm_temperature=None))

    async def test_send_omits_temperature_when_unset(self, provider) -> None:
        """Reasoning models get no temperature parameter."""
        tool_call = SimpleNamespace(
            id="call_1",
            function=SimpleNamespace(name="list_documents", arguments='{"limit": 5}'),
        )
        message = SimpleNamespace(content=None, tool_calls=[tool_call])
        create = provider._client.chat.completions.create
        create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])

        response = await provider.send(provider.start_conversation(SEED), [{"type": "function"}])

        assert "temperature" not in create.await_args.kwargs
        assert response.tool_calls == [
            ProviderToolCall(id="call_1", name="list_documents", arguments={"limit": 5})
        ]

    def test_format_tools(self, provider) -> None:
        """Tools become function definitions."""
        tools = provider.format_tools(
            [{"name": "search", "description": "d", "parameters": {"type": "object"}}]
        )

        assert tools == [
            {
                "type": "function",
                "function": {"name": "search", "description": "d", "parameters": {"type": "object"}},
            }
        ]


class TestAnthropicProvider:
    """Tests for the Anthropic provider."""

    @patch("evals.providers.anthropic_provider.AsyncAnthropic")
    def test_round_trip_to_openai(self, mock_client_cls: MagicMock) -> None:
        """Native conversation converts back to OpenAI-style messages."""
        provider = create_agent_provider(_config(LLMProvider.ANTHROPIC))
        conversation = provider.start_conversation(SEED)

        raw = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="Listing."),
                SimpleNamespace(type="tool_use", id="tu_1", name="list_documents", input={"limit": 2}),
            ]
        )
        response = ProviderResponse(
            text="Listing.",
            tool_calls=[ProviderToolCall("tu_1", "list_documents", {"limit": 2})],
            raw=raw,
        )
        provider.append_assistant_message(conversation, response)
        provider.append_tool_results(
            conversation, response, [ToolCallResult("tu_1", "list_documents", "# Documents")]
        )

        messages = provider.to_openai(conversation)

        assert messages[0] == {"role": "system", "content": "Be a document assistant."}
        assert messages[1] == {"role": "user", "content": "List documents"}
        assert messages[2]["role"] == "assistant"
        assert messages[2]["content"] == "Listing."
        function = messages[2]["tool_calls"][0]["function"]
        assert function["name"] == "list_documents"
        assert json.loads(function["arguments"]) == {"limit": 2}
        assert messages[3] == {"role": "tool", "tool_call_id": "tu_1", "content": "# Documents"}


class TestGoogleProvider:
    """Tests for the Google provider."""

    def test_clean_schema(self) -> None:
        """Unsupported keywords are removed at every depth."""
        from evals.providers.google_provider import clean_schema

        schema = {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "limit": {"type": "integer", "default": 10},
                "items": {"anyOf": [{"type": "string", "default": "x"}, {"type": "null"}]},
            },
        }

        assert clean_schema(schema) == {
            "type": "object",
            "properties": {
                "limit": {"type": "integer"},
                "items": {"anyOf": [{"type": "string"}, {"type": "null"}]},
            },
        }

    @patch("google.genai.Client")
    def test_to_openai_keeps_function_calls(self, mock_client_cls: MagicMock) -> None:
        """Model function calls come out as OpenAI tool calls."""
        from google.genai import types

        provider = create_agent_provider(_config(LLMProvider.GOOGLE_GENAI))
        conversation = provider.start_conversation(SEED)
        conversation.append(
            types.Content(
                role="model",
                parts=[
                    types.Part(
                        function_call=types.FunctionCall(name="read_document_info", args={"a": 1})
                    )
                ],
            )
        )

        messages = provider.to_openai(conversation)

        assert messages[0]["role"] == "system"
        assert messages[1] == {"role": "user", "content": "List documents"}
        call = messages[2]["tool_calls"][0]["function"]
        assert call["name"] == "read_document_info"
        assert json.loads(call["arguments"]) == {"a": 1}
