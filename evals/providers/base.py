"""Provider abstraction for the agent under evaluation.

The evaluator speaks OpenAI-style message dicts: the seed conversation
comes in that shape and the finished transcript must go out in it, so
that tool calls can be extracted the same way for every provider. Each
provider converts to and from its own SDK's native conversation format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProviderToolCall:
    """A tool call requested by the model."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolCallResult:
    """Text returned by the tool surface for one tool call."""

    id: str
    name: str
    result: str


@dataclass
class ProviderResponse:
    """One model turn, normalized across providers."""

    text: str | None
    tool_calls: list[ProviderToolCall] = field(default_factory=list)
    raw: Any = None

    @property
    def has_tool_calls(self) -> bool:
        """Whether the model asked for any tools this turn."""
        return bool(self.tool_calls)


def split_system(messages: list[dict[str, Any]]) -> tuple[str, list[dict[str, Any]]]:
    """Separate system messages from the rest of an OpenAI-style conversation.

    Returns:
        The joined system text and the remaining messages.
    """
    system = [str(m.get("content") or "") for m in messages if m.get("role") == "system"]
    rest = [m for m in messages if m.get("role") != "system"]
    return "\n\n".join(system), rest


class AgentLLMProvider(ABC):
    """Base class for the LLM SDKs an agent can run on.

    Subclasses hold their SDK client, the model name and the sampling
    temperature (None means the provider's default, which some reasoning
    models require).
    """

    def __init__(self, model: str, temperature: float | None = None) -> None:
        self._model = model
        self._temperature = temperature

    @property
    def model(self) -> str:
        """Model name sent to the provider."""
        return self._model

    @abstractmethod
    def format_tools(self, mcp_tools: list[dict[str, Any]]) -> Any:
        """Convert ``{name, description, parameters}`` tool dicts to the native format."""

    @abstractmethod
    def start_conversation(self, messages: list[dict[str, Any]]) -> list[Any]:
        """Convert the OpenAI-style seed messages into a native conversation."""

    @abstractmethod
    async def send(self, conversation: list[Any], tools: Any) -> ProviderResponse:
        """Ask the model for its next turn.

        Args:
            conversation: Native conversation so far.
            tools: Native tool definitions.

        Returns:
            The normalized response.
        """

    @abstractmethod
    def append_assistant_message(
        self, conversation: list[Any], response: ProviderResponse
    ) -> None:
        """Append the model's turn to the native conversation in place."""

    @abstractmethod
    def append_tool_results(
        self,
        conversation: list[Any],
        response: ProviderResponse,
        results: list[ToolCallResult],
    ) -> None:
        """Append tool outputs to the native conversation in place."""

    @abstractmethod
    def to_openai(self, conversation: list[Any]) -> list[dict[str, Any]]:
        """Convert the native conversation back to OpenAI-style message dicts.

        Assistant tool calls must come out as
        ``tool_calls[].function.{name, arguments}`` with JSON-encoded
        arguments.
        """
