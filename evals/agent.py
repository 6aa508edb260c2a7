"""Tool-calling agent evaluated against the Document Engine MCP tools.

Implements a provider-agnostic loop: send the conversation and the tool
schemas to the model, run any requested tools through the tool surface,
feed the results back, and stop when the model answers in plain text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from evals.config import EvalConfig
from evals.providers import create_agent_provider
from evals.providers.base import AgentLLMProvider, ToolCallResult
from evals.tool_surface import ToolSurface

logger = logging.getLogger(__name__)


@dataclass
class ToolInvocation:
    """A tool the agent ran, with the text it got back."""

    name: str
    arguments: dict[str, Any]
    result: str


@dataclass
class AgentResult:
    """Outcome of one agent run."""

    final_output: str
    invocations: list[ToolInvocation] = field(default_factory=list)
    messages: list[dict[str, Any]] = field(default_factory=list)
    turns: int = 0


class MCPAgent:
    """LLM agent that calls the MCP tools through a ToolSurface.

    Instances are awaitable callables taking the seed conversation and
    returning the full OpenAI-style transcript, which is what the
    scenario evaluator expects from an agent.
    """

    def __init__(
        self,
        config: EvalConfig,
        surface: ToolSurface,
        provider: AgentLLMProvider | None = None,
    ) -> None:
        self._config = config
        self._surface = surface
        self._provider = provider or create_agent_provider(config)
        self._tools: Any = None

    async def __call__(self, messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        result = await self.run(messages)
        return result.messages

    async def run(self, messages: list[dict[str, Any]]) -> AgentResult:
        """Run the agent until it stops calling tools or runs out of turns.

        Args:
            messages: OpenAI-style seed conversation (system and user).

        Returns:
            AgentResult whose messages are the seed plus every assistant
            and tool message produced.
        """
        if self._tools is None:
            self._tools = self._provider.format_tools(self._surface.list_tools())
        conversation = self._provider.start_conversation(messages)

        result = AgentResult(final_output="")
        max_turns = self._config.max_agent_turns

        for turn in range(max_turns):
            result.turns = turn + 1
            logger.debug(f"Agent turn {turn + 1}/{max_turns}")

            response = await self._provider.send(conversation, self._tools)
            self._provider.append_assistant_message(conversation, response)

            if not response.has_tool_calls:
                result.final_output = response.text or ""
                break

            outputs: list[ToolCallResult] = []
            for call in response.tool_calls:
                logger.debug(f"Calling tool: {call.name}({call.arguments})")
                text = await self._surface.call_tool(call.name, call.arguments)
                result.invocations.append(ToolInvocation(call.name, call.arguments, text))
                outputs.append(ToolCallResult(id=call.id, name=call.name, result=text))

            self._provider.append_tool_results(conversation, response, outputs)
        else:
            logger.info(f"Agent stopped after {max_turns} turns without a final answer")
            result.final_output = (
                f"Agent reached maximum turns ({max_turns}) without completing the task."
            )

        result.messages = self._provider.to_openai(conversation)
        return result
