"""Scenario evaluation for tool usage effectiveness.

Runs one scenario against an agent, extracts the tools the agent called
from its transcript and judges them against the scenario's expectations.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from evals.scenarios import Scenario

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a document processing assistant. Use the appropriate tools to "
    "complete the user's request efficiently."
)

# Reported as max_allowed when a scenario sets no cap.
UNLIMITED_TOOL_CALLS = 999

TOOLS_WEIGHT = 0.5
ORDER_WEIGHT = 0.3
EFFICIENCY_WEIGHT = 0.2

Agent = Callable[[list[dict[str, Any]]], Awaitable[list[Any]]]
"""An agent takes the seed conversation and returns the full transcript."""


@dataclass
class ToolCall:
    """A tool invocation found in an agent transcript."""

    name: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolUsageResult:
    """Outcome of one scenario evaluated against one model."""

    scenario_id: str
    description: str
    correct_tools: bool
    correct_order: bool
    efficient: bool
    correct_parameters: bool
    expected_tools: list[str]
    actual_tools: list[str]
    tool_call_count: int
    max_allowed: int
    score: float
    issues: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, scenario: Scenario, error: Exception | str) -> ToolUsageResult:
        """Build the zero-score result recorded when a scenario could not run."""
        return cls(
            scenario_id=scenario.id,
            description=scenario.description,
            correct_tools=False,
            correct_order=False,
            efficient=False,
            correct_parameters=False,
            expected_tools=list(scenario.expected_tools),
            actual_tools=[],
            tool_call_count=0,
            max_allowed=_max_allowed(scenario),
            score=0.0,
            issues=[f"Execution error: {error}"],
        )


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _is_assistant(message: Any) -> bool:
    role = _get(message, "role") or _get(message, "type")
    return role in ("assistant", "ai")


def _parse_arguments(raw: Any) -> dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Tool call arguments are not JSON: {raw[:80]}")
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


def _tool_call(raw: Any) -> ToolCall:
    function = _get(raw, "function")
    if function is not None:
        return ToolCall(
            name=str(_get(function, "name") or ""),
            parameters=_parse_arguments(_get(function, "arguments")),
        )
    args = _get(raw, "args")
    if args is None:
        args = _get(raw, "arguments")
    return ToolCall(name=str(_get(raw, "name") or ""), parameters=_parse_arguments(args))


def extract_tool_calls(messages: Sequence[Any]) -> list[ToolCall]:
    """Collect the tool calls from an agent transcript, in emission order.

    Only assistant messages are inspected. A message may be an
    OpenAI-style dict (``tool_calls[].function.{name, arguments}``) or any
    object exposing ``tool_calls`` entries with ``name`` and ``args``.
    Unknown tool names are kept as they are.

    Args:
        messages: The transcript returned by the agent.

    Returns:
        Flat list of tool calls across all assistant messages.
    """
    calls: list[ToolCall] = []
    for message in messages:
        if not _is_assistant(message):
            continue
        for raw in _get(message, "tool_calls") or []:
            calls.append(_tool_call(raw))
    return calls


def evaluate_correct_tools(
    expected: Sequence[str], actual: Sequence[str], allow_extra_tools: bool = True
) -> bool:
    """Check that every expected tool was called at least once.

    With ``allow_extra_tools`` False, every called tool must also be expected.
    """
    called = set(actual)
    if not all(name in called for name in expected):
        return False
    if not allow_extra_tools:
        allowed = set(expected)
        return all(name in allowed for name in actual)
    return True


def evaluate_correct_order(expected: Sequence[str], actual: Sequence[str]) -> bool:
    """Check that the expected tools appear in the calls as a subsequence."""
    cursor = 0
    for name in actual:
        if cursor < len(expected) and name == expected[cursor]:
            cursor += 1
    return cursor == len(expected)


def evaluate_efficiency(tool_call_count: int, max_tool_calls: int | None) -> bool:
    """Check the number of calls against the scenario's cap, if any."""
    if max_tool_calls is None:
        return True
    return tool_call_count <= max_tool_calls


def compute_score(correct_tools: bool, correct_order: bool, efficient: bool) -> float:
    """Weighted scenario score in [0, 1]."""
    return (
        (TOOLS_WEIGHT if correct_tools else 0.0)
        + (ORDER_WEIGHT if correct_order else 0.0)
        + (EFFICIENCY_WEIGHT if efficient else 0.0)
    )


def _max_allowed(scenario: Scenario) -> int:
    if scenario.max_tool_calls is None:
        return UNLIMITED_TOOL_CALLS
    return scenario.max_tool_calls


def seed_messages(query: str) -> list[dict[str, Any]]:
    """Build the conversation an agent starts from."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": query},
    ]


def judge(scenario: Scenario, calls: Sequence[ToolCall]) -> ToolUsageResult:
    """Judge extracted tool calls against a scenario."""
    expected = list(scenario.expected_tools)
    actual = [call.name for call in calls]

    correct_tools = evaluate_correct_tools(expected, actual, scenario.allow_extra_tools)
    correct_order = evaluate_correct_order(expected, actual)
    efficient = evaluate_efficiency(len(actual), scenario.max_tool_calls)

    issues: list[str] = []
    if not correct_tools:
        issues.append(f"Expected tools: [{', '.join(expected)}], got: [{', '.join(actual)}]")
    if not correct_order:
        issues.append("Tools called in wrong order")
    if not efficient:
        issues.append(f"Used {len(actual)} tools, max allowed: {scenario.max_tool_calls}")

    return ToolUsageResult(
        scenario_id=scenario.id,
        description=scenario.description,
        correct_tools=correct_tools,
        correct_order=correct_order,
        efficient=efficient,
        # Argument values are not judged.
        correct_parameters=True,
        expected_tools=expected,
        actual_tools=actual,
        tool_call_count=len(actual),
        max_allowed=_max_allowed(scenario),
        score=compute_score(correct_tools, correct_order, efficient),
        issues=issues,
    )


async def evaluate_scenario(scenario: Scenario, agent: Agent) -> ToolUsageResult:
    """Run one scenario against an agent and judge its tool usage.

    Errors raised by the agent are not caught here.

    Args:
        scenario: The scenario to run.
        agent: Async callable taking the seed messages and returning the
            full transcript.

    Returns:
        The scenario's ToolUsageResult.
    """
    logger.debug(f"Evaluating scenario {scenario.id}")
    transcript = await agent(seed_messages(scenario.query))
    return judge(scenario, extract_tool_calls(transcript))
