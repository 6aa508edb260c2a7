"""Data models for tool usage evaluation results.

Dataclasses matching the JSON schema of the persisted results artifact.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from evals.evaluator import ToolUsageResult


def _fraction(results: list[ToolUsageResult], attr: str) -> float:
    if not results:
        return 0.0
    return sum(1 for r in results if getattr(r, attr)) / len(results)


@dataclass
class FocusedEvaluationResults:
    """All scenario results for one model, with aggregate fractions."""

    model: str
    total_scenarios: int
    correct_tool_usage: float
    correct_order_usage: float
    efficiency_score: float
    correct_parameter_usage: float
    overall_score: float
    timestamp: datetime
    duration: int
    """Wall-clock milliseconds spent on the model's scenarios."""
    results: list[ToolUsageResult] = field(default_factory=list)

    @classmethod
    def aggregate(
        cls,
        model: str,
        results: list[ToolUsageResult],
        timestamp: datetime,
        duration: int,
    ) -> FocusedEvaluationResults:
        """Compute the per-model fractions from scenario results.

        Each fraction is the share of results whose judgment passed; the
        overall score is their unweighted mean, unlike the weighted
        per-scenario score.
        """
        tools = _fraction(results, "correct_tools")
        order = _fraction(results, "correct_order")
        efficiency = _fraction(results, "efficient")
        parameters = _fraction(results, "correct_parameters")
        return cls(
            model=model,
            total_scenarios=len(results),
            correct_tool_usage=tools,
            correct_order_usage=order,
            efficiency_score=efficiency,
            correct_parameter_usage=parameters,
            overall_score=(tools + order + efficiency + parameters) / 4,
            timestamp=timestamp,
            duration=duration,
            results=list(results),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible types."""
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data
