"""Run orchestration for the tool usage evaluation.

Evaluates every scenario against one model at a time, in catalog order,
and aggregates the results. Models run one after another because each
model's run starts from freshly seeded backend fixtures.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from evals.evaluator import Agent, ToolUsageResult, evaluate_scenario
from evals.reporting.models import FocusedEvaluationResults
from evals.reporting.reporter import EvaluationReporter
from evals.scenarios import TOOL_USAGE_SCENARIOS, Scenario

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelSpec:
    """A model to evaluate."""

    name: str
    """Display name used in reports."""

    model: str
    """Model identifier sent to the provider."""

    temperature: float | None = 0.0
    """None leaves the provider default (required by reasoning models)."""


DEFAULT_MODELS: list[ModelSpec] = [
    ModelSpec("GPT-4o", "gpt-4o"),
    ModelSpec("GPT-4o-mini", "gpt-4o-mini"),
    ModelSpec("GPT-4.1-mini", "gpt-4.1-mini"),
    ModelSpec("GPT-4.1-nano", "gpt-4.1-nano"),
    ModelSpec("o3-mini", "o3-mini", temperature=None),
]

AgentFactory = Callable[[ModelSpec], Agent]
Seed = Callable[[], Awaitable[None]]


async def evaluate_model(
    model_name: str,
    agent: Agent,
    scenarios: Sequence[Scenario] = TOOL_USAGE_SCENARIOS,
    reporter: EvaluationReporter | None = None,
) -> FocusedEvaluationResults:
    """Evaluate all scenarios against one agent.

    A scenario that raises is recorded as a zero-score result and the run
    moves on to the next one.

    Args:
        model_name: Display name of the model behind the agent.
        agent: Agent bound to the model and the tool surface.
        scenarios: Scenarios to run, in order.
        reporter: Receives one progress line per scenario.

    Returns:
        The model's aggregated results.
    """
    reporter = reporter or EvaluationReporter()
    timestamp = datetime.now(timezone.utc)
    started = time.monotonic()
    total = len(scenarios)
    logger.info(f"Running {total} tool usage scenarios for {model_name}")

    results: list[ToolUsageResult] = []
    for index, scenario in enumerate(scenarios):
        try:
            result = await evaluate_scenario(scenario, agent)
        except Exception as e:
            logger.error(f"Scenario {scenario.id} failed for {model_name}: {e}")
            reporter.print_scenario_error(index, total, scenario, e)
            results.append(ToolUsageResult.failed(scenario, e))
            continue
        results.append(result)
        reporter.print_scenario_progress(index, total, scenario, result)

    duration = round((time.monotonic() - started) * 1000)
    return FocusedEvaluationResults.aggregate(model_name, results, timestamp, duration)


async def evaluate_models(
    models: Sequence[ModelSpec],
    agent_factory: AgentFactory,
    seed: Seed,
    scenarios: Sequence[Scenario] = TOOL_USAGE_SCENARIOS,
    reporter: EvaluationReporter | None = None,
) -> list[FocusedEvaluationResults]:
    """Evaluate several models one after another.

    Fixtures are seeded again before each model so that every model starts
    from the same backend state; a seeding failure aborts the run.

    Args:
        models: Models to evaluate, in order.
        agent_factory: Builds the agent for a model.
        seed: Resets the backend fixtures.
        scenarios: Scenarios to run for each model.
        reporter: Receives progress lines and model summaries.

    Returns:
        One result set per model, in the order given.
    """
    reporter = reporter or EvaluationReporter()
    all_results: list[FocusedEvaluationResults] = []
    for spec in models:
        await seed()
        logger.info(f"Evaluating model: {spec.name}")
        result = await evaluate_model(spec.name, agent_factory(spec), scenarios, reporter)
        all_results.append(result)
        reporter.print_model_summary(result)
    return all_results
