"""Tests for the run orchestrator and result aggregation."""

from dataclasses import fields
from unittest.mock import AsyncMock, MagicMock

import pytest

from evals.evaluator import ToolUsageResult
from evals.reporting.models import FocusedEvaluationResults
from evals.reporting.reporter import EvaluationReporter
from evals.runner import DEFAULT_MODELS, ModelSpec, evaluate_model, evaluate_models
from evals.scenarios import TOOL_USAGE_SCENARIOS, Scenario


def _scenario(scenario_id: str, tools: list[str]) -> Scenario:
    return Scenario(
        id=scenario_id,
        description=f"Scenario {scenario_id}",
        query=f"Do {scenario_id}",
        expected_tools=tuple(tools),
        max_tool_calls=3,
    )


def _transcript(*names: str) -> list[dict]:
    return [
        {
            "role": "assistant",
            "tool_calls": [
                {"id": str(i), "type": "function", "function": {"name": n, "arguments": "{}"}}
                for i, n in enumerate(names)
            ],
        }
    ]


def _result(scenario_id: str, **flags: bool) -> ToolUsageResult:
    return ToolUsageResult(
        scenario_id=scenario_id,
        description=scenario_id,
        correct_tools=flags.get("tools", True),
        correct_order=flags.get("order", True),
        efficient=flags.get("efficient", True),
        correct_parameters=flags.get("parameters", True),
        expected_tools=("A",),
        actual_tools=["A"],
        tool_call_count=1,
        max_allowed=999,
        score=1.0,
    )


class TestEvaluateModel:
    """Tests for evaluate_model."""

    @pytest.fixture
    def reporter(self) -> MagicMock:
        """Create a mock reporter."""
        return MagicMock(spec=EvaluationReporter)

    async def test_failing_scenario_does_not_abort_run(self, reporter: MagicMock) -> None:
        """A scenario that raises becomes a zero-score result; the rest still run."""
        scenarios = [_scenario("one", ["A"]), _scenario("two", ["B"]), _scenario("three", ["C"])]

        async def agent(messages: list[dict]) -> list[dict]:
            query = messages[-1]["content"]
            if query == "Do two":
                raise RuntimeError("rate limited")
            return messages + _transcript({"Do one": "A", "Do three": "C"}[query])

        result = await evaluate_model("test-model", agent, scenarios, reporter)

        assert [r.scenario_id for r in result.results] == ["one", "two", "three"]
        assert result.results[0].score == 1.0
        assert result.results[2].score == 1.0

        failed = result.results[1]
        assert failed.score == 0
        assert failed.correct_tools is False
        assert failed.correct_order is False
        assert failed.efficient is False
        assert failed.correct_parameters is False
        assert failed.actual_tools == []
        assert failed.tool_call_count == 0
        assert failed.max_allowed == 3
        assert failed.issues == ["Execution error: rate limited"]

        assert reporter.print_scenario_progress.call_count == 2
        reporter.print_scenario_error.assert_called_once()
        index, total, scenario, error = reporter.print_scenario_error.call_args.args
        assert (index, total, scenario.id) == (1, 3, "two")
        assert str(error) == "rate limited"

    async def test_aggregates(self, reporter: MagicMock) -> None:
        """Fractions, overall mean and bookkeeping are filled in."""
        scenarios = [_scenario("one", ["A"]), _scenario("two", ["B"])]
        agent = AsyncMock(return_value=_transcript("A"))

        result = await evaluate_model("test-model", agent, scenarios, reporter)

        assert result.model == "test-model"
        assert result.total_scenarios == 2
        assert result.correct_tool_usage == 0.5
        assert result.correct_order_usage == 0.5
        assert result.efficiency_score == 1.0
        assert result.correct_parameter_usage == 1.0
        assert result.overall_score == 0.75
        assert result.duration >= 0
        assert result.timestamp is not None

    async def test_scenarios_run_sequentially_in_order(self, reporter: MagicMock) -> None:
        """Scenarios are evaluated one at a time in catalog order."""
        seen: list[str] = []

        async def agent(messages: list[dict]) -> list[dict]:
            seen.append(messages[-1]["content"])
            return messages

        scenarios = [_scenario(str(i), ["A"]) for i in range(5)]
        await evaluate_model("m", agent, scenarios, reporter)

        assert seen == [f"Do {i}" for i in range(5)]


class TestAggregate:
    """Tests for FocusedEvaluationResults.aggregate."""

    def test_three_of_four_correct_tools(self) -> None:
        """3 of 4 correct gives exactly 0.75."""
        results = [
            _result("a"),
            _result("b"),
            _result("c"),
            _result("d", tools=False),
        ]

        aggregated = FocusedEvaluationResults.aggregate("m", results, MagicMock(), 10)

        assert aggregated.correct_tool_usage == 0.75
        assert aggregated.overall_score == (0.75 + 1.0 + 1.0 + 1.0) / 4

    def test_empty_results(self) -> None:
        """No results give zero fractions instead of dividing by zero."""
        aggregated = FocusedEvaluationResults.aggregate("m", [], MagicMock(), 0)

        assert aggregated.total_scenarios == 0
        assert aggregated.overall_score == 0.0


class TestEvaluateModels:
    """Tests for evaluate_models."""

    async def test_seeds_before_each_model(self) -> None:
        """Fixtures are reseeded before every model, in model order."""
        events: list[str] = []

        async def seed() -> None:
            events.append("seed")

        def agent_factory(spec: ModelSpec):
            async def agent(messages: list[dict]) -> list[dict]:
                events.append(spec.name)
                return messages + _transcript("A")

            return agent

        reporter = MagicMock(spec=EvaluationReporter)
        models = [ModelSpec("first", "m1"), ModelSpec("second", "m2")]

        results = await evaluate_models(
            models, agent_factory, seed, [_scenario("one", ["A"])], reporter
        )

        assert events == ["seed", "first", "seed", "second"]
        assert [r.model for r in results] == ["first", "second"]
        assert reporter.print_model_summary.call_count == 2

    async def test_seed_failure_aborts(self) -> None:
        """A fixture upload failure stops the run."""
        seed = AsyncMock(side_effect=RuntimeError("Failed to upload test document doc-111"))
        factory = MagicMock()

        with pytest.raises(RuntimeError, match="doc-111"):
            await evaluate_models([ModelSpec("m", "m")], factory, seed, [], MagicMock())

        factory.assert_not_called()


class TestCatalog:
    """Tests for the built-in model list and scenario catalog."""

    def test_default_models(self) -> None:
        """o3-mini runs without a temperature, the rest at zero."""
        temps = {m.name: m.temperature for m in DEFAULT_MODELS}

        assert temps == {
            "GPT-4o": 0.0,
            "GPT-4o-mini": 0.0,
            "GPT-4.1-mini": 0.0,
            "GPT-4.1-nano": 0.0,
            "o3-mini": None,
        }

    def test_scenario_ids_unique(self) -> None:
        """Scenario IDs are unique and every scenario expects tools."""
        ids = [s.id for s in TOOL_USAGE_SCENARIOS]

        assert len(ids) == len(set(ids))
        assert all(s.expected_tools for s in TOOL_USAGE_SCENARIOS)

    def test_scenarios_are_hashable(self) -> None:
        """Frozen scenarios hash by value and can key a dict."""
        first = TOOL_USAGE_SCENARIOS[0]
        copy = Scenario(
            id=first.id,
            description=first.description,
            query=first.query,
            expected_tools=tuple(first.expected_tools),
            max_tool_calls=first.max_tool_calls,
            allow_extra_tools=first.allow_extra_tools,
        )

        assert len({s: s.id for s in TOOL_USAGE_SCENARIOS}) == len(TOOL_USAGE_SCENARIOS)
        assert hash(copy) == hash(first)
        assert all(isinstance(s.expected_tools, tuple) for s in TOOL_USAGE_SCENARIOS)

    def test_scenarios_carry_no_parameter_expectations(self) -> None:
        """Only tool names, order and call budget are judged."""
        names = {f.name for f in fields(Scenario)}

        assert names == {
            "id",
            "description",
            "query",
            "expected_tools",
            "max_tool_calls",
            "allow_extra_tools",
        }
