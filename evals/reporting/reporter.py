"""Console reporting and persistence of tool usage evaluation results.

No scoring happens here: the reporter only renders and saves what the
orchestrator computed.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from evals.evaluator import ToolUsageResult
from evals.reporting.formatting import medal, most_common, percent, score_glyph, table_row
from evals.reporting.models import FocusedEvaluationResults
from evals.scenarios import Scenario

logger = logging.getLogger(__name__)

BANNER_WIDTH = 80
_COLUMN_WIDTHS = [20, 10, 10, 10]


def results_filename(now: datetime | None = None) -> str:
    """Artifact name derived from the current UTC time, e.g. 2025-01-02T03:04:05.678Z.json."""
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z") + ".json"


class EvaluationReporter:
    """Prints progress, per-model summaries and the cross-model comparison."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _print(self, text: str = "") -> None:
        print(text, file=self._stream or sys.stdout)

    def print_scenario_progress(
        self, index: int, total: int, scenario: Scenario, result: ToolUsageResult
    ) -> None:
        """Print one line for a scored scenario."""
        self._print(
            f"   {index + 1}/{total} {score_glyph(result.score)} "
            f"{scenario.description} ({percent(result.score, 0)})"
        )

    def print_scenario_error(
        self, index: int, total: int, scenario: Scenario, error: Exception | str
    ) -> None:
        """Print one line for a scenario that could not run."""
        self._print(f"   {index + 1}/{total} ❌ {scenario.description} - ERROR: {error}")

    def print_model_summary(self, result: FocusedEvaluationResults) -> None:
        """Print the aggregate fractions of one model."""
        self._print(f"   Overall Score: {percent(result.overall_score)}")
        self._print(f"   Correct Tools: {percent(result.correct_tool_usage)}")
        self._print(f"   Correct Order: {percent(result.correct_order_usage)}")
        self._print(f"   Efficiency: {percent(result.efficiency_score)}")

    def print_comparison(self, results: list[FocusedEvaluationResults]) -> None:
        """Print the ranking, the breakdown table and the key insights."""
        self._print("\n" + "=" * BANNER_WIDTH)
        self._print("\U0001f3c6 MODEL COMPARISON - TOOL USAGE EFFECTIVENESS")
        self._print("=" * BANNER_WIDTH)

        ranked = sorted(results, key=lambda r: r.overall_score, reverse=True)

        self._print("\n\U0001f4ca OVERALL RANKINGS:")
        for rank, result in enumerate(ranked, start=1):
            self._print(
                f"{medal(rank)} {rank}. {result.model:<20} {percent(result.overall_score)}"
            )

        self._print("\n\U0001f4cb DETAILED BREAKDOWN:")
        self._print(table_row(["Model", "Overall", "Tools", "Order", "Efficiency"], _COLUMN_WIDTHS))
        self._print("-" * 60)
        for result in ranked:
            self._print(
                table_row(
                    [
                        result.model,
                        percent(result.overall_score),
                        percent(result.correct_tool_usage),
                        percent(result.correct_order_usage),
                        percent(result.efficiency_score),
                    ],
                    _COLUMN_WIDTHS,
                )
            )

        self._print("\n\U0001f3af KEY INSIGHTS:")
        best, worst = key_insights(results)
        if best:
            self._print(f"✅ Best performing scenario: {best} (consistent across models)")
        if worst:
            self._print(f"❌ Most challenging scenario: {worst} (needs improvement)")
        self._print("=" * BANNER_WIDTH)

    def save_results(
        self, results: list[FocusedEvaluationResults], results_dir: Path
    ) -> Path | None:
        """Write all results to a timestamped JSON file.

        Failures are logged and swallowed so the printed report still stands.

        Returns:
            The written path, or None if saving failed.
        """
        path = results_dir / results_filename()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps([r.to_dict() for r in results], indent=2))
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save results: {e}")
            return None
        logger.info(f"Results saved to: {path}")
        self._print(f"\n\U0001f4c1 Results saved to: {path}")
        return path


def key_insights(results: list[FocusedEvaluationResults]) -> tuple[str | None, str | None]:
    """Find the most common perfect scenario and the most common failing one.

    Scenario results are pooled across models; a perfect result scores
    1.0 and a failing one scores below 0.5.

    Returns:
        (best scenario ID, worst scenario ID); either is None when no
        result qualifies.
    """
    pooled = [r for model in results for r in model.results]
    perfect = [r.scenario_id for r in pooled if r.score == 1.0]
    failing = [r.scenario_id for r in pooled if r.score < 0.5]
    return (
        most_common(perfect) if perfect else None,
        most_common(failing) if failing else None,
    )
