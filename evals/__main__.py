"""Run the tool usage evaluation: ``python -m evals``.

Starts the Document Engine MCP server in-process, evaluates the built-in
model list against the scenario catalog, prints the comparison and saves
the results as JSON.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from pydantic import ValidationError

from evals.agent import MCPAgent
from evals.config import EvalConfig
from evals.fixtures import FixtureSeeder
from evals.reporting.models import FocusedEvaluationResults
from evals.reporting.reporter import EvaluationReporter
from evals.runner import DEFAULT_MODELS, ModelSpec, evaluate_models
from evals.tool_surface import ToolSurface

logger = logging.getLogger(__name__)


async def run(config: EvalConfig) -> list[FocusedEvaluationResults]:
    """Evaluate DEFAULT_MODELS and report the results."""
    reporter = EvaluationReporter()

    async with ToolSurface.running() as surface:
        seeder = FixtureSeeder(surface.client, config.assets_dir)

        def agent_for(spec: ModelSpec) -> MCPAgent:
            model_config = config.model_copy(
                update={"llm_model": spec.model, "llm_temperature": spec.temperature}
            )
            return MCPAgent(model_config, surface)

        results = await evaluate_models(
            DEFAULT_MODELS, agent_for, seeder.seed, reporter=reporter
        )

    reporter.print_comparison(results)
    reporter.save_results(results, config.results_dir)
    return results


def main() -> None:
    """Entry point for the evaluation."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        config = EvalConfig()
    except ValidationError as e:
        logger.error(f"Invalid evaluation configuration: {e}")
        sys.exit(1)

    asyncio.run(run(config))


if __name__ == "__main__":
    main()
