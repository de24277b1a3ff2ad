"""Batch execution use-case service."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from check_tool.check_steps.pipeline_builder import build_check_pipeline
from check_tool.command_options.run_settings import BatchSettings, RunConfiguration
from check_tool.document_input.input_factory import Input, read_input
from check_tool.scenario_loading.loader import load_scenarios
from check_tool.scenario_loading.scenario_models import ScenarioConfiguration
from check_tool.target_resolution.target_finder import resolve_targets
from check_tool.validation_engine.check_engine import CheckEngine, CheckStep

from .run_contracts import RunOutcome

logger = logging.getLogger(__name__)

ScenarioLoader = Callable[[str, str | None], ScenarioConfiguration]
InputReader = Callable[[Path], Input]


def execute_batch_run(
    configuration: RunConfiguration,
    *,
    scenario_loader: ScenarioLoader | None = None,
    input_reader: InputReader | None = None,
) -> RunOutcome:
    """Resolve targets, set up the check engine and pipeline, and check every target.

    Errors are not caught here; the first failure aborts the whole run.
    """
    settings = configuration.mode
    if not isinstance(settings, BatchSettings):
        raise TypeError("Batch execution requires batch settings.")
    resolved_scenario_loader = scenario_loader or load_scenarios

    targets = resolve_targets(settings.targets)

    started = time.monotonic()
    scenarios = resolved_scenario_loader(configuration.scenarios, configuration.repository)
    engine = CheckEngine(scenarios)
    pipeline = build_check_pipeline(settings, scenarios.context)
    logger.info("Setup completed in %dms", _elapsed_ms(started))

    return check_targets(engine, targets, pipeline, input_reader=input_reader)


def check_targets(
    engine: CheckEngine,
    targets: Sequence[Path],
    pipeline: Sequence[CheckStep],
    *,
    input_reader: InputReader | None = None,
) -> RunOutcome:
    """Run ``engine`` with ``pipeline`` over ``targets`` in order and evaluate the outcome."""
    resolved_input_reader = input_reader or read_input
    for step in pipeline:
        engine.add_check_step(step)

    started = time.monotonic()
    outcome = RunOutcome()
    for target in targets:
        outcome.record(engine.check_input(resolved_input_reader(target)))
    outcome.finalize(engine.print_and_evaluate(outcome.results))
    logger.info(
        "Processing %d object(s) completed in %dms", outcome.processed_count, _elapsed_ms(started)
    )
    return outcome


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
