"""Mode dispatcher: the single entry operation for one command line invocation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import click

from check_tool.batch_execution.batch_run_use_case import execute_batch_run
from check_tool.batch_execution.run_contracts import RunOutcome
from check_tool.command_options import (
    ConfigurationError,
    DaemonSettings,
    OptionSchema,
    RunConfiguration,
    build_option_schema,
    is_help_requested,
    parse_arguments,
    render_help,
    resolve_run_configuration,
)
from check_tool.daemon.validation_daemon import DaemonError, ValidationDaemon
from check_tool.logging_setup import configure_cli_logging
from check_tool.scenario_loading.loader import ScenarioError, load_scenarios
from check_tool.scenario_loading.scenario_models import ScenarioConfiguration

from .dispatch_contracts import (
    EXIT_FATAL,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    CommandOutcome,
    DaemonStarted,
    Exited,
)

logger = logging.getLogger(__name__)

BatchRunner = Callable[[RunConfiguration], RunOutcome]
ScenarioLoader = Callable[[str, str | None], ScenarioConfiguration]
DaemonFactory = Callable[..., ValidationDaemon]


def dispatch(
    argv: Sequence[str],
    *,
    schema: OptionSchema | None = None,
    batch_runner: BatchRunner | None = None,
    scenario_loader: ScenarioLoader | None = None,
    daemon_factory: DaemonFactory | None = None,
) -> CommandOutcome:
    """Run one invocation in help, batch, or daemon mode.

    Help requests, argument grammar errors, and batch invocations without targets
    print usage and exit with 0. Batch runs exit with 0 (passed), 1 (validation failed),
    or -1 (fatal error). Daemon mode blocks until the daemon shuts down and returns
    ``DaemonStarted``.
    """
    option_schema = schema or build_option_schema()
    if is_help_requested(argv, option_schema):
        click.echo(render_help(option_schema))
        return Exited(EXIT_SUCCESS)

    configure_cli_logging()
    try:
        parsed = parse_arguments(argv, option_schema)
    except click.UsageError as exc:
        logger.error("Error processing command line arguments: %s", exc.format_message())
        click.echo(render_help(option_schema))
        return Exited(EXIT_SUCCESS)

    debug = parsed.is_present("debug")
    configure_cli_logging(debug=debug)
    if not parsed.is_present("daemon") and not parsed.targets:
        click.echo(render_help(option_schema))
        return Exited(EXIT_SUCCESS)
    try:
        configuration = resolve_run_configuration(parsed, option_schema)
    except ConfigurationError as exc:
        _log_fatal(exc, debug=debug)
        return Exited(EXIT_FATAL)

    if isinstance(configuration.mode, DaemonSettings):
        return _start_daemon(
            configuration,
            configuration.mode,
            scenario_loader=scenario_loader or load_scenarios,
            daemon_factory=daemon_factory or ValidationDaemon,
        )
    return _run_batch(configuration, batch_runner=batch_runner or execute_batch_run, debug=debug)


def _run_batch(
    configuration: RunConfiguration, *, batch_runner: BatchRunner, debug: bool
) -> CommandOutcome:
    try:
        outcome = batch_runner(configuration)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _log_fatal(exc, debug=debug)
        return Exited(EXIT_FATAL)
    return Exited(EXIT_SUCCESS if outcome.passed else EXIT_VALIDATION_FAILED)


def _start_daemon(
    configuration: RunConfiguration,
    settings: DaemonSettings,
    *,
    scenario_loader: ScenarioLoader,
    daemon_factory: DaemonFactory,
) -> CommandOutcome:
    try:
        scenarios = scenario_loader(configuration.scenarios, configuration.repository)
        daemon = daemon_factory(
            host=settings.host,
            port=settings.port,
            worker_count=settings.worker_count,
            gui_enabled=settings.gui_enabled,
        )
        daemon.start_server(scenarios)
    except (ScenarioError, DaemonError) as exc:
        _log_fatal(exc, debug=False)
        return Exited(EXIT_FATAL)
    return DaemonStarted()


def _log_fatal(exc: Exception, *, debug: bool) -> None:
    if debug:
        logger.exception(str(exc))
    else:
        logger.error(str(exc))
