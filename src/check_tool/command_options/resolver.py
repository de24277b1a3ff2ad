"""Option resolver service turning parsed arguments into a run configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from .argument_parsing import ParsedArguments
from .option_schema import OptionSchema, OptionScope, OptionSpec
from .run_settings import (
    DEFAULT_DAEMON_HOST,
    DEFAULT_DAEMON_PORT,
    MAX_PORT,
    BatchSettings,
    DaemonSettings,
    RunConfiguration,
    default_worker_count,
)

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when command line options are missing, blank, or invalid."""


def resolve_run_configuration(parsed: ParsedArguments, schema: OptionSchema) -> RunConfiguration:
    """Validate ``parsed`` arguments and build the run configuration.

    The daemon flag selects daemon mode regardless of positional targets. Options that
    belong to the other mode are reported as warnings and otherwise ignored. In batch
    mode the output directory is created when missing.
    """
    daemon_mode = parsed.is_present("daemon")
    warn_foreign_options(parsed, schema, daemon_mode=daemon_mode)

    scenarios = _resolve_scenarios(require_option_value(parsed, schema["scenarios"]))
    repository = _resolve_repository(require_option_value(parsed, schema["repository"]))

    mode: BatchSettings | DaemonSettings
    if daemon_mode:
        if parsed.targets:
            logger.info("Ignoring test targets in daemon mode")
        mode = _resolve_daemon_settings(parsed, schema)
    else:
        mode = _resolve_batch_settings(parsed, schema)
    return RunConfiguration(scenarios=scenarios, repository=repository, mode=mode)


def require_option_value(parsed: ParsedArguments, spec: OptionSpec) -> str | None:
    """Return the non-blank value of ``spec``, or None when it is optional and absent.

    Raises:
      ConfigurationError: If the option is given with a blank value, or is required and absent.
    """
    if parsed.is_present(spec.key):
        value = parsed.value(spec.key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        raise ConfigurationError(f"Option value required for option '{spec.long_name}'.")
    if spec.required:
        raise ConfigurationError(f"Option '{spec.long_name}' is required.")
    return None


def warn_foreign_options(
    parsed: ParsedArguments, schema: OptionSchema, *, daemon_mode: bool
) -> None:
    """Log one warning per given option that has no effect in the selected mode."""
    foreign_scope = OptionScope.BATCH if daemon_mode else OptionScope.DAEMON
    mode_name = "daemon" if daemon_mode else "batch"
    for spec in schema.values():
        if spec.scope is foreign_scope and parsed.is_present(spec.key):
            logger.warning("The option %s is not available in %s mode", spec.long_name, mode_name)


def ensure_output_directory(value: str | None) -> Path:
    """Return the output directory, creating it when it does not exist yet."""
    directory = Path(value) if value else Path.cwd()
    if directory.exists():
        if not directory.is_dir():
            raise ConfigurationError(f"Invalid target directory {directory} specified")
        return directory
    try:
        directory.mkdir(parents=True)
    except OSError as exc:
        raise ConfigurationError(f"Invalid target directory {directory} specified: {exc}") from exc
    logger.debug("Created output directory %s", directory)
    return directory


def _resolve_batch_settings(parsed: ParsedArguments, schema: OptionSchema) -> BatchSettings:
    output_directory = ensure_output_directory(
        require_option_value(parsed, schema["output_directory"])
    )
    assertions_value = require_option_value(parsed, schema["check_assertions"])
    return BatchSettings(
        output_directory=output_directory,
        targets=parsed.targets,
        print_report=parsed.is_present("print_report"),
        extract_html=parsed.is_present("extract_html"),
        serialize_report_input=parsed.is_present("serialize_report_input"),
        debug=parsed.is_present("debug"),
        print_memory_stats=parsed.is_present("memory_stats"),
        assertions_path=Path(assertions_value) if assertions_value else None,
        report_prefix=require_option_value(parsed, schema["report_prefix"]),
        report_postfix=require_option_value(parsed, schema["report_postfix"]),
    )


def _resolve_daemon_settings(parsed: ParsedArguments, schema: OptionSchema) -> DaemonSettings:
    host = require_option_value(parsed, schema["host"]) or DEFAULT_DAEMON_HOST
    port_value = require_option_value(parsed, schema["port"])
    threads_value = require_option_value(parsed, schema["threads"])
    return DaemonSettings(
        host=host,
        port=_parse_port(port_value) if port_value else DEFAULT_DAEMON_PORT,
        worker_count=(
            _parse_positive_int(threads_value, "threads")
            if threads_value
            else default_worker_count()
        ),
        gui_enabled=not parsed.is_present("disable_gui"),
    )


def _resolve_scenarios(value: str | None) -> str:
    if value is None:  # pragma: no cover - required options never resolve to None
        raise ConfigurationError("Option 'scenarios' is required.")
    path = Path(value)
    if not path.is_file():
        raise ConfigurationError(
            f"Not a valid path for scenario definition specified: '{path.absolute()}'"
        )
    return path.resolve().as_uri()


def _resolve_repository(value: str | None) -> str | None:
    if value is None:
        return None
    path = Path(value)
    if not path.is_dir():
        raise ConfigurationError(
            f"Not a valid path for repository definition specified: '{path.absolute()}'"
        )
    return path.resolve().as_uri()


def _parse_positive_int(value: str, option_name: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Option '{option_name}' must be an integer: {value}") from exc
    if number <= 0:
        raise ConfigurationError(f"Option '{option_name}' must be greater than zero.")
    return number


def _parse_port(value: str) -> int:
    port = _parse_positive_int(value, "port")
    if port > MAX_PORT:
        raise ConfigurationError(f"Option 'port' must be between 1 and {MAX_PORT}: {value}")
    return port
