"""Command option domain exports."""

from .argument_parsing import ParsedArguments, parse_arguments
from .option_schema import (
    PROGRAM_NAME,
    OptionSchema,
    OptionScope,
    OptionSpec,
    build_command,
    build_option_schema,
    is_help_requested,
    render_help,
)
from .resolver import (
    ConfigurationError,
    ensure_output_directory,
    require_option_value,
    resolve_run_configuration,
    warn_foreign_options,
)
from .run_settings import BatchSettings, DaemonSettings, RunConfiguration

__all__ = [
    "PROGRAM_NAME",
    "OptionSchema",
    "OptionScope",
    "OptionSpec",
    "ParsedArguments",
    "BatchSettings",
    "DaemonSettings",
    "RunConfiguration",
    "ConfigurationError",
    "build_command",
    "build_option_schema",
    "ensure_output_directory",
    "is_help_requested",
    "parse_arguments",
    "render_help",
    "require_option_value",
    "resolve_run_configuration",
    "warn_foreign_options",
]
