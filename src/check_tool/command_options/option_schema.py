"""Declarative command line option schema and its click binding."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

import click

PROGRAM_NAME = "check-tool"
TARGETS_PARAMETER = "targets"


class OptionScope(str, Enum):
    """Run mode an option is meaningful in."""

    COMMON = "common"
    BATCH = "batch"
    DAEMON = "daemon"


@dataclass(frozen=True)
class OptionSpec:  # pylint: disable=too-many-instance-attributes
    """Metadata for one command line option."""

    key: str
    long_name: str
    short_name: str | None
    help_text: str
    scope: OptionScope
    takes_value: bool = False
    required: bool = False
    metavar: str | None = None

    @property
    def flags(self) -> tuple[str, ...]:
        """Command line spellings, short form first."""
        long_flag = f"--{self.long_name}"
        if self.short_name:
            return (f"-{self.short_name}", long_flag)
        return (long_flag,)


OptionSchema = Mapping[str, OptionSpec]

_OPTION_SPECS: tuple[OptionSpec, ...] = (
    OptionSpec("help", "help", "?", "Displays this help", OptionScope.COMMON),
    OptionSpec(
        "scenarios",
        "scenarios",
        "s",
        "Location of the scenario definition file",
        OptionScope.COMMON,
        takes_value=True,
        required=True,
        metavar="URI",
    ),
    OptionSpec(
        "repository",
        "repository",
        "r",
        "Directory containing scenario content",
        OptionScope.COMMON,
        takes_value=True,
        metavar="URI",
    ),
    OptionSpec(
        "print_report", "print", "p", "Prints the check result to stdout", OptionScope.BATCH
    ),
    OptionSpec(
        "output_directory",
        "output-directory",
        "o",
        "Defines the out directory for results. Defaults to cwd",
        OptionScope.BATCH,
        takes_value=True,
        metavar="PATH",
    ),
    OptionSpec(
        "extract_html",
        "html",
        "h",
        "Extract and save any html content within result as a separate file",
        OptionScope.BATCH,
    ),
    OptionSpec("debug", "debug", "d", "Prints some more debug information", OptionScope.BATCH),
    OptionSpec(
        "serialize_report_input",
        "serialize-report-input",
        None,
        "Serializes the report input to the output directory",
        OptionScope.BATCH,
    ),
    OptionSpec(
        "check_assertions",
        "check-assertions",
        "c",
        "Check the result using defined assertions",
        OptionScope.BATCH,
        takes_value=True,
        metavar="ASSERTIONS-FILE",
    ),
    OptionSpec(
        "daemon",
        "daemon",
        "D",
        "Starts a daemon listening for validation requests",
        OptionScope.COMMON,
    ),
    OptionSpec(
        "host",
        "host",
        "H",
        "The hostname / IP address to bind the daemon. Default is localhost",
        OptionScope.DAEMON,
        takes_value=True,
        metavar="HOST",
    ),
    OptionSpec(
        "port",
        "port",
        "P",
        "The port to bind the daemon. Default is 8080",
        OptionScope.DAEMON,
        takes_value=True,
        metavar="PORT",
    ),
    OptionSpec(
        "threads",
        "threads",
        "T",
        "Number of threads processing validation requests",
        OptionScope.DAEMON,
        takes_value=True,
        metavar="COUNT",
    ),
    OptionSpec(
        "disable_gui", "disable-gui", "G", "Disables the GUI of the daemon mode", OptionScope.DAEMON
    ),
    OptionSpec(
        "report_prefix",
        "report-prefix",
        None,
        "Prefix of the generated report name",
        OptionScope.BATCH,
        takes_value=True,
        metavar="PREFIX",
    ),
    OptionSpec(
        "report_postfix",
        "report-postfix",
        None,
        "Postfix of the generated report name",
        OptionScope.BATCH,
        takes_value=True,
        metavar="POSTFIX",
    ),
    OptionSpec("memory_stats", "memory-stats", "m", "Prints some memory stats", OptionScope.BATCH),
)


def build_option_schema() -> dict[str, OptionSpec]:
    """Return the option schema keyed by option identifier, in display order."""
    return {spec.key: spec for spec in _OPTION_SPECS}


def build_command(schema: OptionSchema) -> click.Command:
    """Build the click command that parses arguments according to ``schema``."""
    params: list[click.Parameter] = [_to_click_option(spec) for spec in schema.values()]
    params.append(click.Argument([TARGETS_PARAMETER], nargs=-1, metavar="[FILE]..."))
    return click.Command(
        name=PROGRAM_NAME,
        params=params,
        add_help_option=False,
        options_metavar="-s <scenario-config-file> [OPTIONS]",
        help="Validates XML documents against configured scenarios.",
    )


def render_help(schema: OptionSchema) -> str:
    """Render usage text for the command built from ``schema``."""
    command = build_command(schema)
    with click.Context(command, info_name=PROGRAM_NAME) as ctx:
        return command.get_help(ctx)


def is_help_requested(argv: Sequence[str], schema: OptionSchema) -> bool:
    """Return True for empty argument lists or when the help flag appears."""
    if not argv:
        return True
    help_flags = set(schema["help"].flags)
    for argument in argv:
        if argument == "--":
            break
        if argument in help_flags:
            return True
    return False


def _to_click_option(spec: OptionSpec) -> click.Option:
    help_text = f"{spec.help_text} (required)" if spec.required else spec.help_text
    declarations = [spec.key, *spec.flags]
    if spec.takes_value:
        return click.Option(declarations, default=None, metavar=spec.metavar, help=help_text)
    return click.Option(declarations, is_flag=True, default=False, help=help_text)
