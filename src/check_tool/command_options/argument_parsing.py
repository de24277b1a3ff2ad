"""Raw argument parsing into option values and presence information."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from click.core import ParameterSource

from .option_schema import PROGRAM_NAME, TARGETS_PARAMETER, OptionSchema, build_command


@dataclass(frozen=True)
class ParsedArguments:
    """Parsed command line: option values, options given explicitly, and positional targets."""

    values: Mapping[str, object]
    present: frozenset[str]
    targets: tuple[str, ...]

    def is_present(self, key: str) -> bool:
        return key in self.present

    def value(self, key: str) -> object:
        return self.values.get(key)


def parse_arguments(argv: Sequence[str], schema: OptionSchema) -> ParsedArguments:
    """Parse ``argv`` against ``schema``.

    Raises:
      click.UsageError: If the argument grammar is violated (unknown option, missing value).
    """
    command = build_command(schema)
    with command.make_context(PROGRAM_NAME, list(argv)) as ctx:
        present = frozenset(
            key
            for key in schema
            if ctx.get_parameter_source(key) is ParameterSource.COMMANDLINE
        )
        values = {key: ctx.params.get(key) for key in schema}
        targets = tuple(ctx.params.get(TARGETS_PARAMETER) or ())
    return ParsedArguments(values=values, present=present, targets=targets)
