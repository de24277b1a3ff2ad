"""Expected-result assertions and the check step applying them."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from check_tool.document_input.document_context import DocumentContext
from check_tool.validation_engine.report_models import AssertionOutcome, CheckResult

logger = logging.getLogger(__name__)


class AssertionsError(Exception):
    """Raised when the assertions file is malformed."""


@dataclass(frozen=True)
class Assertion:
    """Expectation about the report of one named document."""

    report: str
    path: str
    expected: str | None = None
    description: str | None = None

    def applies_to(self, input_name: str) -> bool:
        return self.report in (input_name, Path(input_name).stem)


@dataclass(frozen=True)
class Assertions:
    """Assertions loaded from one file, with their namespace bindings."""

    namespaces: Mapping[str, str]
    entries: tuple[Assertion, ...]

    def for_input(self, input_name: str) -> tuple[Assertion, ...]:
        return tuple(entry for entry in self.entries if entry.applies_to(input_name))


def load_assertions(path: Path | str) -> Assertions | None:
    """Load assertions from ``path``; returns None when the file does not exist.

    Raises:
      AssertionsError: If the file exists but cannot be parsed or validated.
    """
    source = Path(path)
    if not source.exists():
        return None
    try:
        parsed = yaml.safe_load(source.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as exc:
        raise AssertionsError(f"Failed to read assertions file {source}: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise AssertionsError("Assertions file root must be a mapping.")

    namespaces = parsed.get("namespaces") or {}
    if not isinstance(namespaces, Mapping) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in namespaces.items()
    ):
        raise AssertionsError("Assertions namespaces must map prefixes to namespace URIs.")

    entries = parsed.get("assertions")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise AssertionsError("Assertions file requires an 'assertions' list.")
    return Assertions(
        namespaces=dict(namespaces),
        entries=tuple(_parse_assertion(entry, index) for index, entry in enumerate(entries)),
    )


def _parse_assertion(value: Any, index: int) -> Assertion:
    label = f"assertions[{index}]"
    if not isinstance(value, Mapping):
        raise AssertionsError(f"{label} must be a mapping.")
    report = value.get("report")
    path = value.get("path")
    if not isinstance(report, str) or not report.strip():
        raise AssertionsError(f"{label}.report must be a non-empty string.")
    if not isinstance(path, str) or not path.strip():
        raise AssertionsError(f"{label}.path must be a non-empty string.")
    expected = value.get("expected")
    description = value.get("description")
    return Assertion(
        report=report.strip(),
        path=path.strip(),
        expected=None if expected is None else str(expected),
        description=None if description is None else str(description),
    )


class CheckAssertionAction:  # pylint: disable=too-few-public-methods
    """Evaluates assertions against the report of each checked input."""

    def __init__(self, assertions: Assertions, context: DocumentContext) -> None:
        self._assertions = assertions
        self._context = context

    def process(self, result: CheckResult) -> None:
        applicable = self._assertions.for_input(result.input.name)
        if not applicable:
            logger.warning("No assertions found for %s", result.input.name)
            return
        failures = []
        for assertion in applicable:
            failure = self._evaluate(result, assertion)
            if failure is not None:
                logger.error("Assertion mismatch for %s: %s", result.input.name, failure)
                failures.append(failure)
        result.assertion_outcome = AssertionOutcome(
            checked=len(applicable), failures=tuple(failures)
        )
        if not failures:
            logger.info("%d assertion(s) passed for %s", len(applicable), result.input.name)

    def _evaluate(self, result: CheckResult, assertion: Assertion) -> str | None:
        label = assertion.description or assertion.path
        try:
            elements = self._context.find_all(
                result.report.document, assertion.path, self._assertions.namespaces
            )
        except (SyntaxError, KeyError) as exc:
            return f"{label}: invalid path '{assertion.path}' ({exc})"
        if not elements:
            return f"{label}: nothing found at {assertion.path}"
        if assertion.expected is None:
            return None
        actual = (elements[0].text or "").strip()
        if actual != assertion.expected:
            return f"{label}: expected '{assertion.expected}' but found '{actual}'"
        return None
