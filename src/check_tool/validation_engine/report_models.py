"""Validation report entities."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from check_tool.document_input.input_factory import Input
from check_tool.scenario_loading.scenario_models import RuleLevel


@dataclass(frozen=True)
class Finding:
    """One failed rule, or a document-level problem."""

    rule_id: str
    level: RuleLevel
    message: str
    path: str | None = None


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one input, with its rendered report documents."""

    input_name: str
    scenario_name: str | None
    well_formed: bool
    findings: tuple[Finding, ...]
    document: ET.Element
    report_input: ET.Element

    @property
    def error_count(self) -> int:
        return sum(1 for finding in self.findings if finding.level is RuleLevel.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for finding in self.findings if finding.level is RuleLevel.WARNING)

    @property
    def acceptable(self) -> bool:
        """Return True when a scenario matched and no error-level finding exists."""
        return self.well_formed and self.scenario_name is not None and self.error_count == 0


@dataclass(frozen=True)
class AssertionOutcome:
    """Result of checking expected-result assertions against one report."""

    checked: int
    failures: tuple[str, ...]

    @property
    def passed(self) -> bool:
        return not self.failures


@dataclass
class CheckResult:
    """Validation report for one input plus artifacts recorded by check steps."""

    input: Input
    report: ValidationReport
    report_path: Path | None = None
    assertion_outcome: AssertionOutcome | None = None

    @property
    def is_successful(self) -> bool:
        """Assertion results decide when present, otherwise report acceptance does."""
        if self.assertion_outcome is not None:
            return self.assertion_outcome.passed
        return self.report.acceptable
