"""Check engine validating inputs against loaded scenarios."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from typing import Protocol

import click

from check_tool.document_input.document_context import DocumentContext
from check_tool.document_input.input_factory import Input
from check_tool.scenario_loading.scenario_models import (
    RuleLevel,
    Scenario,
    ScenarioConfiguration,
    ValidationRule,
)

from .report_models import CheckResult, Finding, ValidationReport
from .report_rendering import render_report, render_report_input

logger = logging.getLogger(__name__)

WELL_FORMEDNESS_RULE = "well-formedness"
NO_SCENARIO_RULE = "no-scenario"


class CheckStep(Protocol):  # pylint: disable=too-few-public-methods
    """Post-processing action applied to every check result."""

    def process(self, result: CheckResult) -> None: ...


class CheckEngine:
    """Validates inputs and applies the configured check steps to each result."""

    def __init__(self, configuration: ScenarioConfiguration) -> None:
        self._configuration = configuration
        self._check_steps: list[CheckStep] = []

    @property
    def context(self) -> DocumentContext:
        return self._configuration.context

    @property
    def check_steps(self) -> tuple[CheckStep, ...]:
        return tuple(self._check_steps)

    def add_check_step(self, step: CheckStep) -> None:
        self._check_steps.append(step)

    def validate(self, document: Input) -> ValidationReport:
        """Validate ``document`` without running any check step."""
        try:
            root = self.context.parse(document.content)
        except ET.ParseError as exc:
            finding = Finding(
                WELL_FORMEDNESS_RULE, RuleLevel.ERROR, f"Document is not well-formed: {exc}"
            )
            return _build_report(document, None, well_formed=False, findings=(finding,))

        scenario = self._configuration.select(root.tag)
        if scenario is None:
            finding = Finding(
                NO_SCENARIO_RULE,
                RuleLevel.ERROR,
                f"No scenario matches root element {root.tag}",
            )
            return _build_report(document, None, well_formed=True, findings=(finding,))

        findings = tuple(self._evaluate_scenario(root, scenario))
        return _build_report(document, scenario.name, well_formed=True, findings=findings)

    def check_input(self, document: Input) -> CheckResult:
        """Validate ``document`` and run every check step in order."""
        logger.debug("Checking %s", document.name)
        result = CheckResult(input=document, report=self.validate(document))
        for step in self._check_steps:
            step.process(result)
        return result

    def print_and_evaluate(self, results: Sequence[CheckResult]) -> bool:
        """Print a summary table of ``results`` and return the overall verdict."""
        click.echo(_format_summary(results))
        return bool(results) and all(result.is_successful for result in results)

    def _evaluate_scenario(self, root: ET.Element, scenario: Scenario) -> list[Finding]:
        findings: list[Finding] = []
        for rule in scenario.rules:
            findings.extend(self._evaluate_rule(root, rule))
        return findings

    def _evaluate_rule(self, root: ET.Element, rule: ValidationRule) -> list[Finding]:
        elements = self.context.find_all(root, rule.path)
        if not elements:
            message = rule.message or f"Required element {rule.path} not found"
            return [Finding(rule.rule_id, rule.level, message, rule.path)]
        if rule.pattern is None:
            return []
        findings = []
        for element in elements:
            text = (element.text or "").strip()
            if not rule.pattern.fullmatch(text):
                message = rule.message or (
                    f"Value '{text}' of {rule.path} does not match {rule.pattern.pattern}"
                )
                findings.append(Finding(rule.rule_id, rule.level, message, rule.path))
        return findings


def _build_report(
    document: Input,
    scenario_name: str | None,
    *,
    well_formed: bool,
    findings: tuple[Finding, ...],
) -> ValidationReport:
    acceptable = (
        well_formed
        and scenario_name is not None
        and not any(finding.level is RuleLevel.ERROR for finding in findings)
    )
    return ValidationReport(
        input_name=document.name,
        scenario_name=scenario_name,
        well_formed=well_formed,
        findings=findings,
        document=render_report(
            document,
            scenario_name=scenario_name,
            well_formed=well_formed,
            findings=findings,
            acceptable=acceptable,
        ),
        report_input=render_report_input(
            document,
            scenario_name=scenario_name,
            well_formed=well_formed,
            findings=findings,
        ),
    )


def _format_summary(results: Sequence[CheckResult]) -> str:
    headers = ("Name", "Scenario", "Acceptable", "Errors", "Warnings", "Assertions")
    rows = [headers]
    for result in results:
        outcome = result.assertion_outcome
        assertions = "-"
        if outcome is not None:
            assertions = f"{outcome.checked - len(outcome.failures)}/{outcome.checked}"
        rows.append(
            (
                result.input.name,
                result.report.scenario_name or "-",
                "yes" if result.report.acceptable else "no",
                str(result.report.error_count),
                str(result.report.warning_count),
                assertions,
            )
        )
    widths = [max(len(row[column]) for row in rows) for column in range(len(headers))]
    lines = [
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths, strict=True)).rstrip()
        for row in rows
    ]
    accepted = sum(1 for result in results if result.report.acceptable)
    lines.append(f"Acceptable: {accepted}  Rejected: {len(results) - accepted}")
    return "\n".join(lines)
