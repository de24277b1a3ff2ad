"""Validation engine domain exports."""

from .check_engine import NO_SCENARIO_RULE, WELL_FORMEDNESS_RULE, CheckEngine, CheckStep
from .report_models import AssertionOutcome, CheckResult, Finding, ValidationReport

__all__ = [
    "NO_SCENARIO_RULE",
    "WELL_FORMEDNESS_RULE",
    "AssertionOutcome",
    "CheckEngine",
    "CheckResult",
    "CheckStep",
    "Finding",
    "ValidationReport",
]
