"""Scenario definition entities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from check_tool.document_input.document_context import DocumentContext, local_name


class RuleLevel(str, Enum):
    """Severity of a failed validation rule."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationRule:
    """One check evaluated against a matched document."""

    rule_id: str
    path: str
    level: RuleLevel = RuleLevel.ERROR
    message: str | None = None
    pattern: re.Pattern[str] | None = None


@dataclass(frozen=True)
class Scenario:
    """Rules applied to documents whose root element matches ``match``."""

    name: str
    match: str
    rules: tuple[ValidationRule, ...]

    def matches(self, root_tag: str) -> bool:
        """Return True when ``root_tag`` fits this scenario's root element name."""
        if self.match.startswith("{"):
            return root_tag == self.match
        return local_name(root_tag) == self.match


@dataclass(frozen=True)
class ScenarioConfiguration:
    """Loaded scenario definitions plus the shared document processing context."""

    name: str
    source: str
    scenarios: tuple[Scenario, ...]
    context: DocumentContext

    def select(self, root_tag: str) -> Scenario | None:
        """Return the first scenario matching ``root_tag``."""
        for scenario in self.scenarios:
            if scenario.matches(root_tag):
                return scenario
        return None
