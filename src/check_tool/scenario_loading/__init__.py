"""Scenario loading domain exports."""

from .loader import ScenarioError, load_scenarios, uri_to_path
from .scenario_models import RuleLevel, Scenario, ScenarioConfiguration, ValidationRule

__all__ = [
    "RuleLevel",
    "Scenario",
    "ScenarioConfiguration",
    "ScenarioError",
    "ValidationRule",
    "load_scenarios",
    "uri_to_path",
]
