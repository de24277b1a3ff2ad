"""Scenario definition loader service."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

import yaml

from check_tool.document_input.document_context import DocumentContext, qualified_name

from .scenario_models import RuleLevel, Scenario, ScenarioConfiguration, ValidationRule


class ScenarioError(Exception):
    """Raised when the scenario definition is invalid."""


def load_scenarios(scenarios_uri: str, repository_uri: str | None = None) -> ScenarioConfiguration:
    """Load and validate the scenario definition referenced by ``scenarios_uri``.

    Rule files referenced by path resolve against ``repository_uri``, or against the
    directory of the scenario definition when no repository is given.
    """
    path = uri_to_path(scenarios_uri)
    if not path.is_file():
        raise ScenarioError(f"Scenario definition not found: {path}")
    repository = uri_to_path(repository_uri) if repository_uri else path.parent

    parsed = _read_yaml(path)
    if not isinstance(parsed, Mapping):
        raise ScenarioError("Scenario definition root must be a mapping.")

    name = _optional_string(parsed.get("name"), "name") or path.stem
    namespaces = _parse_namespaces(parsed.get("namespaces"))
    context = DocumentContext(repository=repository, namespaces=namespaces)

    entries = parsed.get("scenarios")
    if not isinstance(entries, Sequence) or isinstance(entries, str) or not entries:
        raise ScenarioError("Scenario definition requires a non-empty 'scenarios' list.")
    scenarios = tuple(
        _parse_scenario(entry, index, context) for index, entry in enumerate(entries)
    )
    return ScenarioConfiguration(
        name=name,
        source=path.as_uri(),
        scenarios=scenarios,
        context=context,
    )


def uri_to_path(uri: str) -> Path:
    """Convert a ``file:`` URI or plain path string to a filesystem path."""
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ScenarioError(f"Unsupported location scheme '{parsed.scheme}': {uri}")
    return Path(uri)


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Failed to parse {path}: {exc}") from exc
    except OSError as exc:
        raise ScenarioError(f"Failed to read {path}: {exc}") from exc


def _parse_namespaces(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ScenarioError("namespaces must be a mapping of prefix to namespace URI.")
    namespaces: dict[str, str] = {}
    for prefix, uri in value.items():
        namespaces[_require_non_empty_string(prefix, "namespaces prefix")] = (
            _require_non_empty_string(uri, f"namespaces.{prefix}")
        )
    return namespaces


def _parse_scenario(value: Any, index: int, context: DocumentContext) -> Scenario:
    label = f"scenarios[{index}]"
    section = _require_mapping(value, label)
    name = _require_non_empty_string(section.get("name"), f"{label}.name")
    match = _require_non_empty_string(section.get("match"), f"{label}.match")
    try:
        match = qualified_name(match, context.bindings())
    except KeyError as exc:
        raise ScenarioError(f"{label}.match uses unknown namespace prefix {exc}.") from exc
    rule_entries = _load_rule_entries(section.get("rules"), context.repository, label)
    rules = tuple(
        _parse_rule(entry, f"{label}.rules[{position}]", context)
        for position, entry in enumerate(rule_entries)
    )
    return Scenario(name=name, match=match, rules=rules)


def _load_rule_entries(value: Any, repository: Path, label: str) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, Sequence) and not isinstance(value, str):
        return value
    section = _require_mapping(value, f"{label}.rules")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ScenarioError(f"{label}.rules must not set both inline and path.")
    if inline:
        if not isinstance(inline, Sequence) or isinstance(inline, str):
            raise ScenarioError(f"{label}.rules.inline must be a list.")
        return inline
    if path_value:
        rules_path = _resolve_path(repository, _require_non_empty_string(path_value, "path"))
        if not rules_path.is_file():
            raise ScenarioError(f"Rules file not found: {rules_path}")
        loaded = _read_yaml(rules_path)
        if isinstance(loaded, Mapping):
            loaded = loaded.get("rules")
        if not isinstance(loaded, Sequence) or isinstance(loaded, str):
            raise ScenarioError(f"Rules file {rules_path} must contain a list of rules.")
        return loaded
    raise ScenarioError(f"{label}.rules requires either inline or path.")


def _parse_rule(value: Any, label: str, context: DocumentContext) -> ValidationRule:
    section = _require_mapping(value, label)
    rule_id = _require_non_empty_string(section.get("id"), f"{label}.id")
    path = _require_non_empty_string(section.get("path"), f"{label}.path")
    _validate_element_path(path, label, context)
    level_value = _optional_string(section.get("level"), f"{label}.level") or RuleLevel.ERROR.value
    try:
        level = RuleLevel(level_value.lower())
    except ValueError as exc:
        raise ScenarioError(f"{label}.level must be 'error' or 'warning'.") from exc
    pattern_value = _optional_string(section.get("pattern"), f"{label}.pattern")
    try:
        pattern = re.compile(pattern_value) if pattern_value else None
    except re.error as exc:
        raise ScenarioError(f"{label}.pattern is not a valid regular expression: {exc}") from exc
    return ValidationRule(
        rule_id=rule_id,
        path=path,
        level=level,
        message=_optional_string(section.get("message"), f"{label}.message"),
        pattern=pattern,
    )


def _validate_element_path(path: str, label: str, context: DocumentContext) -> None:
    try:
        context.find_all(ET.Element("probe"), path)
    except (SyntaxError, KeyError) as exc:
        raise ScenarioError(f"{label}.path '{path}' is not a valid element path: {exc}") from exc


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ScenarioError(f"Scenario section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ScenarioError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ScenarioError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ScenarioError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
