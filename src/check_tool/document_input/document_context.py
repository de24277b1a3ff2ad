"""Shared XML processing context handed to the check engine and its steps."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

REPORT_NAMESPACE = "urn:check-tool:report"
REPORT_INPUT_NAMESPACE = "urn:check-tool:report-input"
XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

ET.register_namespace("rep", REPORT_NAMESPACE)
ET.register_namespace("in", REPORT_INPUT_NAMESPACE)
ET.register_namespace("xhtml", XHTML_NAMESPACE)

_BUILTIN_NAMESPACES = {
    "rep": REPORT_NAMESPACE,
    "in": REPORT_INPUT_NAMESPACE,
    "xhtml": XHTML_NAMESPACE,
}


@dataclass(frozen=True)
class DocumentContext:
    """Namespace bindings and repository location used while processing documents."""

    repository: Path
    namespaces: Mapping[str, str] = field(default_factory=dict)

    def bindings(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return prefix bindings for ElementTree path lookups."""
        merged = dict(_BUILTIN_NAMESPACES)
        merged.update(self.namespaces)
        if extra:
            merged.update(extra)
        return merged

    def parse(self, content: bytes) -> ET.Element:
        """Parse document bytes; raises ``xml.etree.ElementTree.ParseError``."""
        return ET.fromstring(content)

    def serialize(self, element: ET.Element) -> bytes:
        """Serialize ``element`` as an indented UTF-8 XML document."""
        tree = ET.ElementTree(element)
        ET.indent(tree)
        return ET.tostring(element, encoding="utf-8", xml_declaration=True)

    def find_all(
        self, element: ET.Element, path: str, extra: Mapping[str, str] | None = None
    ) -> list[ET.Element]:
        return element.findall(path, self.bindings(extra))


def qualified_name(tag: str, namespaces: Mapping[str, str]) -> str:
    """Expand ``prefix:local`` into Clark notation; other names are returned unchanged."""
    if tag.startswith("{") or ":" not in tag:
        return tag
    prefix, local = tag.split(":", 1)
    if prefix not in namespaces:
        raise KeyError(prefix)
    return f"{{{namespaces[prefix]}}}{local}"


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
