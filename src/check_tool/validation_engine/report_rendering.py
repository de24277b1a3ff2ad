"""Rendering of report and report-input documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import UTC, datetime

from check_tool.document_input.document_context import (
    REPORT_INPUT_NAMESPACE,
    REPORT_NAMESPACE,
    XHTML_NAMESPACE,
)
from check_tool.document_input.input_factory import DIGEST_ALGORITHM, Input

from .report_models import Finding


def _rep(local: str) -> str:
    return f"{{{REPORT_NAMESPACE}}}{local}"


def _in(local: str) -> str:
    return f"{{{REPORT_INPUT_NAMESPACE}}}{local}"


def _html(local: str) -> str:
    return f"{{{XHTML_NAMESPACE}}}{local}"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def render_report_input(
    document: Input,
    *,
    scenario_name: str | None,
    well_formed: bool,
    findings: Sequence[Finding],
) -> ET.Element:
    """Render the intermediate document the report is derived from."""
    root = ET.Element(_in("reportInput"), {"created": datetime.now(UTC).isoformat()})
    ET.SubElement(
        root,
        _in("document"),
        {
            "name": document.name,
            "digest": document.digest,
            "digestAlgorithm": DIGEST_ALGORITHM,
            "size": str(len(document.content)),
        },
    )
    if scenario_name is not None:
        ET.SubElement(root, _in("scenario"), {"name": scenario_name})
    result = ET.SubElement(root, _in("validationResult"), {"wellFormed": _flag(well_formed)})
    for finding in findings:
        _append_finding(result, _in("finding"), finding)
    return root


def render_report(
    document: Input,
    *,
    scenario_name: str | None,
    well_formed: bool,
    findings: Sequence[Finding],
    acceptable: bool,
) -> ET.Element:
    """Render the report document including an XHTML summary."""
    root = ET.Element(_rep("report"), {"valid": _flag(acceptable)})
    identification = ET.SubElement(root, _rep("documentIdentification"))
    ET.SubElement(identification, _rep("name")).text = document.name
    ET.SubElement(identification, _rep("digest"), {"algorithm": DIGEST_ALGORITHM}).text = (
        document.digest
    )
    if scenario_name is not None:
        ET.SubElement(root, _rep("scenario"), {"name": scenario_name})
    else:
        ET.SubElement(root, _rep("noScenarioMatched"))
    findings_element = ET.SubElement(root, _rep("findings"), {"wellFormed": _flag(well_formed)})
    for finding in findings:
        _append_finding(findings_element, _rep("finding"), finding)
    ET.SubElement(root, _rep("assessment"), {"acceptable": _flag(acceptable)})
    root.append(_render_summary_html(document, scenario_name, findings, acceptable))
    return root


def _append_finding(parent: ET.Element, tag: str, finding: Finding) -> None:
    attributes = {"rule": finding.rule_id, "level": finding.level.value}
    if finding.path:
        attributes["path"] = finding.path
    ET.SubElement(parent, tag, attributes).text = finding.message


def _render_summary_html(
    document: Input,
    scenario_name: str | None,
    findings: Sequence[Finding],
    acceptable: bool,
) -> ET.Element:
    html = ET.Element(_html("html"))
    head = ET.SubElement(html, _html("head"))
    ET.SubElement(head, _html("title")).text = f"Validation report for {document.name}"
    body = ET.SubElement(html, _html("body"))
    ET.SubElement(body, _html("h1")).text = document.name
    ET.SubElement(body, _html("p")).text = f"Scenario: {scenario_name or 'none matched'}"
    ET.SubElement(body, _html("p")).text = (
        "Assessment: acceptable" if acceptable else "Assessment: not acceptable"
    )
    if findings:
        table = ET.SubElement(body, _html("table"))
        header = ET.SubElement(table, _html("tr"))
        for title in ("Rule", "Level", "Message"):
            ET.SubElement(header, _html("th")).text = title
        for finding in findings:
            row = ET.SubElement(table, _html("tr"))
            for value in (finding.rule_id, finding.level.value, finding.message):
                ET.SubElement(row, _html("td")).text = value
    return html
