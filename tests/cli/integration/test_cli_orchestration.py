"""CLI orchestration integration tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from check_tool.cli import main

_REPORT_NAMESPACE = "urn:check-tool:report"


def _write_scenarios(tmp_path: Path) -> Path:
    repository = tmp_path / "repository"
    repository.mkdir()
    (repository / "invoice-rules.yaml").write_text(
        """
rules:
  - id: INV-01
    path: "inv:ID"
  - id: INV-02
    path: "inv:Total"
    pattern: "[0-9]+[.][0-9]{2}"
  - id: INV-03
    path: "inv:Note"
    level: warning
""",
        encoding="utf-8",
    )
    path = tmp_path / "scenarios.yaml"
    path.write_text(
        """
name: invoice-checks
namespaces:
  inv: "urn:example:invoice"
scenarios:
  - name: invoice
    match: "inv:Invoice"
    rules:
      path: invoice-rules.yaml
""",
        encoding="utf-8",
    )
    return path


def _write_documents(tmp_path: Path) -> Path:
    documents = tmp_path / "documents"
    documents.mkdir()
    (documents / "valid.xml").write_text(
        '<Invoice xmlns="urn:example:invoice"><ID>1</ID><Total>10.00</Total>'
        "<Note>x</Note></Invoice>",
        encoding="utf-8",
    )
    (documents / "invalid.xml").write_text(
        '<Invoice xmlns="urn:example:invoice"><Total>ten</Total></Invoice>', encoding="utf-8"
    )
    (documents / "readme.txt").write_text("not a document", encoding="utf-8")
    return documents


def test_batch_run_writes_all_requested_artifacts(tmp_path: Path, capsys) -> None:
    scenarios = _write_scenarios(tmp_path)
    documents = _write_documents(tmp_path)
    output = tmp_path / "out" / "nested"

    exit_code = main(
        [
            "-s",
            str(scenarios),
            "-r",
            str(tmp_path / "repository"),
            "-o",
            str(output),
            "-h",
            "-p",
            "--serialize-report-input",
            "--report-prefix",
            "nightly",
            "-m",
            str(documents / "valid.xml"),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 0
    report = ET.parse(output / "nightly-valid-report.xml").getroot()
    assert report.get("valid") == "true"
    assert (output / "valid-reportInput.xml").is_file()
    assert (output / "valid-1.html").is_file()
    assert "Acceptable: 1  Rejected: 0" in captured.out
    assert "Memory after valid.xml" in captured.err


def test_batch_run_with_rejected_document_exits_with_one(tmp_path: Path) -> None:
    scenarios = _write_scenarios(tmp_path)
    documents = _write_documents(tmp_path)
    output = tmp_path / "out"

    repository = str(tmp_path / "repository")

    exit_code = main(["-s", str(scenarios), "-r", repository, "-o", str(output), str(documents)])

    assert exit_code == 1
    assert sorted(path.name for path in output.iterdir()) == [
        "invalid-report.xml",
        "valid-report.xml",
    ]
    invalid = ET.parse(output / "invalid-report.xml").getroot()
    rules = [finding.get("rule") for finding in invalid.iter(f"{{{_REPORT_NAMESPACE}}}finding")]
    assert rules == ["INV-01", "INV-02", "INV-03"]


def test_assertions_turn_expected_rejections_into_success(tmp_path: Path, capsys) -> None:
    scenarios = _write_scenarios(tmp_path)
    documents = _write_documents(tmp_path)
    assertions = tmp_path / "assertions.yaml"
    assertions.write_text(
        """
namespaces:
  rep: "urn:check-tool:report"
assertions:
  - report: valid
    path: "rep:assessment[@acceptable='true']"
  - report: invalid
    path: "rep:assessment[@acceptable='false']"
    description: invalid invoice is rejected
""",
        encoding="utf-8",
    )

    exit_code = main(
        [
            "-s",
            str(scenarios),
            "-r",
            str(tmp_path / "repository"),
            "-o",
            str(tmp_path / "out"),
            "-c",
            str(assertions),
            str(documents),
        ]
    )

    assert exit_code == 0
    assert "Assertion mismatch" not in capsys.readouterr().err


def test_missing_assertions_file_is_tolerated(tmp_path: Path, capsys) -> None:
    scenarios = _write_scenarios(tmp_path)
    documents = _write_documents(tmp_path)

    exit_code = main(
        [
            "-s",
            str(scenarios),
            "-r",
            str(tmp_path / "repository"),
            "-o",
            str(tmp_path / "out"),
            "-c",
            str(tmp_path / "missing.yaml"),
            str(documents / "valid.xml"),
        ]
    )

    assert exit_code == 0
    assert "Assertions will not be checked" in capsys.readouterr().err


def test_no_targets_is_fatal(tmp_path: Path, capsys) -> None:
    scenarios = _write_scenarios(tmp_path)

    exit_code = main(["-s", str(scenarios), "-o", str(tmp_path / "out"), str(tmp_path / "none")])
    captured = capsys.readouterr()

    assert exit_code == -1
    assert "does not exist. Will be ignored" in captured.err
    assert "No test targets found. Nothing to check. Will quit now!" in captured.err
