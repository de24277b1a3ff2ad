"""Assertion loading and checking tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from check_tool.check_steps import AssertionsError, CheckAssertionAction, load_assertions
from check_tool.document_input import Input
from check_tool.scenario_loading import load_scenarios
from check_tool.validation_engine import CheckEngine

_SCENARIOS = """
scenarios:
  - name: order
    match: Order
    rules:
      - id: ORD-01
        path: ID
"""

_ASSERTIONS = """
namespaces:
  r: "urn:check-tool:report"
assertions:
  - report: good
    path: "r:assessment[@acceptable='true']"
    description: good order is acceptable
  - report: bad.xml
    path: "r:scenario[@name='order']"
  - report: bad
    path: "r:findings/r:finding"
    expected: "Required element ID not found"
"""


def _engine(tmp_path: Path) -> CheckEngine:
    path = tmp_path / "scenarios.yaml"
    path.write_text(_SCENARIOS, encoding="utf-8")
    return CheckEngine(load_scenarios(path.as_uri()))


def _assertions_file(tmp_path: Path, contents: str = _ASSERTIONS) -> Path:
    path = tmp_path / "assertions.yaml"
    path.write_text(contents, encoding="utf-8")
    return path


def test_load_assertions_reads_entries(tmp_path: Path) -> None:
    assertions = load_assertions(_assertions_file(tmp_path))

    assert assertions is not None
    assert assertions.namespaces == {"r": "urn:check-tool:report"}
    assert [entry.report for entry in assertions.for_input("bad.xml")] == ["bad.xml", "bad"]
    assert assertions.entries[0].description == "good order is acceptable"


def test_load_assertions_returns_none_for_missing_file(tmp_path: Path) -> None:
    assert load_assertions(tmp_path / "missing.yaml") is None


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- report: a\n", "root must be a mapping"),
        ("assertions: nope\n", "requires an 'assertions' list"),
        ("assertions:\n  - path: x\n", "report must be a non-empty string"),
        ("namespaces: [a]\nassertions: []\n", "namespaces must map prefixes"),
    ],
)
def test_load_assertions_rejects_malformed_files(
    tmp_path: Path, contents: str, message: str
) -> None:
    with pytest.raises(AssertionsError, match=message):
        load_assertions(_assertions_file(tmp_path, contents))


def test_matching_assertions_pass(tmp_path: Path) -> None:
    engine = _engine(tmp_path)
    assertions = load_assertions(_assertions_file(tmp_path))
    engine.add_check_step(CheckAssertionAction(assertions, engine.context))

    result = engine.check_input(Input.from_bytes("good.xml", b"<Order><ID>1</ID></Order>"))

    assert result.assertion_outcome is not None
    assert result.assertion_outcome.checked == 1
    assert result.assertion_outcome.passed is True
    assert result.is_successful is True


def test_expected_rejection_counts_as_success(tmp_path: Path) -> None:
    engine = _engine(tmp_path)
    assertions = load_assertions(_assertions_file(tmp_path))
    engine.add_check_step(CheckAssertionAction(assertions, engine.context))

    result = engine.check_input(Input.from_bytes("bad.xml", b"<Order/>"))

    assert result.report.acceptable is False
    assert result.assertion_outcome is not None
    assert result.assertion_outcome.failures == ()
    assert result.is_successful is True


def test_mismatches_are_logged_and_fail(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    engine = _engine(tmp_path)
    assertions = load_assertions(_assertions_file(tmp_path))
    engine.add_check_step(CheckAssertionAction(assertions, engine.context))

    result = engine.check_input(Input.from_bytes("good.xml", b"<Order/>"))

    assert result.assertion_outcome is not None
    assert result.assertion_outcome.failures == (
        "good order is acceptable: nothing found at r:assessment[@acceptable='true']",
    )
    assert result.is_successful is False
    assert "Assertion mismatch for good.xml" in caplog.text


def test_expected_value_mismatch_is_reported(tmp_path: Path) -> None:
    engine = _engine(tmp_path)
    assertions = load_assertions(
        _assertions_file(
            tmp_path,
            'namespaces:\n  r: "urn:check-tool:report"\nassertions:\n'
            '  - report: good\n    path: "r:scenario"\n    expected: invoice\n',
        )
    )
    engine.add_check_step(CheckAssertionAction(assertions, engine.context))

    result = engine.check_input(Input.from_bytes("good.xml", b"<Order><ID>1</ID></Order>"))

    assert result.assertion_outcome is not None
    assert result.assertion_outcome.failures == (
        "r:scenario: expected 'invoice' but found ''",
    )


def test_inputs_without_assertions_keep_acceptance(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    engine = _engine(tmp_path)
    assertions = load_assertions(_assertions_file(tmp_path))
    engine.add_check_step(CheckAssertionAction(assertions, engine.context))

    result = engine.check_input(Input.from_bytes("other.xml", b"<Order><ID>1</ID></Order>"))

    assert result.assertion_outcome is None
    assert result.is_successful is True
    assert "No assertions found for other.xml" in caplog.text
