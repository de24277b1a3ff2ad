"""Run outcome tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from check_tool.batch_execution import RunAlreadyFinalizedError, RunOutcome


def test_outcome_records_results_until_finalized() -> None:
    outcome = RunOutcome()
    result = SimpleNamespace(is_successful=True)

    outcome.record(result)
    outcome.finalize(True)

    assert outcome.processed_count == 1
    assert outcome.finalized is True
    assert outcome.passed is True


def test_finalized_outcome_rejects_changes() -> None:
    outcome = RunOutcome()
    outcome.finalize(False)

    with pytest.raises(RunAlreadyFinalizedError):
        outcome.record(SimpleNamespace(is_successful=True))
    with pytest.raises(RunAlreadyFinalizedError):
        outcome.finalize(True)
    assert outcome.passed is False
