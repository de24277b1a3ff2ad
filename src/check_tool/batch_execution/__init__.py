"""Batch execution domain exports."""

from .batch_run_use_case import check_targets, execute_batch_run
from .run_contracts import RunAlreadyFinalizedError, RunOutcome

__all__ = [
    "RunAlreadyFinalizedError",
    "RunOutcome",
    "check_targets",
    "execute_batch_run",
]
