"""Batch run entities."""

from __future__ import annotations

from dataclasses import dataclass, field

from check_tool.validation_engine.report_models import CheckResult


class RunAlreadyFinalizedError(RuntimeError):
    """Raised when a finalized run outcome is modified."""


@dataclass
class RunOutcome:
    """Check results accumulated over one batch run and its overall verdict."""

    results: list[CheckResult] = field(default_factory=list)
    passed: bool | None = None

    @property
    def finalized(self) -> bool:
        return self.passed is not None

    @property
    def processed_count(self) -> int:
        return len(self.results)

    def record(self, result: CheckResult) -> None:
        if self.finalized:
            raise RunAlreadyFinalizedError("Cannot record results after the run was evaluated.")
        self.results.append(result)

    def finalize(self, passed: bool) -> None:
        if self.finalized:
            raise RunAlreadyFinalizedError("Run outcome was already evaluated.")
        self.passed = passed
