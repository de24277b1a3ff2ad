"""Mode dispatch outcome entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_FATAL = -1
DAEMON_SIGNAL = 100


@dataclass(frozen=True)
class Exited:
    """The invocation finished and the process should exit with ``code``."""

    code: int

    @property
    def status_code(self) -> int:
        return self.code


@dataclass(frozen=True)
class DaemonStarted:
    """The daemon ran until shutdown; its lifecycle owns process termination."""

    status_code: ClassVar[int] = DAEMON_SIGNAL


CommandOutcome = Exited | DaemonStarted
