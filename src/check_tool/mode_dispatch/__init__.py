"""Mode dispatch domain exports."""

from .dispatch_contracts import (
    DAEMON_SIGNAL,
    EXIT_FATAL,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    CommandOutcome,
    DaemonStarted,
    Exited,
)
from .mode_dispatcher import dispatch

__all__ = [
    "DAEMON_SIGNAL",
    "EXIT_FATAL",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_FAILED",
    "CommandOutcome",
    "DaemonStarted",
    "Exited",
    "dispatch",
]
