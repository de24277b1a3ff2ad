"""Daemon domain exports."""

from .validation_daemon import DaemonError, ValidationDaemon

__all__ = ["DaemonError", "ValidationDaemon"]
