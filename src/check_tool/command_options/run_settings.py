"""Run configuration entities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DAEMON_HOST = "localhost"
DEFAULT_DAEMON_PORT = 8080
MAX_PORT = 65535


def default_worker_count() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class BatchSettings:  # pylint: disable=too-many-instance-attributes
    """Options that apply when documents are checked as a one-shot batch."""

    output_directory: Path
    targets: tuple[str, ...]
    print_report: bool = False
    extract_html: bool = False
    serialize_report_input: bool = False
    debug: bool = False
    print_memory_stats: bool = False
    assertions_path: Path | None = None
    report_prefix: str | None = None
    report_postfix: str | None = None


@dataclass(frozen=True)
class DaemonSettings:
    """Options that apply when the validation daemon is started."""

    host: str = DEFAULT_DAEMON_HOST
    port: int = DEFAULT_DAEMON_PORT
    worker_count: int = field(default_factory=default_worker_count)
    gui_enabled: bool = True


@dataclass(frozen=True)
class RunConfiguration:
    """Validated configuration for one invocation; ``mode`` selects batch or daemon."""

    scenarios: str
    repository: str | None
    mode: BatchSettings | DaemonSettings

    @property
    def is_daemon(self) -> bool:
        return isinstance(self.mode, DaemonSettings)
