"""Check step reporting process memory usage."""

from __future__ import annotations

import logging

import psutil

from check_tool.validation_engine.report_models import CheckResult

logger = logging.getLogger(__name__)

_MEGABYTE = 1024**2


class PrintMemoryStats:  # pylint: disable=too-few-public-methods
    """Logs resident and virtual memory of the running process after each input."""

    def __init__(self, process: psutil.Process | None = None) -> None:
        self._process = process or psutil.Process()

    def process(self, result: CheckResult) -> None:
        memory = self._process.memory_info()
        logger.info(
            "Memory after %s: rss=%.1f MB vms=%.1f MB",
            result.input.name,
            memory.rss / _MEGABYTE,
            memory.vms / _MEGABYTE,
        )
