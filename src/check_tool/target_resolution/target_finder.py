"""Target resolver service expanding positional arguments into documents to check."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".xml"


class TargetResolutionError(Exception):
    """Raised when no document targets can be determined."""


def resolve_targets(arguments: Iterable[str], *, suffix: str = DOCUMENT_SUFFIX) -> tuple[Path, ...]:
    """Expand file and directory arguments into an ordered tuple of document paths.

    Directories contribute their immediate children ending in ``suffix``, in listing
    order. Missing paths are logged and skipped. Duplicates keep their first position.

    Raises:
      TargetResolutionError: If no target remains or a directory cannot be listed.
    """
    targets: dict[Path, None] = {}
    for argument in arguments:
        for target in _resolve_argument(argument, suffix):
            targets.setdefault(target, None)
    if not targets:
        raise TargetResolutionError("No test targets found. Nothing to check. Will quit now!")
    return tuple(targets)


def _resolve_argument(argument: str, suffix: str) -> list[Path]:
    path = Path(argument)
    if path.is_dir():
        return _list_directory_targets(path, suffix)
    if path.exists():
        return [path]
    logger.warning("The specified test target %s does not exist. Will be ignored", argument)
    return []


def _list_directory_targets(directory: Path, suffix: str) -> list[Path]:
    try:
        return [entry for entry in directory.iterdir() if entry.name.endswith(suffix)]
    except OSError as exc:
        raise TargetResolutionError(
            f"Cannot list directory {directory}. Can not determine test targets."
        ) from exc
