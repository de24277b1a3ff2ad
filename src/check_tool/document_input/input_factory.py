"""Input factory reading documents into validation inputs."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

DIGEST_ALGORITHM = "SHA-256"


class InputReadError(Exception):
    """Raised when a document cannot be read."""


@dataclass(frozen=True)
class Input:
    """Document content submitted to the check engine."""

    name: str
    content: bytes
    digest: str
    location: Path | None = None

    @property
    def stem(self) -> str:
        return Path(self.name).stem

    @classmethod
    def from_bytes(cls, name: str, content: bytes, location: Path | None = None) -> Input:
        return cls(
            name=name,
            content=content,
            digest=hashlib.sha256(content).hexdigest(),
            location=location,
        )


def read_input(path: Path | str) -> Input:
    """Read the document at ``path``."""
    location = Path(path)
    try:
        content = location.read_bytes()
    except OSError as exc:
        raise InputReadError(f"Failed to read test target {location}: {exc}") from exc
    return Input.from_bytes(location.name, content, location=location.resolve())
