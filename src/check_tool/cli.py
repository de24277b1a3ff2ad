"""Command line interface entry point."""

from __future__ import annotations

import sys

from check_tool.mode_dispatch import DAEMON_SIGNAL, dispatch


def main(argv: list[str] | None = None) -> int:
    """Run one invocation and return its status code, ``DAEMON_SIGNAL`` for daemon runs."""
    argv = argv if argv is not None else sys.argv[1:]
    return dispatch(argv).status_code


def entry_point() -> None:
    """Console script wiring; the daemon sentinel is never turned into a process exit."""
    status = main()
    if status != DAEMON_SIGNAL:
        sys.exit(status)


if __name__ == "__main__":  # pragma: no cover
    entry_point()
