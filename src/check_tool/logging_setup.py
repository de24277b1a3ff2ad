"""CLI logging configuration."""

from __future__ import annotations

import logging

import click

ROOT_LOGGER_NAME = "check_tool"


class ClickEchoHandler(logging.Handler):
    """Writes formatted records to the current stderr stream through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def configure_cli_logging(*, debug: bool = False) -> None:
    """Attach a stderr handler to the ``check_tool`` logger.

    Idempotent: an existing handler is reused and only its level is updated.
    """
    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        if isinstance(handler, ClickEchoHandler):
            handler.setLevel(level)
            return
    handler = ClickEchoHandler(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(handler)
