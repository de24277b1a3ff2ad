"""Check steps that write, print, or extract report content."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import click

from check_tool.document_input.document_context import XHTML_NAMESPACE, DocumentContext
from check_tool.validation_engine.report_models import CheckResult

logger = logging.getLogger(__name__)

DEFAULT_REPORT_POSTFIX = "report"
REPORT_INPUT_POSTFIX = "reportInput"


@dataclass(frozen=True)
class DefaultNamingStrategy:
    """Builds ``[prefix-]<input-stem>-<postfix>.xml`` report file names."""

    prefix: str | None = None
    postfix: str | None = None

    def report_name(self, input_name: str) -> str:
        parts = (self.prefix, Path(input_name).stem, self.postfix or DEFAULT_REPORT_POSTFIX)
        return "-".join(part for part in parts if part) + ".xml"


class ExtractHtmlContentAction:  # pylint: disable=too-few-public-methods
    """Writes every XHTML document embedded in the report to its own file."""

    def __init__(self, context: DocumentContext, output_directory: Path) -> None:
        self._context = context
        self._output_directory = output_directory

    def process(self, result: CheckResult) -> None:
        html_elements = result.report.document.findall(f".//{{{XHTML_NAMESPACE}}}html")
        for index, element in enumerate(html_elements, start=1):
            target = self._output_directory / f"{result.input.stem}-{index}.html"
            target.write_bytes(self._context.serialize(element))
            logger.info("Html content written to %s", target)


class SerializeReportAction:  # pylint: disable=too-few-public-methods
    """Writes the report document to the output directory."""

    def __init__(
        self,
        output_directory: Path,
        context: DocumentContext,
        naming_strategy: DefaultNamingStrategy,
    ) -> None:
        self._output_directory = output_directory
        self._context = context
        self._naming_strategy = naming_strategy

    def process(self, result: CheckResult) -> None:
        target = self._output_directory / self._naming_strategy.report_name(result.input.name)
        target.write_bytes(self._context.serialize(result.report.document))
        result.report_path = target
        logger.info("Report written to %s", target)


class SerializeReportInputAction:  # pylint: disable=too-few-public-methods
    """Writes the report input document to the output directory."""

    def __init__(self, output_directory: Path, context: DocumentContext) -> None:
        self._output_directory = output_directory
        self._context = context

    def process(self, result: CheckResult) -> None:
        target = self._output_directory / f"{result.input.stem}-{REPORT_INPUT_POSTFIX}.xml"
        target.write_bytes(self._context.serialize(result.report.report_input))
        logger.info("Report input written to %s", target)


class PrintReportAction:  # pylint: disable=too-few-public-methods
    """Prints the report document to stdout."""

    def __init__(self, context: DocumentContext) -> None:
        self._context = context

    def process(self, result: CheckResult) -> None:
        click.echo(self._context.serialize(result.report.document).decode("utf-8"))
