"""Pipeline builder assembling the ordered check steps for a batch run."""

from __future__ import annotations

import logging

from check_tool.command_options.run_settings import BatchSettings
from check_tool.document_input.document_context import DocumentContext
from check_tool.validation_engine.check_engine import CheckStep

from .assertions import CheckAssertionAction, load_assertions
from .memory_stats import PrintMemoryStats
from .report_actions import (
    DefaultNamingStrategy,
    ExtractHtmlContentAction,
    PrintReportAction,
    SerializeReportAction,
    SerializeReportInputAction,
)

logger = logging.getLogger(__name__)


def build_check_pipeline(settings: BatchSettings, context: DocumentContext) -> list[CheckStep]:
    """Return check steps in execution order.

    Report serialization is always present. A configured assertions file that does not
    exist skips the assertion step instead of failing the run.
    """
    output_directory = settings.output_directory
    steps: list[CheckStep] = []
    if settings.extract_html:
        steps.append(ExtractHtmlContentAction(context, output_directory))
    steps.append(
        SerializeReportAction(
            output_directory,
            context,
            DefaultNamingStrategy(prefix=settings.report_prefix, postfix=settings.report_postfix),
        )
    )
    if settings.serialize_report_input:
        steps.append(SerializeReportInputAction(output_directory, context))
    if settings.print_report:
        steps.append(PrintReportAction(context))
    if settings.assertions_path is not None:
        assertions = load_assertions(settings.assertions_path)
        if assertions is None:
            logger.info(
                "Assertions file %s does not exist. Assertions will not be checked",
                settings.assertions_path,
            )
        else:
            steps.append(CheckAssertionAction(assertions, context))
    if settings.print_memory_stats:
        steps.append(PrintMemoryStats())
    return steps
