"""Check step domain exports."""

from .assertions import (
    Assertion,
    Assertions,
    AssertionsError,
    CheckAssertionAction,
    load_assertions,
)
from .memory_stats import PrintMemoryStats
from .pipeline_builder import build_check_pipeline
from .report_actions import (
    DefaultNamingStrategy,
    ExtractHtmlContentAction,
    PrintReportAction,
    SerializeReportAction,
    SerializeReportInputAction,
)

__all__ = [
    "Assertion",
    "Assertions",
    "AssertionsError",
    "CheckAssertionAction",
    "DefaultNamingStrategy",
    "ExtractHtmlContentAction",
    "PrintMemoryStats",
    "PrintReportAction",
    "SerializeReportAction",
    "SerializeReportInputAction",
    "build_check_pipeline",
    "load_assertions",
]
