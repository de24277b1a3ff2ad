"""Document input domain exports."""

from .document_context import (
    REPORT_INPUT_NAMESPACE,
    REPORT_NAMESPACE,
    XHTML_NAMESPACE,
    DocumentContext,
    local_name,
    qualified_name,
)
from .input_factory import DIGEST_ALGORITHM, Input, InputReadError, read_input

__all__ = [
    "DIGEST_ALGORITHM",
    "REPORT_INPUT_NAMESPACE",
    "REPORT_NAMESPACE",
    "XHTML_NAMESPACE",
    "DocumentContext",
    "Input",
    "InputReadError",
    "local_name",
    "qualified_name",
    "read_input",
]
