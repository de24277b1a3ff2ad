"""Target resolution domain exports."""

from .target_finder import DOCUMENT_SUFFIX, TargetResolutionError, resolve_targets

__all__ = ["DOCUMENT_SUFFIX", "TargetResolutionError", "resolve_targets"]
