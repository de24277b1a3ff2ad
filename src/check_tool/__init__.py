"""Command line orchestration for scenario-based XML document validation."""

__version__ = "0.1.0"
