"""Module entry point for `python -m check_tool`."""

from .cli import entry_point

if __name__ == "__main__":  # pragma: no cover
    entry_point()
