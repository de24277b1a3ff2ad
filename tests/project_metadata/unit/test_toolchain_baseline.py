"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path

from check_tool.mode_dispatch import DAEMON_SIGNAL, EXIT_FATAL, EXIT_SUCCESS, EXIT_VALIDATION_FAILED


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    return tomllib.loads((_project_root() / "pyproject.toml").read_text(encoding="utf-8"))


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_project_uses_uv_style_metadata_without_poetry() -> None:
    pyproject = _pyproject()
    dev_dependencies = pyproject["dependency-groups"]["dev"]

    assert "black" not in dev_dependencies
    assert "black" not in pyproject["tool"]
    assert "poetry" not in pyproject["tool"]
    assert pyproject["build-system"]["build-backend"] != "poetry.core.masonry.api"


def test_console_script_points_at_entry_point() -> None:
    scripts = _pyproject()["project"]["scripts"]

    assert scripts == {"check-tool": "check_tool.cli:entry_point"}


def test_documented_exit_codes_match_dispatch_constants() -> None:
    readme = (_project_root() / "README.md").read_text(encoding="utf-8")
    for code in (EXIT_SUCCESS, EXIT_VALIDATION_FAILED, EXIT_FATAL, DAEMON_SIGNAL):
        assert f"| `{code}` |" in readme
