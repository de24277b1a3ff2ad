"""CLI help tests."""

from __future__ import annotations

from check_tool.cli import main


def test_cli_displays_help(capsys) -> None:
    exit_code = main(["--help"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Usage: check-tool -s <scenario-config-file> [OPTIONS] [FILE]..." in captured.out
    for flag in ("--scenarios", "--daemon", "--check-assertions", "--disable-gui", "-?"):
        assert flag in captured.out


def test_cli_without_arguments_displays_help(capsys) -> None:
    assert main([]) == 0
    assert "--output-directory" in capsys.readouterr().out
