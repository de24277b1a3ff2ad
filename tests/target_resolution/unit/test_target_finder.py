"""Target resolver tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from check_tool.target_resolution import TargetResolutionError, resolve_targets


def _touch(path: Path) -> Path:
    path.write_text("<doc/>", encoding="utf-8")
    return path


def test_directory_yields_only_xml_children_in_listing_order(tmp_path: Path) -> None:
    for name in ("b.xml", "a.xml", "notes.txt", "c.xml.bak"):
        _touch(tmp_path / name)
    nested = tmp_path / "nested"
    nested.mkdir()
    _touch(nested / "deep.xml")

    targets = resolve_targets([str(tmp_path)])

    expected = [entry for entry in tmp_path.iterdir() if entry.name.endswith(".xml")]
    assert list(targets) == expected
    assert {target.name for target in targets} == {"a.xml", "b.xml"}


def test_existing_file_yields_itself(tmp_path: Path) -> None:
    document = _touch(tmp_path / "invoice.txt")

    assert resolve_targets([str(document)]) == (document,)


def test_missing_path_is_skipped_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    document = _touch(tmp_path / "invoice.xml")
    missing = tmp_path / "missing.xml"
    caplog.set_level(logging.WARNING)

    targets = resolve_targets([str(missing), str(document)])

    assert targets == (document,)
    assert f"The specified test target {missing} does not exist" in caplog.text


def test_only_missing_paths_fail(tmp_path: Path) -> None:
    with pytest.raises(TargetResolutionError, match="No test targets found"):
        resolve_targets([str(tmp_path / "missing.xml")])


def test_empty_directory_and_no_arguments_fail(tmp_path: Path) -> None:
    with pytest.raises(TargetResolutionError):
        resolve_targets([str(tmp_path)])
    with pytest.raises(TargetResolutionError):
        resolve_targets([])


def test_repeated_arguments_keep_first_seen_order(tmp_path: Path) -> None:
    first = _touch(tmp_path / "first.xml")
    second = _touch(tmp_path / "second.xml")

    targets = resolve_targets([str(second), str(first), str(second)])

    assert targets == (second, first)
