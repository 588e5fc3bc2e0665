"""
Semantic test: malformed references are hard failures.

Invariant:
A manifest line naming a missing path or a directory fails the whole
resolution; nothing is silently skipped.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from symlink_input.core.config.job_config import JobConfig
from symlink_input.core.domain.errors import InvalidTargetError
from symlink_input.format.input_format import SymlinkTextInputFormat
from symlink_input.format.manifest import ManifestResolver


def test_missing_target_fails_whole_resolution(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    write_manifest("links/m", a, str(tmp_path / "data" / "missing"))

    with pytest.raises(FileNotFoundError):
        ManifestResolver(fs).resolve([str(tmp_path / "links")])


def test_missing_target_fails_get_splits(tmp_path: Path, fs, write_manifest) -> None:
    write_manifest("links/m", str(tmp_path / "nowhere"))

    with pytest.raises(FileNotFoundError):
        SymlinkTextInputFormat(fs).get_splits(
            JobConfig(input_paths=[str(tmp_path / "links")]), 2
        )


def test_directory_target_is_a_configuration_error(tmp_path: Path, fs, write_text, write_manifest) -> None:
    write_text("data/a", "a\n")
    write_manifest("links/m", str(tmp_path / "data"))

    with pytest.raises(InvalidTargetError) as exc_info:
        ManifestResolver(fs).resolve([str(tmp_path / "links")])

    assert exc_info.value.target_path == str(tmp_path / "data")
    assert exc_info.value.manifest_path == str(tmp_path / "links" / "m")


def test_missing_root_propagates(tmp_path: Path, fs) -> None:
    with pytest.raises(FileNotFoundError):
        ManifestResolver(fs).resolve([str(tmp_path / "absent")])


def test_relative_lines_resolve_against_manifest_dir(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("links/sub/a", "a\n")
    write_manifest("links/sub/m", "a")

    targets = ManifestResolver(fs, skip_hidden=True).resolve([str(tmp_path / "links" / "sub" / "m")])

    assert [t.path for t in targets] == [a]
