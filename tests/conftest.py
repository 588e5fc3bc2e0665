"""Shared fixtures: a local filesystem plus writers for data and manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from symlink_input.io.local_fs import LocalFileSystem


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.fixture
def write_text(tmp_path: Path) -> Callable[[str, str], str]:
    """Write ``content`` to ``tmp_path / relpath`` and return the path."""

    def _write(relpath: str, content: str) -> str:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return str(path)

    return _write


@pytest.fixture
def write_manifest(write_text: Callable[[str, str], str]) -> Callable[..., str]:
    """Write a manifest listing ``targets``, one per line."""

    def _write(relpath: str, *targets: str) -> str:
        return write_text(relpath, "".join(f"{target}\n" for target in targets))

    return _write
