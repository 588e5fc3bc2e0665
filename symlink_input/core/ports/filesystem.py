"""Filesystem capability boundary.

Manifest resolution, split planning and record reading depend only on
this protocol. Concrete bindings live in ``symlink_input.io``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from symlink_input.core.domain.types import FileStatus


class FileSystem(Protocol):
    """Minimal read-mostly filesystem.

    Paths are plain strings whose separator is ``/``.
    """

    def list(self, path: str) -> list[FileStatus]:
        """Return the immediate children of a directory (a file lists itself)."""

    def stat(self, path: str) -> FileStatus:
        """Return metadata of a path; raise FileNotFoundError if missing."""

    def open_read(self, path: str) -> BinaryIO:
        """Open a seekable binary stream for reading."""

    def open_write(self, path: str) -> BinaryIO:
        """Open a binary stream for writing (producers and tests only)."""
