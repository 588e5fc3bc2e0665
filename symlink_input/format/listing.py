"""
Recursive directory listing on top of the FileSystem protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from symlink_input.core.domain.types import FileStatus
    from symlink_input.core.ports.filesystem import FileSystem


def is_hidden(name: str) -> bool:
    """Names starting with ``.`` or ``_`` are bookkeeping files, not data."""
    return name.startswith((".", "_"))


@dataclass(frozen=True, slots=True)
class Listing:
    files: list[FileStatus]
    directory_count: int


def list_files(
    fs: FileSystem,
    roots: Iterable[str],
    *,
    skip_hidden: bool = True,
) -> Listing:
    """
    Enumerate regular files below ``roots`` in listing order.

    A root that is itself a file is returned as-is. Directories are
    descended depth-first; ``directory_count`` counts every directory
    visited, roots included.
    """
    files: list[FileStatus] = []
    directories = 0

    for root in roots:
        status = fs.stat(root)

        if not status.is_dir:
            files.append(status)
            continue

        directories += 1
        for entry in _walk(fs, status.path, skip_hidden=skip_hidden):
            if entry.is_dir:
                directories += 1
            else:
                files.append(entry)

    return Listing(files=files, directory_count=directories)


def _walk(fs: FileSystem, path: str, *, skip_hidden: bool) -> Iterator[FileStatus]:
    for child in fs.list(path):
        if skip_hidden and is_hidden(child.name):
            continue

        yield child

        if child.is_dir:
            yield from _walk(fs, child.path, skip_hidden=skip_hidden)
