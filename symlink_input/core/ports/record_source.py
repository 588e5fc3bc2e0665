"""
Record source interface.

A record source yields ``(position, line)`` pairs of one split. It is
finite and forward-only; restarting means creating a new reader from
the same split value.
"""
from __future__ import annotations

from typing import Iterator, Protocol, Self


class RecordSource(Protocol):
    def __iter__(self) -> Iterator[tuple[int, str]]:
        """Yield records in file order."""

    def next_record(self) -> tuple[int, str] | None:
        """Return the next record, or None once the split is exhausted."""

    def close(self) -> None:
        """Release the underlying file handle. Safe to call twice."""

    def __enter__(self) -> Self:
        ...

    def __exit__(self, *exc_info: object) -> None:
        ...
