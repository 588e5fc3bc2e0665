"""
Record reader for one split.

The reader owns the target file handle for its whole life. The handle is
released on exhaustion, on early close and on error.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from symlink_input.format.line_reader import LineRecordReader

if TYPE_CHECKING:
    from symlink_input.core.domain.types import SplitDescriptor
    from symlink_input.core.ports.filesystem import FileSystem


class ProxyRecordReader:
    """Reads the target lines of a split, hiding the manifest indirection."""

    def __init__(
        self,
        fs: FileSystem,
        split: SplitDescriptor,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self._split = split
        self._closed = False
        self._stream = fs.open_read(split.target_path)

        try:
            self._lines = LineRecordReader(
                self._stream,
                start=split.start,
                length=split.length,
                encoding=encoding,
            )
        except BaseException:
            self._stream.close()
            raise

    @property
    def split(self) -> SplitDescriptor:
        return self._split

    @property
    def pos(self) -> int:
        return self._lines.pos

    @property
    def progress(self) -> float:
        return self._lines.progress

    @property
    def closed(self) -> bool:
        return self._closed

    def next_record(self) -> tuple[int, str] | None:
        """Return the next record, or None once the split is exhausted."""
        if self._closed:
            return None

        try:
            record = self._lines.next_record()
        except BaseException:
            self.close()
            raise

        if record is None:
            self.close()
        return record

    def __iter__(self) -> Iterator[tuple[int, str]]:
        try:
            while True:
                record = self.next_record()
                if record is None:
                    return
                yield record
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream.close()

    def __enter__(self) -> ProxyRecordReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
