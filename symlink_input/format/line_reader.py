"""
Line reading over one byte range of a seekable stream.

A line ends at ``\\n``, ``\\r`` or ``\\r\\n``; the final line of a file
may have no terminator.

Boundary rules:
- a range starting past offset 0 discards bytes up to and including the
  first line terminator; that fragment belongs to the previous range.
- a line belongs to the range if its first byte is at or before the
  range end, so the last line may run past the end.
"""

from __future__ import annotations

import re
from typing import BinaryIO, Iterator

_TERMINATOR = re.compile(rb"[\r\n]")

DEFAULT_BUFFER_SIZE = 64 * 1024


class LineRecordReader:
    """Yields ``(position, line)`` for lines starting inside a byte range.

    The stream is borrowed, never closed here.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        start: int,
        length: int,
        encoding: str = "utf-8",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if start < 0 or length < 0:
            raise ValueError("start and length must be >= 0")
        if buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        self._stream = stream
        self._start = start
        self._end = start + length
        self._encoding = encoding
        self._buffer_size = buffer_size
        self._buf = b""
        self._buf_pos = 0
        self._exhausted = False

        stream.seek(start)
        self._pos = start

        if start != 0:
            self._pos += len(self._read_line())

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def progress(self) -> float:
        if self._exhausted:
            return 1.0
        if self._end == self._start:
            return 0.0
        return min(1.0, (self._pos - self._start) / (self._end - self._start))

    def next_record(self) -> tuple[int, str] | None:
        if self._exhausted:
            return None

        if self._pos > self._end:
            self._exhausted = True
            return None

        raw = self._read_line()
        if not raw:
            self._exhausted = True
            return None

        position = self._pos
        self._pos += len(raw)
        return position, self._decode(raw)

    def __iter__(self) -> Iterator[tuple[int, str]]:
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record

    # ------------------------------------------------------------------

    def _fill(self) -> bool:
        self._buf = self._stream.read(self._buffer_size)
        self._buf_pos = 0
        return bool(self._buf)

    def _read_line(self) -> bytes:
        """Return the next line with its terminator, or b"" at end of stream."""
        parts: list[bytes] = []

        while True:
            if self._buf_pos >= len(self._buf) and not self._fill():
                return b"".join(parts)

            match = _TERMINATOR.search(self._buf, self._buf_pos)
            if match is None:
                parts.append(self._buf[self._buf_pos:])
                self._buf_pos = len(self._buf)
                continue

            cut = match.end()
            parts.append(self._buf[self._buf_pos:cut])
            self._buf_pos = cut

            if match.group() == b"\r":
                # CRLF may straddle two reads
                if self._buf_pos >= len(self._buf) and not self._fill():
                    return b"".join(parts)
                if self._buf[self._buf_pos:self._buf_pos + 1] == b"\n":
                    parts.append(b"\n")
                    self._buf_pos += 1

            return b"".join(parts)

    def _decode(self, raw: bytes) -> str:
        if raw.endswith(b"\r\n"):
            raw = raw[:-2]
        elif raw.endswith((b"\n", b"\r")):
            raw = raw[:-1]
        return raw.decode(self._encoding, errors="surrogateescape")
