"""
Semantic test: LF, CR and CRLF all end a line.

Invariant:
A lone ``\\r`` terminates a line just like ``\\n``; ``\\r\\n`` is one
terminator even when the two bytes arrive in separate reads.
"""

from __future__ import annotations

import io

import pytest

from symlink_input.format.line_reader import LineRecordReader


def _records(data: bytes, *, start: int = 0, length: int | None = None, buffer_size: int = 1):
    reader = LineRecordReader(
        io.BytesIO(data),
        start=start,
        length=len(data) - start if length is None else length,
        buffer_size=buffer_size,
    )
    return list(reader)


@pytest.mark.parametrize("buffer_size", [1, 2, 3, 64])
def test_lone_cr_ends_lines(buffer_size: int) -> None:
    assert _records(b"l1\rl2\rl3\r", buffer_size=buffer_size) == [(0, "l1"), (3, "l2"), (6, "l3")]


@pytest.mark.parametrize("buffer_size", [1, 2, 3, 64])
def test_crlf_is_a_single_terminator(buffer_size: int) -> None:
    assert _records(b"a\r\nb\r\n\r\nc", buffer_size=buffer_size) == [
        (0, "a"),
        (3, "b"),
        (6, ""),
        (8, "c"),
    ]


def test_trailing_cr_at_end_of_stream() -> None:
    assert _records(b"x\r", buffer_size=2) == [(0, "x")]


def test_later_range_skips_fragment_ending_in_cr() -> None:
    data = b"head\rnext\rlast"

    assert _records(data, start=2, buffer_size=1) == [(5, "next"), (10, "last")]


def test_range_starting_inside_crlf_skips_only_the_lf() -> None:
    data = b"ab\r\ncd\r\n"

    first = _records(data, start=0, length=3)
    second = _records(data, start=3, length=5)

    assert first == [(0, "ab")]
    assert second == [(4, "cd")]


def test_invalid_buffer_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        LineRecordReader(io.BytesIO(b""), start=0, length=0, buffer_size=0)
