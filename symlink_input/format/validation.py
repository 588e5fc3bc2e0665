"""Fail-fast validation of job input configuration."""

from __future__ import annotations

from typing import Sequence

from symlink_input.core.domain.errors import NoInputPathsError


def validate_input_paths(input_paths: Sequence[str]) -> list[str]:
    """
    Return the configured input paths, or raise NoInputPathsError.

    Blank entries do not count as configured paths. No filesystem
    access happens here.
    """
    paths = [path for path in input_paths if path and path.strip()]

    if not paths:
        raise NoInputPathsError()

    return paths
