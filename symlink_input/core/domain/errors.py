"""
Errors raised by the input format layer itself.

Filesystem errors are never wrapped; they propagate unchanged.
"""
from __future__ import annotations

NO_INPUT_PATHS_MESSAGE = "No input paths specified in job."


class InputFormatError(OSError):
    """Base class for input format errors."""


class NoInputPathsError(InputFormatError):
    """The job configuration lists no input paths."""

    def __init__(self) -> None:
        super().__init__(NO_INPUT_PATHS_MESSAGE)


class InvalidTargetError(InputFormatError):
    """A manifest line names something that is not a regular file."""

    def __init__(self, *, target_path: str, manifest_path: str) -> None:
        super().__init__(
            f"Manifest {manifest_path} references a directory: {target_path}"
        )
        self.target_path = target_path
        self.manifest_path = manifest_path


class FormatMismatchError(InputFormatError):
    """The job names a different input format than the one planning it."""

    def __init__(self, *, expected: str, configured: str) -> None:
        super().__init__(
            f"Job is configured for the '{configured}' input format, "
            f"not '{expected}'"
        )
        self.expected = expected
        self.configured = configured
