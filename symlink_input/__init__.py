"""Public API for the symlink_input package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------
from symlink_input.core.config.job_config import JobConfig

# ----------------------------------------------------------------------
# Domain types and errors
# ----------------------------------------------------------------------
from symlink_input.core.domain.errors import (
    NO_INPUT_PATHS_MESSAGE,
    FormatMismatchError,
    InputFormatError,
    InvalidTargetError,
    NoInputPathsError,
)
from symlink_input.core.domain.types import (
    BlockLocation,
    ContentSummary,
    FileStatus,
    InputFormatKind,
    ResolvedTarget,
    SplitDescriptor,
)

# ----------------------------------------------------------------------
# Ports
# ----------------------------------------------------------------------
from symlink_input.core.ports.filesystem import FileSystem
from symlink_input.core.ports.record_source import RecordSource

# ----------------------------------------------------------------------
# Input formats
# ----------------------------------------------------------------------
from symlink_input.format.input_format import (
    DirectTextInputFormat,
    SymlinkTextInputFormat,
    TextInputFormat,
    select_input_format,
)
from symlink_input.format.record_reader import ProxyRecordReader

# ----------------------------------------------------------------------
# Filesystem bindings
# ----------------------------------------------------------------------
from symlink_input.io.local_fs import LocalFileSystem
from symlink_input.io.object_storage_fs import ObjectStorageFileSystem

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Input formats
    "TextInputFormat",
    "SymlinkTextInputFormat",
    "DirectTextInputFormat",
    "select_input_format",
    "ProxyRecordReader",

    # Config
    "JobConfig",
    "InputFormatKind",

    # Domain
    "SplitDescriptor",
    "ResolvedTarget",
    "ContentSummary",
    "BlockLocation",
    "FileStatus",

    # Errors
    "NO_INPUT_PATHS_MESSAGE",
    "InputFormatError",
    "NoInputPathsError",
    "InvalidTargetError",
    "FormatMismatchError",

    # Ports and bindings
    "FileSystem",
    "RecordSource",
    "LocalFileSystem",
    "ObjectStorageFileSystem",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("symlink-input")
except PackageNotFoundError:
    __version__ = "0.0.0"
