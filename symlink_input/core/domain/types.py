"""Core data models for symlink-indirected inputs.

Resolved targets and content summaries are plain frozen dataclasses.
Split descriptors are Pydantic models because they cross process
boundaries: they are handed to execution workers as JSON.
"""

# pylint: disable=missing-class-docstring
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

InputFormatKind = Literal["direct", "symlink"]


# ---------------------------------------------------------------------------
# Filesystem metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BlockLocation:
    """A storage block of a file and the hosts holding a replica of it."""

    offset: int
    length: int
    hosts: tuple[str, ...] = ()

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True, slots=True)
class FileStatus:
    path: str
    length: int
    is_dir: bool = False
    block_size: int = 0
    blocks: tuple[BlockLocation, ...] = ()

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]


# ---------------------------------------------------------------------------
# Resolution / summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """
    Immutable metadata of one manifest reference.

    Duplicate references produce duplicate targets.
    """

    path: str
    length: int
    block_size: int = 0
    blocks: tuple[BlockLocation, ...] = ()
    manifest_path: str | None = None

    @classmethod
    def from_status(
        cls,
        status: FileStatus,
        *,
        manifest_path: str | None = None,
    ) -> ResolvedTarget:
        return cls(
            path=status.path,
            length=status.length,
            block_size=status.block_size,
            blocks=tuple(status.blocks),
            manifest_path=manifest_path,
        )


@dataclass(frozen=True, slots=True)
class ContentSummary:
    length: int = 0
    file_count: int = 0
    directory_count: int = 0


# ---------------------------------------------------------------------------
# Split descriptor (wire model)
# ---------------------------------------------------------------------------


class SplitDescriptor(BaseModel):
    """
    A contiguous byte range of exactly one target file.

    Self-contained: a worker needs nothing but this value (and a
    filesystem binding) to read the records of the split.
    """

    target_path: str = Field(..., min_length=1)
    start: int = Field(..., ge=0)
    length: int = Field(..., ge=0)
    hosts: tuple[str, ...] = Field(default_factory=tuple)
    manifest_path: str | None = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def end(self) -> int:
        return self.start + self.length

    def __str__(self) -> str:
        return f"{self.target_path}:{self.start}+{self.length}"
