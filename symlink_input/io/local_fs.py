"""Local filesystem binding."""

from __future__ import annotations

import os
import stat as stat_module
from pathlib import Path
from typing import BinaryIO

from symlink_input.core.domain.types import BlockLocation, FileStatus


class LocalFileSystem:
    """
    FileSystem implementation backed by the local disk.

    Local files have no real block layout, so fixed-size blocks on a
    single host are synthesized for every regular file. Listings are
    sorted by name so enumeration order is stable.
    """

    DEFAULT_BLOCK_SIZE = 32 * 1024 * 1024

    def __init__(
        self,
        *,
        block_size: int = DEFAULT_BLOCK_SIZE,
        host: str = "localhost",
    ) -> None:
        if block_size <= 0:
            raise ValueError("block_size must be > 0")

        self._block_size = block_size
        self._host = host

    # ------------------------------------------------------------------

    def list(self, path: str) -> list[FileStatus]:
        status = self.stat(path)
        if not status.is_dir:
            return [status]

        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries)

        return [self.stat(os.path.join(path, name)) for name in names]

    def stat(self, path: str) -> FileStatus:
        st = os.stat(path)
        normalized = str(Path(path))

        if stat_module.S_ISDIR(st.st_mode):
            return FileStatus(path=normalized, length=0, is_dir=True)

        return FileStatus(
            path=normalized,
            length=st.st_size,
            is_dir=False,
            block_size=self._block_size,
            blocks=self._blocks_for(st.st_size),
        )

    def open_read(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def open_write(self, path: str) -> BinaryIO:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        return open(path, "wb")

    # ------------------------------------------------------------------

    def _blocks_for(self, length: int) -> tuple[BlockLocation, ...]:
        blocks: list[BlockLocation] = []
        offset = 0
        while offset < length:
            block_length = min(self._block_size, length - offset)
            blocks.append(
                BlockLocation(
                    offset=offset,
                    length=block_length,
                    hosts=(self._host,),
                )
            )
            offset += block_length
        return tuple(blocks)
