"""
Manifest (symlink file) resolution.

A manifest is a UTF-8 text file listing one target path per line. The
resolver turns every manifest found under the input roots into an
ordered list of resolved targets: manifest order first, then line order.
"""

from __future__ import annotations

import logging
import posixpath
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterable

from symlink_input.core.domain.errors import InvalidTargetError
from symlink_input.core.domain.types import ResolvedTarget
from symlink_input.format.listing import list_files

if TYPE_CHECKING:
    from symlink_input.core.ports.filesystem import FileSystem

LOGGER = logging.getLogger(__name__)


def parse_manifest(raw: bytes, *, encoding: str = "utf-8") -> list[str]:
    """
    Return the paths listed in a manifest.

    Lines are taken verbatim apart from the ``\\r`` of a CRLF ending;
    empty lines are skipped.
    """
    paths: list[str] = []
    for line in raw.decode(encoding).split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line:
            paths.append(line)
    return paths


class ManifestResolver:
    """Resolves manifests under input roots into target file metadata."""

    def __init__(
        self,
        fs: FileSystem,
        *,
        encoding: str = "utf-8",
        skip_hidden: bool = True,
        threads: int = 1,
    ) -> None:
        if threads < 1:
            raise ValueError("threads must be >= 1")

        self._fs = fs
        self._encoding = encoding
        self._skip_hidden = skip_hidden
        self._threads = threads

    # ------------------------------------------------------------------

    def list_manifests(self, roots: Iterable[str]) -> list[str]:
        listing = list_files(self._fs, roots, skip_hidden=self._skip_hidden)
        return [status.path for status in listing.files]

    def resolve(self, roots: Iterable[str]) -> list[ResolvedTarget]:
        manifests = self.list_manifests(roots)

        if self._threads > 1 and len(manifests) > 1:
            with ThreadPoolExecutor(max_workers=self._threads) as pool:
                per_manifest = list(pool.map(self.resolve_manifest, manifests))
        else:
            per_manifest = [self.resolve_manifest(path) for path in manifests]

        targets = [target for resolved in per_manifest for target in resolved]

        LOGGER.info(
            "Resolved manifests",
            extra={"manifest_count": len(manifests), "target_count": len(targets)},
        )
        return targets

    def resolve_manifest(self, manifest_path: str) -> list[ResolvedTarget]:
        """Resolve every line of one manifest, failing on the first bad line."""
        with self._fs.open_read(manifest_path) as handle:
            raw = handle.read()

        targets: list[ResolvedTarget] = []

        for line in parse_manifest(raw, encoding=self._encoding):
            target_path = self._absolute(line, manifest_path)
            status = self._fs.stat(target_path)

            if status.is_dir:
                raise InvalidTargetError(
                    target_path=target_path,
                    manifest_path=manifest_path,
                )

            targets.append(ResolvedTarget.from_status(status, manifest_path=manifest_path))

        LOGGER.debug(
            "Resolved manifest",
            extra={"manifest_path": manifest_path, "target_count": len(targets)},
        )
        return targets

    @staticmethod
    def _absolute(line: str, manifest_path: str) -> str:
        if posixpath.isabs(line):
            return line
        return posixpath.join(posixpath.dirname(manifest_path), line)
