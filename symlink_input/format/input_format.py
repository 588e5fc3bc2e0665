"""
Text input formats.

An input format turns a job configuration into a content summary and a
list of split descriptors, and creates a record reader per split. The
two variants differ only in how input roots resolve to target files:

- DirectTextInputFormat: roots are directories of data files.
- SymlinkTextInputFormat: roots are directories of manifest files whose
  lines name the data files.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from symlink_input.core.domain.errors import FormatMismatchError
from symlink_input.core.domain.types import ResolvedTarget
from symlink_input.format.listing import list_files
from symlink_input.format.manifest import ManifestResolver
from symlink_input.format.record_reader import ProxyRecordReader
from symlink_input.format.splitter import plan_splits
from symlink_input.format.summary import summarize_targets
from symlink_input.format.validation import validate_input_paths

if TYPE_CHECKING:
    from symlink_input.core.config.job_config import JobConfig
    from symlink_input.core.domain.types import (
        ContentSummary,
        InputFormatKind,
        SplitDescriptor,
    )
    from symlink_input.core.ports.filesystem import FileSystem
    from symlink_input.core.ports.record_source import RecordSource
    from symlink_input.runtime.prometheus_metrics import PlanningMetricsClient

LOGGER = logging.getLogger(__name__)


class TextInputFormat(ABC):
    """Line-oriented input format over a FileSystem binding."""

    kind: ClassVar[InputFormatKind]

    def __init__(
        self,
        fs: FileSystem,
        *,
        metrics: PlanningMetricsClient | None = None,
    ) -> None:
        self._fs = fs
        self._metrics = metrics

    @property
    def fs(self) -> FileSystem:
        return self._fs

    @abstractmethod
    def resolve_targets(self, job: JobConfig) -> list[ResolvedTarget]:
        """Resolve the configured input paths into target files."""

    def get_content_summary(self, job: JobConfig) -> ContentSummary:
        self._validate_job(job)
        return summarize_targets(self.resolve_targets(job))

    def get_splits(
        self,
        job: JobConfig,
        num_splits: int | None = None,
    ) -> list[SplitDescriptor]:
        """
        Plan the splits of the job input.

        Parameters
        ----------
        job:
            Job configuration; must list at least one input path and
            name this input format.

        num_splits:
            Advisory split count. Defaults to ``job.desired_split_count``.

        Returns
        -------
        list[SplitDescriptor]
            Ordered by target, then by ascending offset.
        """
        self._validate_job(job)
        started = time.monotonic()

        targets = self.resolve_targets(job)
        splits = plan_splits(targets, job=job, num_splits=num_splits)

        total_bytes = sum(target.length for target in targets)

        LOGGER.info(
            "Number of splits: %d",
            len(splits),
            extra={
                "input_format": self.kind,
                "target_count": len(targets),
                "total_bytes": total_bytes,
            },
        )

        if self._metrics is not None and self._metrics.is_enabled():
            try:
                self._metrics.record_planning(
                    input_format=self.kind,
                    split_count=len(splits),
                    target_count=len(targets),
                    total_bytes=total_bytes,
                    duration_seconds=time.monotonic() - started,
                )
            except Exception:
                LOGGER.exception("Planning metrics push failed")

        return splits

    def get_record_reader(
        self,
        split: SplitDescriptor,
        job: JobConfig | None = None,
    ) -> RecordSource:
        encoding = job.encoding if job is not None else "utf-8"
        return ProxyRecordReader(self._fs, split, encoding=encoding)

    # ------------------------------------------------------------------

    def _validate_job(self, job: JobConfig) -> list[str]:
        """Check input paths and format kind before any filesystem access."""
        paths = validate_input_paths(job.input_paths)

        if job.input_format != self.kind:
            raise FormatMismatchError(expected=self.kind, configured=job.input_format)

        return paths


class SymlinkTextInputFormat(TextInputFormat):
    """Input format whose roots hold manifests pointing at the data files."""

    kind = "symlink"

    def resolve_targets(self, job: JobConfig) -> list[ResolvedTarget]:
        resolver = ManifestResolver(
            self._fs,
            encoding=job.encoding,
            skip_hidden=job.skip_hidden,
            threads=job.list_status_threads,
        )
        return resolver.resolve(self._validate_job(job))


class DirectTextInputFormat(TextInputFormat):
    """Input format whose roots are ordinary data directories."""

    kind = "direct"

    def resolve_targets(self, job: JobConfig) -> list[ResolvedTarget]:
        listing = list_files(self._fs, self._validate_job(job), skip_hidden=job.skip_hidden)
        return [ResolvedTarget.from_status(status) for status in listing.files]

    def get_content_summary(self, job: JobConfig) -> ContentSummary:
        listing = list_files(self._fs, self._validate_job(job), skip_hidden=job.skip_hidden)
        return summarize_targets(
            (ResolvedTarget.from_status(status) for status in listing.files),
            directory_count=listing.directory_count,
        )


_FORMATS: dict[str, type[TextInputFormat]] = {
    SymlinkTextInputFormat.kind: SymlinkTextInputFormat,
    DirectTextInputFormat.kind: DirectTextInputFormat,
}


def select_input_format(
    job: JobConfig,
    fs: FileSystem,
    *,
    metrics: PlanningMetricsClient | None = None,
) -> TextInputFormat:
    """Instantiate the input format variant the job is configured for."""
    try:
        format_cls = _FORMATS[job.input_format]
    except KeyError:
        raise ValueError(f"Unknown input format: {job.input_format}") from None

    return format_cls(fs, metrics=metrics)
