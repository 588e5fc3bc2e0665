from __future__ import annotations

from typing import Iterable

from symlink_input.core.domain.types import ContentSummary, ResolvedTarget


def summarize_targets(
    targets: Iterable[ResolvedTarget],
    *,
    directory_count: int = 0,
) -> ContentSummary:
    """
    Aggregate size and file count over resolved targets.

    Every reference counts, duplicates included.
    """
    length = 0
    file_count = 0

    for target in targets:
        length += target.length
        file_count += 1

    return ContentSummary(
        length=length,
        file_count=file_count,
        directory_count=directory_count,
    )
