"""
Size-based split planning.

Each target is cut independently into byte ranges of a nominal split
size derived from the total input size and the desired split count.
A split never spans two targets, and the splits of one target tile its
byte range exactly.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Sequence

from symlink_input.core.domain.types import SplitDescriptor

if TYPE_CHECKING:
    from symlink_input.core.config.job_config import JobConfig
    from symlink_input.core.domain.types import BlockLocation, ResolvedTarget


def compute_split_size(
    *,
    total_bytes: int,
    num_splits: int,
    min_split_size: int = 1,
    max_split_size: int | None = None,
) -> int:
    """
    Nominal split size: ``max(min_split_size, total / num_splits)``,
    capped by ``max_split_size`` when one is configured.
    """
    if total_bytes < 0:
        raise ValueError("total_bytes must be >= 0")

    goal_size = total_bytes // max(num_splits, 1)
    split_size = max(min_split_size, goal_size)

    if max_split_size is not None:
        split_size = min(split_size, max_split_size)

    return max(split_size, 1)


def split_hosts(
    blocks: Sequence[BlockLocation],
    *,
    start: int,
    length: int,
) -> tuple[str, ...]:
    """
    Hosts of every block overlapping ``[start, start + length)``,
    ordered by the number of overlapping bytes they hold.
    """
    end = start + length
    weight: dict[str, int] = defaultdict(int)
    first_seen: dict[str, int] = {}

    for block in blocks:
        overlap = min(end, block.end) - max(start, block.offset)
        if overlap <= 0:
            continue
        for host in block.hosts:
            weight[host] += overlap
            first_seen.setdefault(host, len(first_seen))

    return tuple(sorted(weight, key=lambda host: (-weight[host], first_seen[host])))


def plan_target_splits(
    target: ResolvedTarget,
    *,
    split_size: int,
    min_split_size: int = 1,
    split_slop: float = 1.1,
) -> list[SplitDescriptor]:
    """Cut one target into consecutive splits covering all of its bytes."""
    if split_size <= 0:
        raise ValueError("split_size must be > 0")

    size = split_size
    if 0 < target.block_size < size:
        size = max(min_split_size, target.block_size)

    if target.length == 0:
        return [_descriptor(target, start=0, length=0)]

    splits: list[SplitDescriptor] = []
    remaining = target.length

    # The tail is folded into the last full chunk while it stays within
    # the slop factor.
    while remaining / size > split_slop:
        splits.append(_descriptor(target, start=target.length - remaining, length=size))
        remaining -= size

    if remaining:
        splits.append(_descriptor(target, start=target.length - remaining, length=remaining))

    return splits


def plan_splits(
    targets: Sequence[ResolvedTarget],
    *,
    job: JobConfig,
    num_splits: int | None = None,
) -> list[SplitDescriptor]:
    """
    Plan splits for all targets: target order, then ascending offset.

    ``num_splits`` (default: ``job.desired_split_count``) is advisory;
    the number of splits returned may differ.
    """
    if not targets:
        return []

    if num_splits is None:
        num_splits = job.desired_split_count
    if num_splits < 0:
        raise ValueError("num_splits must be >= 0")

    split_size = compute_split_size(
        total_bytes=sum(target.length for target in targets),
        num_splits=num_splits,
        min_split_size=job.min_split_size,
        max_split_size=job.max_split_size,
    )

    splits: list[SplitDescriptor] = []
    for target in targets:
        splits.extend(
            plan_target_splits(
                target,
                split_size=split_size,
                min_split_size=job.min_split_size,
                split_slop=job.split_slop,
            )
        )

    return splits


def _descriptor(target: ResolvedTarget, *, start: int, length: int) -> SplitDescriptor:
    return SplitDescriptor(
        target_path=target.path,
        start=start,
        length=length,
        hosts=split_hosts(target.blocks, start=start, length=length),
        manifest_path=target.manifest_path,
    )
