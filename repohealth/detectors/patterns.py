"""Structural pattern rules evaluated over aggregate git health."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import Thresholds
from ..models import GitHealth, Pattern, RepositoryRecord

HIGH_DIRTY_RATIO = "HIGH_DIRTY_RATIO"


def detect_dirty_ratio_pattern(
    health: GitHealth,
    repos: Sequence[RepositoryRecord],
    thresholds: Thresholds = Thresholds(),
) -> Optional[Pattern]:
    """Flag workspaces where more than half the repositories are uncommitted.

    The comparison is strict: a ratio equal to ``thresholds.dirty_ratio`` does
    not fire, and neither does an empty workspace.
    """
    total = health.total_repositories
    if total == 0:
        return None

    dirty = health.dirty_repositories
    if dirty / total > thresholds.dirty_ratio:
        return Pattern(
            type=HIGH_DIRTY_RATIO,
            significance=0.8,
            evidence=f"{dirty} of {total} repositories uncommitted",
            recommendation="Batch commit workflow needed",
        )
    return None


__all__ = ["HIGH_DIRTY_RATIO", "detect_dirty_ratio_pattern"]
