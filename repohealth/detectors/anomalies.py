"""Statistical anomaly rules evaluated over raw repository records."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import Thresholds
from ..models import Anomaly, GitHealth, RepositoryRecord, Severity

HIGH_UNPUSHED_COUNT = "HIGH_UNPUSHED_COUNT"


def detect_unpushed_anomaly(
    health: GitHealth,
    repos: Sequence[RepositoryRecord],
    thresholds: Thresholds = Thresholds(),
) -> Optional[Anomaly]:
    """Flag workspaces with more than ``unpushed_count`` repositories ahead of upstream."""
    unpushed = sum(1 for repo in repos if repo.commits_ahead > 0)
    if unpushed <= thresholds.unpushed_count:
        return None

    total = len(repos)
    return Anomaly(
        type=HIGH_UNPUSHED_COUNT,
        severity=Severity.MEDIUM,
        # total is zero only for a negative threshold
        deviation=unpushed / total if total else 0.0,
        description=f"{unpushed} repositories with unpushed commits",
        recommendation="Review and push or create PRs",
    )


__all__ = ["HIGH_UNPUSHED_COUNT", "detect_unpushed_anomaly"]
