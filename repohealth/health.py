"""Repository classification and git health aggregation."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Callable, Iterable, Optional

from .config import ObservationConfig
from .models import GitHealth, RepositoryRecord, RepositoryStatus, SystemState, WorkspaceMetrics

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def calculate_health_score(clean: int, total: int) -> float:
    """Return the percentage of clean repositories, 0 for an empty workspace."""
    if total == 0:
        return 0.0
    return clean / total * 100


def classify_repository(repo: RepositoryRecord) -> RepositoryStatus:
    """Label a repository as dirty, unpushed or clean, in that order of precedence."""
    if not repo.is_clean:
        return RepositoryStatus.DIRTY
    if repo.commits_ahead > 0:
        return RepositoryStatus.UNPUSHED
    return RepositoryStatus.CLEAN


def summarize_git_health(repos: Iterable[RepositoryRecord]) -> GitHealth:
    """Reduce repository records to aggregate counts in a single pass."""
    total = 0
    clean = 0
    unpushed = 0
    total_commits = 0
    for repo in repos:
        total += 1
        if repo.is_clean:
            clean += 1
        if repo.commits_ahead > 0:
            unpushed += 1
        total_commits += repo.total_commits

    return GitHealth(
        total_repositories=total,
        clean_repositories=clean,
        dirty_repositories=total - clean,
        unpushed_repositories=unpushed,
        total_commits=total_commits,
        health_score=calculate_health_score(clean, total),
    )


def build_system_state(
    config: ObservationConfig,
    repos: Iterable[RepositoryRecord],
    workspace: WorkspaceMetrics,
    *,
    clock: Optional[Clock] = None,
) -> SystemState:
    """Build the per-run snapshot from repository records and workspace metrics."""
    timestamp = (clock or utc_now)()
    return SystemState(
        workspace=config.workspace_root,
        timestamp=timestamp,
        git=summarize_git_health(repos),
        workspace_metrics=workspace,
    )


__all__ = [
    "Clock",
    "build_system_state",
    "calculate_health_score",
    "classify_repository",
    "summarize_git_health",
    "utc_now",
]
