"""Factories for repository records and configs used across tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import List

from repohealth.config import ObservationConfig
from repohealth.models import RepositoryRecord, WorkspaceMetrics

FIXED_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_TIME


def make_config(workspace_root: str = "/test/workspace", **overrides: object) -> ObservationConfig:
    return ObservationConfig(workspace_root=workspace_root, **overrides)  # type: ignore[arg-type]


def make_repo(
    name: str = "repo",
    *,
    clean: bool = True,
    ahead: int = 0,
    commits: int = 10,
    branch: str = "main",
) -> RepositoryRecord:
    return RepositoryRecord(
        path=f"/test/{name}",
        name=name,
        branch=branch,
        is_clean=clean,
        commits_ahead=ahead,
        total_commits=commits,
        last_commit_time=FIXED_TIME,
        has_remote=True,
    )


def make_repos(*, clean: int = 0, dirty: int = 0, unpushed: int = 0, commits: int = 10) -> List[RepositoryRecord]:
    """Build ``clean`` clean repos, ``dirty`` dirty repos and ``unpushed`` clean repos ahead of upstream."""
    repos: List[RepositoryRecord] = []
    for index in range(clean):
        repos.append(make_repo(f"clean-{index}", commits=commits))
    for index in range(dirty):
        repos.append(make_repo(f"dirty-{index}", clean=False, commits=commits))
    for index in range(unpushed):
        repos.append(make_repo(f"ahead-{index}", ahead=2, commits=commits))
    return repos


SAMPLE_METRICS = WorkspaceMetrics(
    total_projects=10,
    total_files=1000,
    files_by_type={".ts": 500, ".md": 300, ".py": 200},
)


__all__ = [
    "FIXED_TIME",
    "SAMPLE_METRICS",
    "fixed_clock",
    "make_config",
    "make_repo",
    "make_repos",
]
