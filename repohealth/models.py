"""Core data models shared across repohealth components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class RepositoryStatus(str, Enum):
    """Classification of a single working copy."""

    CLEAN = "clean"
    DIRTY = "dirty"
    UNPUSHED = "unpushed"


class Severity(str, Enum):
    """Severity levels attached to anomalies."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class RepositoryRecord:
    """Status snapshot of one git working copy."""

    path: str
    name: str
    branch: str
    is_clean: bool
    commits_ahead: int
    total_commits: int
    last_commit_time: Optional[datetime] = None
    has_remote: bool = False


@dataclass(frozen=True)
class WorkspaceMetrics:
    """File counts across the workspace; ``files_by_type`` is held as a read-only copy."""

    total_projects: int = 0
    total_files: int = 0
    files_by_type: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files_by_type", MappingProxyType(dict(self.files_by_type)))


@dataclass(frozen=True)
class GitHealth:
    """Aggregate repository counts and the derived health score."""

    total_repositories: int
    clean_repositories: int
    dirty_repositories: int
    unpushed_repositories: int
    total_commits: int
    health_score: float


@dataclass(frozen=True)
class Pattern:
    """Structural condition detected from aggregate ratios."""

    type: str
    significance: float
    evidence: str
    recommendation: str


@dataclass(frozen=True)
class Anomaly:
    """Statistical deviation detected from raw counts."""

    type: str
    severity: Severity
    deviation: float
    description: str
    recommendation: str


@dataclass(frozen=True)
class SystemState:
    """Snapshot of the workspace produced once per observation run.

    ``history`` is reserved for prior snapshots and is always empty when built
    by :func:`repohealth.health.build_system_state`.
    """

    workspace: str
    timestamp: datetime
    git: GitHealth
    workspace_metrics: WorkspaceMetrics
    observation_type: str = "workspace-health"
    history: Tuple[object, ...] = ()


__all__ = [
    "Anomaly",
    "GitHealth",
    "Pattern",
    "RepositoryRecord",
    "RepositoryStatus",
    "Severity",
    "SystemState",
    "WorkspaceMetrics",
]
