"""Workspace git health assessment."""

from .config import ObservationConfig, Thresholds
from .derived import Trend, calculate_trend, calculate_velocity
from .errors import InvalidConfig, ObservationError
from .health import calculate_health_score, classify_repository
from .models import (
    Anomaly,
    GitHealth,
    Pattern,
    RepositoryRecord,
    RepositoryStatus,
    Severity,
    SystemState,
    WorkspaceMetrics,
)
from .observation import Observation, duplicate, extend, extract, map_focus
from .pipeline import observe

__all__ = [
    "Anomaly",
    "GitHealth",
    "InvalidConfig",
    "Observation",
    "ObservationConfig",
    "ObservationError",
    "Pattern",
    "RepositoryRecord",
    "RepositoryStatus",
    "Severity",
    "SystemState",
    "Thresholds",
    "Trend",
    "WorkspaceMetrics",
    "calculate_health_score",
    "calculate_trend",
    "calculate_velocity",
    "classify_repository",
    "duplicate",
    "extend",
    "extract",
    "map_focus",
    "observe",
]
