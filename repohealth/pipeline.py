"""Assessment pipeline: validate the configuration, then assemble the observation."""

from __future__ import annotations

from typing import Optional, Sequence

from .config import ObservationConfig
from .detectors import detect_anomalies, detect_patterns
from .errors import InvalidConfig
from .health import Clock, build_system_state
from .logging import get_logger
from .models import RepositoryRecord, SystemState, WorkspaceMetrics
from .observation import Observation, create_observation

_logger = get_logger("pipeline")


def validate_config(config: ObservationConfig) -> None:
    if config.workspace_root == "":
        raise InvalidConfig("workspace_root cannot be empty")


def observe(
    config: ObservationConfig,
    repos: Sequence[RepositoryRecord],
    workspace: WorkspaceMetrics,
    *,
    clock: Optional[Clock] = None,
) -> Observation[SystemState]:
    """Assess repository records and return an observation focused on the system state.

    Raises :class:`InvalidConfig` before any aggregation when the workspace
    identifier is empty. Repository order is preserved; nothing is
    deduplicated.
    """
    validate_config(config)

    repos = tuple(repos)
    state = build_system_state(config, repos, workspace, clock=clock)
    patterns = detect_patterns(state.git, repos, config.thresholds)
    anomalies = detect_anomalies(state.git, repos, config.thresholds)
    _logger.debug(
        "Observed %d repositories (health %.1f%%): %d patterns, %d anomalies",
        state.git.total_repositories,
        state.git.health_score,
        len(patterns),
        len(anomalies),
    )
    return create_observation(state, state, patterns, anomalies)


__all__ = ["observe", "validate_config"]
