"""Metrics derived from an observation via ``extend``."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .observation import Observation, extend


class Trend(str, Enum):
    HEALTHY = "HEALTHY"
    NEEDS_CLEANUP = "NEEDS_CLEANUP"
    CRITICAL = "CRITICAL"


def calculate_trend(obs: Observation[Any]) -> Trend:
    """Band the health score; each band includes its lower bound."""
    score = obs.context.git.health_score
    if score >= 80:
        return Trend.HEALTHY
    if score >= 50:
        return Trend.NEEDS_CLEANUP
    return Trend.CRITICAL


def calculate_velocity(obs: Observation[Any]) -> int:
    """Total commits across every observed repository."""
    return obs.context.git.total_commits


derive_trend = extend(calculate_trend)
derive_velocity = extend(calculate_velocity)


__all__ = [
    "Trend",
    "calculate_trend",
    "calculate_velocity",
    "derive_trend",
    "derive_velocity",
]
