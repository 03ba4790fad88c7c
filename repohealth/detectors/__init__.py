"""Pattern and anomaly detection over aggregate git health."""

from __future__ import annotations

from typing import Mapping, Sequence, Tuple

from ..config import Thresholds
from ..logging import get_logger
from ..models import Anomaly, GitHealth, Pattern, RepositoryRecord
from .anomalies import HIGH_UNPUSHED_COUNT, detect_unpushed_anomaly
from .base import AnomalyRule, PatternRule
from .patterns import HIGH_DIRTY_RATIO, detect_dirty_ratio_pattern

# Evaluation order is the output order.
PATTERN_RULES: Mapping[str, PatternRule] = {
    HIGH_DIRTY_RATIO: detect_dirty_ratio_pattern,
}

ANOMALY_RULES: Mapping[str, AnomalyRule] = {
    HIGH_UNPUSHED_COUNT: detect_unpushed_anomaly,
}

_logger = get_logger("detectors")


def detect_patterns(
    health: GitHealth,
    repos: Sequence[RepositoryRecord],
    thresholds: Thresholds = Thresholds(),
) -> Tuple[Pattern, ...]:
    """Return the patterns raised by every registered rule, in rule order."""
    patterns = []
    for name, rule in PATTERN_RULES.items():
        pattern = rule(health, repos, thresholds)
        if pattern is not None:
            _logger.debug("Pattern rule %s fired: %s", name, pattern.evidence)
            patterns.append(pattern)
    return tuple(patterns)


def detect_anomalies(
    health: GitHealth,
    repos: Sequence[RepositoryRecord],
    thresholds: Thresholds = Thresholds(),
) -> Tuple[Anomaly, ...]:
    """Return the anomalies raised by every registered rule, in rule order."""
    anomalies = []
    for name, rule in ANOMALY_RULES.items():
        anomaly = rule(health, repos, thresholds)
        if anomaly is not None:
            _logger.debug("Anomaly rule %s fired: %s", name, anomaly.description)
            anomalies.append(anomaly)
    return tuple(anomalies)


__all__ = [
    "ANOMALY_RULES",
    "AnomalyRule",
    "HIGH_DIRTY_RATIO",
    "HIGH_UNPUSHED_COUNT",
    "PATTERN_RULES",
    "PatternRule",
    "detect_anomalies",
    "detect_dirty_ratio_pattern",
    "detect_patterns",
    "detect_unpushed_anomaly",
]
