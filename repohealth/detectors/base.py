"""Rule signatures shared by the pattern and anomaly detectors."""

from typing import Callable, Optional, Sequence

from ..config import Thresholds
from ..models import Anomaly, GitHealth, Pattern, RepositoryRecord

PatternRule = Callable[[GitHealth, Sequence[RepositoryRecord], Thresholds], Optional[Pattern]]
"""Evaluate aggregate ratios and return at most one pattern."""

AnomalyRule = Callable[[GitHealth, Sequence[RepositoryRecord], Thresholds], Optional[Anomaly]]
"""Evaluate raw counts against a threshold and return at most one anomaly."""
