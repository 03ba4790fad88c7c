"""Tests for the HIGH_DIRTY_RATIO pattern rule."""

from __future__ import annotations

from repohealth.config import Thresholds
from repohealth.detectors import HIGH_DIRTY_RATIO, detect_dirty_ratio_pattern, detect_patterns
from repohealth.health import summarize_git_health
from tests._fixtures.records import make_repos


def _detect(repos, thresholds: Thresholds = Thresholds()):  # type: ignore[no-untyped-def]
    return detect_dirty_ratio_pattern(summarize_git_health(repos), repos, thresholds)


def test_exactly_half_dirty_does_not_fire() -> None:
    assert _detect(make_repos(clean=2, dirty=2)) is None


def test_sixty_percent_dirty_fires_with_evidence() -> None:
    pattern = _detect(make_repos(clean=2, dirty=3))

    assert pattern is not None
    assert pattern.type == HIGH_DIRTY_RATIO
    assert pattern.significance == 0.8
    assert pattern.evidence == "3 of 5 repositories uncommitted"
    assert pattern.recommendation == "Batch commit workflow needed"


def test_empty_workspace_does_not_fire() -> None:
    assert _detect([]) is None


def test_all_dirty_fires() -> None:
    pattern = _detect(make_repos(dirty=1))
    assert pattern is not None
    assert pattern.evidence == "1 of 1 repositories uncommitted"


def test_unpushed_clean_repos_do_not_count_as_dirty() -> None:
    assert _detect(make_repos(clean=1, unpushed=4)) is None


def test_custom_ratio_threshold_is_strict() -> None:
    repos = make_repos(clean=3, dirty=1)
    assert _detect(repos, Thresholds(dirty_ratio=0.25)) is None
    assert _detect(repos, Thresholds(dirty_ratio=0.2)) is not None


def test_detect_patterns_returns_tuple_of_fired_rules() -> None:
    repos = make_repos(clean=1, dirty=4)
    patterns = detect_patterns(summarize_git_health(repos), repos)

    assert isinstance(patterns, tuple)
    assert [p.type for p in patterns] == [HIGH_DIRTY_RATIO]
    assert detect_patterns(summarize_git_health([]), []) == ()
