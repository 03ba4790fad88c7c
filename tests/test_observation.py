"""Law tests for the observation wrapper."""

from __future__ import annotations

from typing import Any, Callable, List

import pytest

from repohealth.observation import (
    Observation,
    create_observation,
    duplicate,
    extend,
    extract,
    map_focus,
)
from repohealth.models import WorkspaceMetrics
from repohealth.pipeline import observe
from tests._fixtures.records import SAMPLE_METRICS, fixed_clock, make_config, make_repos


def _observations() -> List[Observation[Any]]:
    quiet = observe(make_config(), make_repos(clean=3), SAMPLE_METRICS, clock=fixed_clock)
    noisy = observe(
        make_config(), make_repos(dirty=7, unpushed=6), SAMPLE_METRICS, clock=fixed_clock
    )
    empty = observe(make_config(), [], SAMPLE_METRICS, clock=fixed_clock)
    return [
        quiet,
        noisy,
        empty,
        map_focus(lambda state: state.git.health_score)(noisy),
        create_observation("label", quiet.context, noisy.patterns, ()),
    ]


OBSERVATIONS = _observations()

FUNCTIONS: List[Callable[[Any], Any]] = [
    lambda value: value,
    lambda value: repr(value),
    lambda value: (value, value),
    lambda value: 42,
]


@pytest.mark.parametrize("obs", OBSERVATIONS)
def test_left_identity(obs: Observation[Any]) -> None:
    assert extract(duplicate(obs)) == obs


@pytest.mark.parametrize("obs", OBSERVATIONS)
def test_right_identity(obs: Observation[Any]) -> None:
    assert map_focus(extract)(duplicate(obs)).focus == obs.focus


@pytest.mark.parametrize("obs", OBSERVATIONS)
def test_associativity(obs: Observation[Any]) -> None:
    left = duplicate(duplicate(obs)).focus.focus
    right = map_focus(duplicate)(duplicate(obs)).focus.focus
    assert left == right


@pytest.mark.parametrize("obs", OBSERVATIONS)
def test_functor_identity(obs: Observation[Any]) -> None:
    assert map_focus(lambda value: value)(obs).focus == obs.focus


@pytest.mark.parametrize("obs", OBSERVATIONS)
@pytest.mark.parametrize("f", FUNCTIONS)
@pytest.mark.parametrize("g", FUNCTIONS)
def test_functor_composition(obs: Observation[Any], f: Callable[[Any], Any], g: Callable[[Any], Any]) -> None:
    composed = map_focus(lambda value: f(g(value)))(obs).focus
    chained = map_focus(f)(map_focus(g)(obs)).focus
    assert composed == chained


@pytest.mark.parametrize("obs", OBSERVATIONS)
def test_derivations_share_context_patterns_and_anomalies(obs: Observation[Any]) -> None:
    derived = [
        duplicate(obs),
        extend(lambda o: len(o.patterns))(obs),
        map_focus(lambda value: "x")(obs),
    ]
    for item in derived:
        assert item.context is obs.context
        assert item.patterns is obs.patterns
        assert item.anomalies is obs.anomalies


def test_extend_reads_whole_observation() -> None:
    noisy = OBSERVATIONS[1]
    counted = extend(lambda o: (len(o.patterns), len(o.anomalies), o.context.git.total_repositories))(noisy)
    assert counted.focus == (1, 1, 13)


def test_duplicate_focus_is_the_original_object() -> None:
    obs = OBSERVATIONS[0]
    assert duplicate(obs).focus is obs


def test_observation_is_immutable() -> None:
    obs = OBSERVATIONS[0]
    with pytest.raises(AttributeError):
        obs.focus = None  # type: ignore[misc]


def test_create_observation_freezes_sequences() -> None:
    obs = OBSERVATIONS[1]
    rebuilt = create_observation(obs.focus, obs.context, list(obs.patterns), list(obs.anomalies))
    assert isinstance(rebuilt.patterns, tuple)
    assert isinstance(rebuilt.anomalies, tuple)
    assert rebuilt == obs


def test_context_does_not_track_caller_mapping() -> None:
    counts = {".py": 1, ".md": 2}
    obs = observe(make_config(), make_repos(clean=1), WorkspaceMetrics(total_files=3, files_by_type=counts), clock=fixed_clock)

    counts[".py"] = 999

    derived = map_focus(str)(obs)
    assert derived.context.workspace_metrics.files_by_type[".py"] == 1
    assert obs.context.workspace_metrics.files_by_type == {".py": 1, ".md": 2}
    with pytest.raises(TypeError):
        obs.context.workspace_metrics.files_by_type[".py"] = 5  # type: ignore[index]


def test_observations_are_hashable() -> None:
    for obs in OBSERVATIONS:
        assert hash(obs) == hash(extract(duplicate(obs)))
