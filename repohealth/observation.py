"""Observation wrapper pairing a derived focus value with its run context.

An :class:`Observation` carries a ``focus`` of any type together with the
:class:`~repohealth.models.SystemState`, patterns and anomalies of the run that
produced it. The free functions below derive new observations by changing only
the focus; context, patterns and anomalies are shared by reference.

``extract``, ``duplicate`` and ``extend`` satisfy the comonad laws and
``map_focus`` the functor laws::

    extract(duplicate(obs)) == obs
    map_focus(extract)(duplicate(obs)).focus == obs.focus
    duplicate(duplicate(obs)).focus.focus == map_focus(duplicate)(duplicate(obs)).focus.focus
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, Tuple, TypeVar

from .models import Anomaly, Pattern, SystemState

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Observation(Generic[A]):
    """Immutable focus value plus the shared context it was derived from."""

    focus: A
    context: SystemState
    patterns: Tuple[Pattern, ...] = ()
    anomalies: Tuple[Anomaly, ...] = ()


def create_observation(
    focus: A,
    context: SystemState,
    patterns: Sequence[Pattern] = (),
    anomalies: Sequence[Anomaly] = (),
) -> Observation[A]:
    return Observation(
        focus=focus,
        context=context,
        patterns=tuple(patterns),
        anomalies=tuple(anomalies),
    )


def _refocus(obs: Observation[A], focus: B) -> Observation[B]:
    return Observation(
        focus=focus,
        context=obs.context,
        patterns=obs.patterns,
        anomalies=obs.anomalies,
    )


def extract(obs: Observation[A]) -> A:
    """Return the current focus."""
    return obs.focus


def duplicate(obs: Observation[A]) -> Observation[Observation[A]]:
    """Return an observation whose focus is ``obs`` itself."""
    return _refocus(obs, obs)


def extend(func: Callable[[Observation[A]], B]) -> Callable[[Observation[A]], Observation[B]]:
    """Lift a context-aware derivation into an observation transform.

    ``func`` receives the whole observation, so it may read the context,
    patterns and anomalies as well as the focus.
    """

    def _extend(obs: Observation[A]) -> Observation[B]:
        return _refocus(obs, func(obs))

    return _extend


def map_focus(func: Callable[[A], B]) -> Callable[[Observation[A]], Observation[B]]:
    """Lift a plain focus transform into an observation transform."""

    def _map(obs: Observation[A]) -> Observation[B]:
        return _refocus(obs, func(obs.focus))

    return _map


__all__ = [
    "Observation",
    "create_observation",
    "duplicate",
    "extend",
    "extract",
    "map_focus",
]
