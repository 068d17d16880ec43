"""Distance strategies for comparing partial routes during pathfinding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any, Protocol


class _Stage(Protocol):
    at_time: float
    hop_count: int
    expiration: float


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class Distance(ABC):
    """Ordering of route stages; smaller means better.

    ``cmp`` returns -1, 0 or 1.
    """

    @staticmethod
    @abstractmethod
    def cmp(first: _Stage, second: _Stage) -> int:
        """Compare two stages."""

    @staticmethod
    @abstractmethod
    def eq(first: _Stage, second: _Stage) -> bool:
        """Tell whether two stages are at the same distance."""

    @staticmethod
    @abstractmethod
    def can_retain(prop: _Stage, known: _Stage) -> bool:
        """Tell whether ``prop`` is better than ``known`` on the secondary metric."""

    @staticmethod
    @abstractmethod
    def must_prune(prop: _Stage, known: _Stage) -> bool:
        """Tell whether ``known`` is dominated by ``prop``."""


def _same(first: _Stage, second: _Stage) -> bool:
    return (
        first.at_time == second.at_time
        and first.hop_count == second.hop_count
        and first.expiration == second.expiration
    )


def _must_prune(prop: _Stage, known: _Stage) -> bool:
    # Expiration is ignored on purpose to keep pruning cheap.
    return prop.at_time <= known.at_time and prop.hop_count <= known.hop_count


class SABR(Distance):
    """Earliest arrival first, then fewest hops, then latest expiration."""

    @staticmethod
    def cmp(first: _Stage, second: _Stage) -> int:
        return (
            _sign(first.at_time, second.at_time)
            or _sign(first.hop_count, second.hop_count)
            or _sign(second.expiration, first.expiration)
        )

    @staticmethod
    def eq(first: _Stage, second: _Stage) -> bool:
        return _same(first, second)

    @staticmethod
    def can_retain(prop: _Stage, known: _Stage) -> bool:
        return prop.hop_count < known.hop_count

    @staticmethod
    def must_prune(prop: _Stage, known: _Stage) -> bool:
        return _must_prune(prop, known)


class Hop(Distance):
    """Fewest hops first, then earliest arrival, then latest expiration."""

    @staticmethod
    def cmp(first: _Stage, second: _Stage) -> int:
        return (
            _sign(first.hop_count, second.hop_count)
            or _sign(first.at_time, second.at_time)
            or _sign(second.expiration, first.expiration)
        )

    @staticmethod
    def eq(first: _Stage, second: _Stage) -> bool:
        return _same(first, second)

    @staticmethod
    def can_retain(prop: _Stage, known: _Stage) -> bool:
        return prop.at_time < known.at_time

    @staticmethod
    def must_prune(prop: _Stage, known: _Stage) -> bool:
        return _must_prune(prop, known)


@total_ordering
class DistanceWrapper:
    """Makes a shared route stage orderable by a given distance, e.g. in a heap."""

    __slots__ = ("stage", "distance")

    def __init__(self, stage: Any, distance: type[Distance] = SABR) -> None:
        self.stage = stage
        self.distance = distance

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistanceWrapper):
            return NotImplemented
        return self.distance.eq(self.stage, other.stage)

    def __lt__(self, other: DistanceWrapper) -> bool:
        if not isinstance(other, DistanceWrapper):
            return NotImplemented
        return self.distance.cmp(self.stage, other.stage) < 0

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DistanceWrapper({self.stage!r}, {self.distance.__name__})"