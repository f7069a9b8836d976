"""Callback shapes accepted by :class:`scorefilter.filter.ScoredCollection`."""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar, Union

from .score_state import Removed

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

# (item) -> score
Scorer = Callable[[T], float]

# (item, previous score) -> new score, or REMOVED to tombstone the item
ScorerWithPrevious = Callable[[T, float], Union[float, Removed]]

# (item) -> bool / (item, score) -> bool
Predicate = Callable[[T], bool]
ScoredPredicate = Callable[[T, float], bool]

# (item) -> None / (item, score) -> None
Consumer = Callable[[T], None]
ScoredConsumer = Callable[[T, float], None]


class ScoringFunction(Protocol[T_contra]):
    """Object-style scorer: anything with a ``score(item, score)`` method."""

    def score(self, item: T_contra, score: float) -> float:
        ...


def as_scorer(fn: ScoringFunction[T]) -> ScorerWithPrevious[T]:
    """Adapt a ScoringFunction object to the plain callable form."""
    return fn.score
