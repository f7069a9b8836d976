"""Per-item score state: either active with a score, or removed."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Union


@dataclass(frozen=True)
class Active:
    """Item still in play, carrying its current score."""

    score: float


@dataclass(frozen=True)
class Removed:
    """Tombstone: item is kept in the collection but excluded from queries."""


REMOVED = Removed()

ScoreState = Union[Active, Removed]


def coerce_score(value: Any, item: Any = None) -> ScoreState:
    """
    Turn whatever a scoring callback returned into a ScoreState.

    ``REMOVED`` (or any Removed instance) tombstones the item, a real number
    becomes ``Active(float(value))``. Anything else is rejected; bools are
    rejected too since they are almost always a predicate passed by mistake.
    """
    if isinstance(value, Removed):
        return REMOVED
    if isinstance(value, Active):
        return value
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(
            f"Scoring function returned {type(value).__name__} ({value!r}) for item {item!r}; "
            "expected a number or REMOVED"
        )
    return Active(float(value))


def is_active(state: ScoreState) -> bool:
    return isinstance(state, Active)
