from __future__ import annotations
"""
Scored, soft-deleting item collection.

A :class:`ScoredCollection` holds a fixed set of items, each with a float
score. Scores are assigned by caller callbacks, items can be tombstoned
(removed from every view but kept around so :meth:`ScoredCollection.reset`
can bring them back), and the collection can be read back as a best-first
ordering, best/worst item, or threshold slices.

Typical use::

    f = ScoredCollection(candidates)
    f.remove_where(lambda c: c.expired)
    f.score_by(lambda c: c.relevance)
    f.with_best(submit)
"""

from typing import Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

import numpy as np
from loguru import logger

from .config import DEFAULT_SCORE, FilterSnapshot, ScoredEntry
from .functional import (
    Consumer,
    Predicate,
    ScoredConsumer,
    ScoredPredicate,
    Scorer,
    ScorerWithPrevious,
)
from .score_state import REMOVED, Active, Removed, ScoreState, coerce_score, is_active

T = TypeVar("T")


class ScoredCollection(Generic[T]):
    """
    In-memory item -> score map with tombstones and a cached best-first view.

    Items must be hashable and keep a stable hash for the collection's
    lifetime. Not thread-safe; serialize access externally if needed.
    """

    def __init__(self, items: Iterable[T]):
        # duplicate-equal items collapse; last write wins
        self._states: Dict[T, ScoreState] = {item: Active(DEFAULT_SCORE) for item in items}
        self._ordered: Optional[Tuple[T, ...]] = None
        logger.debug("ScoredCollection created with {} items", len(self._states))

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, item: object) -> bool:
        return is_active(self._state_of(item))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(active={self.count()}, removed={len(self._states) - self.count()})"

    def _invalidate(self) -> None:
        self._ordered = None

    def _state_of(self, item: object) -> Optional[ScoreState]:
        # unhashable values can never be members
        try:
            return self._states.get(item)  # type: ignore[arg-type]
        except TypeError:
            return None

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_by(self, fn: Scorer[T]) -> None:
        """Replace every active item's score with ``fn(item)``."""
        self.score_by_previous(lambda item, _score: fn(item))

    def score_by_previous(self, fn: ScorerWithPrevious[T]) -> None:
        """
        Replace every active item's score with ``fn(item, previous_score)``.

        ``fn`` may return ``REMOVED`` to tombstone the item. Removed items are
        never passed to ``fn``. New scores are computed for all items before
        any is stored, so an exception from ``fn`` leaves the collection
        untouched.
        """
        updates: Dict[T, ScoreState] = {}
        for item, score in self.active_entries():
            updates[item] = coerce_score(fn(item, score), item)

        self._states.update(updates)
        self._invalidate()

        n_removed = sum(1 for s in updates.values() if isinstance(s, Removed))
        logger.debug("Scored {} items ({} removed)", len(updates), n_removed)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_where(self, fn: Predicate[T]) -> None:
        """Remove every active item for which ``fn(item)`` is true."""
        self.remove_where_scored(lambda item, _score: fn(item))

    def remove_where_scored(self, fn: ScoredPredicate[T]) -> None:
        """Remove every active item for which ``fn(item, score)`` is true."""
        self.score_by_previous(lambda item, score: REMOVED if fn(item, score) else score)

    def remove(self, item: T) -> None:
        """Remove a single item. Unknown (or unhashable) items are ignored."""
        if self._state_of(item) is None:
            logger.debug("Ignoring removal of unknown item {!r}", item)
            return
        self._states[item] = REMOVED
        self._invalidate()

    def keep_only(self, fn: Predicate[T]) -> None:
        """Remove every active item for which ``fn(item)`` is false."""
        self.remove_where(lambda item: not fn(item))

    def keep_only_scored(self, fn: ScoredPredicate[T]) -> None:
        self.remove_where_scored(lambda item, score: not fn(item, score))

    def reset(self) -> None:
        """Set every score back to the default, bringing removed items back."""
        for item in self._states:
            self._states[item] = Active(DEFAULT_SCORE)
        self._invalidate()
        logger.debug("Reset {} items to score {}", len(self._states), DEFAULT_SCORE)

    # ------------------------------------------------------------------
    # Cardinality / lookup
    # ------------------------------------------------------------------

    def count(self) -> int:
        """Number of items that have not been removed."""
        return sum(1 for state in self._states.values() if is_active(state))

    def is_empty(self) -> bool:
        return self.count() == 0

    def score_of(self, item: T) -> Optional[float]:
        """Current score of an active item; None if removed or unknown."""
        state = self._state_of(item)
        return state.score if isinstance(state, Active) else None

    def is_removed(self, item: T) -> bool:
        return isinstance(self._state_of(item), Removed)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def active_entries(self) -> Iterator[Tuple[T, float]]:
        """Yield ``(item, score)`` for every active item, in insertion order."""
        for item, state in self._states.items():
            if is_active(state):
                yield item, state.score

    def active(self) -> Iterator[T]:
        for item, _score in self.active_entries():
            yield item

    def removed_items(self) -> Iterator[T]:
        for item, state in self._states.items():
            if isinstance(state, Removed):
                yield item

    def for_each_active(self, consumer: Consumer[T]) -> None:
        for item in self.active():
            consumer(item)

    def for_each_active_scored(self, consumer: ScoredConsumer[T]) -> None:
        for item, score in self.active_entries():
            consumer(item, score)

    def for_each_removed(self, consumer: Consumer[T]) -> None:
        for item in self.removed_items():
            consumer(item)

    def remaining(self) -> List[T]:
        """All active items, in insertion order (not sorted)."""
        return list(self.active())

    def removed(self) -> List[T]:
        """All removed items, in insertion order."""
        return list(self.removed_items())

    # ------------------------------------------------------------------
    # Ordered view / extremes
    # ------------------------------------------------------------------

    def ordered(self) -> List[T]:
        """
        Active items sorted by score, highest first.

        The sort is stable, so equal scores keep insertion order. The result
        is cached until the next mutation; each call returns a fresh list.
        """
        if self._ordered is None:
            entries = list(self.active_entries())
            entries.sort(key=lambda kv: -kv[1])
            self._ordered = tuple(item for item, _ in entries)
            logger.debug("Rebuilt ordered view ({} items)", len(self._ordered))
        return list(self._ordered)

    def best(self) -> Optional[T]:
        """Item with the highest score, or None if nothing is active."""
        ordered = self.ordered()
        return ordered[0] if ordered else None

    def worst(self) -> Optional[T]:
        """Item with the lowest score, or None if nothing is active."""
        ordered = self.ordered()
        return ordered[-1] if ordered else None

    def with_best(self, consumer: Consumer[T]) -> None:
        ordered = self.ordered()
        if ordered:
            consumer(ordered[0])

    def with_worst(self, consumer: Consumer[T]) -> None:
        ordered = self.ordered()
        if ordered:
            consumer(ordered[-1])

    # ------------------------------------------------------------------
    # Threshold queries
    # ------------------------------------------------------------------

    def _active_arrays(self) -> Tuple[List[T], np.ndarray]:
        items: List[T] = []
        scores: List[float] = []
        for item, score in self.active_entries():
            items.append(item)
            scores.append(score)
        return items, np.asarray(scores, dtype=np.float64)

    def _select(self, mask: np.ndarray, items: List[T], scores: np.ndarray) -> List[Tuple[T, float]]:
        return [(items[i], float(scores[i])) for i in np.flatnonzero(mask)]

    def _above(self, threshold: float) -> List[Tuple[T, float]]:
        items, scores = self._active_arrays()
        return self._select(scores > threshold, items, scores)

    def _below(self, threshold: float) -> List[Tuple[T, float]]:
        items, scores = self._active_arrays()
        return self._select(scores < threshold, items, scores)

    def above_threshold(self, threshold: float) -> List[T]:
        """Active items with a score strictly greater than ``threshold``."""
        return [item for item, _ in self._above(threshold)]

    def below_threshold(self, threshold: float) -> List[T]:
        """Active items with a score strictly less than ``threshold``."""
        return [item for item, _ in self._below(threshold)]

    def for_each_above_threshold(self, threshold: float, consumer: Consumer[T]) -> None:
        for item, _ in self._above(threshold):
            consumer(item)

    def for_each_above_threshold_scored(self, threshold: float, consumer: ScoredConsumer[T]) -> None:
        for item, score in self._above(threshold):
            consumer(item, score)

    def for_each_below_threshold(self, threshold: float, consumer: Consumer[T]) -> None:
        for item, _ in self._below(threshold):
            consumer(item)

    def for_each_below_threshold_scored(self, threshold: float, consumer: ScoredConsumer[T]) -> None:
        for item, score in self._below(threshold):
            consumer(item, score)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def snapshot(self) -> FilterSnapshot:
        """Pydantic snapshot: active entries best-first, plus removed items."""
        active = [ScoredEntry(item=item, score=self._states[item].score) for item in self.ordered()]  # type: ignore[union-attr]
        return FilterSnapshot(count=len(active), active=active, removed=self.removed())


# Short alias
Filter = ScoredCollection
