import pytest
from pydantic import ValidationError

from scorefilter import config
from scorefilter.config import FilterSnapshot, ScoredEntry


def test_default_score_is_zero():
    assert config.DEFAULT_SCORE == 0.0


def test_snapshot_structure():
    snap = FilterSnapshot(
        count=1,
        active=[ScoredEntry(item="a", score=2.0)],
        removed=["b"],
    )
    assert snap.best_item() == "a"
    assert snap.active[0].score == 2.0


def test_empty_snapshot_has_no_best():
    snap = FilterSnapshot(count=0, active=[], removed=[])
    assert snap.best_item() is None


def test_snapshot_count_must_be_non_negative():
    with pytest.raises(ValidationError):
        FilterSnapshot(count=-1, active=[], removed=[])
