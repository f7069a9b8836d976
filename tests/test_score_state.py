import numpy as np
import pytest

from scorefilter.score_state import REMOVED, Active, Removed, coerce_score, is_active


def test_coerce_numbers_to_active():
    assert coerce_score(3) == Active(3.0)
    assert coerce_score(2.5) == Active(2.5)
    assert coerce_score(np.float64(1.5)) == Active(1.5)
    assert isinstance(coerce_score(np.int64(4)).score, float)


def test_coerce_removed_sentinel():
    assert coerce_score(REMOVED) is REMOVED
    assert coerce_score(Removed()) is REMOVED
    assert not is_active(coerce_score(REMOVED))


def test_active_passes_through():
    state = Active(7.0)
    assert coerce_score(state) is state
    assert is_active(state)


@pytest.mark.parametrize("bad", [None, "1.0", True, [1.0]])
def test_coerce_rejects_non_numbers(bad):
    with pytest.raises(TypeError) as exc:
        coerce_score(bad, item="widget")
    assert "widget" in str(exc.value)
