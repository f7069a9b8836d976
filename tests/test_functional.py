from scorefilter.filter import ScoredCollection
from scorefilter.functional import as_scorer


class LengthBonus:
    """Object-style scorer: previous score plus the item's length."""

    def score(self, item, score):
        return score + len(item)


def test_scoring_function_object_adapts_to_callable():
    f = ScoredCollection(["a", "abc", "ab"])
    f.score_by_previous(as_scorer(LengthBonus()))
    assert f.ordered() == ["abc", "ab", "a"]

    f.score_by_previous(as_scorer(LengthBonus()))
    assert f.score_of("abc") == 6.0
