import pytest

from monosyllabize.core.parameters import ScoringParameters
from monosyllabize.core.scorer import SyllableScorer


@pytest.fixture
def scorer():
    return SyllableScorer()


def test_identical_syllable_scores_perfect(scorer):
    candidate = ("k", "æ", "t")

    assert scorer.score(candidate, candidate) == pytest.approx(30.0)
    assert scorer.perfect_score(candidate) == pytest.approx(30.0)


def test_missing_phonemes_are_penalised(scorer):
    assert scorer.score(("z", "u"), ("b", "ɑ", "b", "ɑ")) == pytest.approx(-8.0)


def test_similar_phonemes_get_partial_credit(scorer):
    credits = scorer.breakdown(("p",), ("b", "æ"))

    assert [item.kind for item in credits] == ["similar"]
    assert credits[0].credit == pytest.approx(4.0)
    assert credits[0].target_index == 0


def test_order_penalty_uses_relative_positions(scorer):
    # each phoneme sits at the opposite end of the target
    assert scorer.score(("t", "k"), ("k", "t")) == pytest.approx(14.0)


def test_credit_uses_the_nearest_match(scorer):
    credits = scorer.breakdown(("b", "ɑ", "z"), ("b", "ɑ", "b", "ɑ"))

    assert [item.kind for item in credits] == ["exact", "exact", "missing"]
    assert credits[1].target_index == 1
    assert sum(item.credit for item in credits) == pytest.approx(15.5)


def test_custom_parameters():
    scorer = SyllableScorer(ScoringParameters(perfect_match=1.0, order_penalty=0.0))

    assert scorer.score(("t", "k"), ("k", "t")) == pytest.approx(2.0)


def test_choice_cutoff_tightens_with_progress():
    params = ScoringParameters()

    assert params.choice_cutoff(0.0) == 8.0
    assert params.choice_cutoff(0.25) == 7.0
    assert params.choice_cutoff(0.9) == 6.0
