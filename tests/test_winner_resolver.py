from datetime import datetime, timedelta, timezone

import pytest

from kumitescoring.models.enums import OutcomeRule
from kumitescoring.models.scoring import AggregatedScore, MatchOutcome, ScoringConfig
from kumitescoring.scoring import WinnerResolver, final_scores, resolve

T0 = datetime(2025, 5, 1, 10, 0, tzinfo=timezone.utc)


def _agg(participant_id, **kwargs):
    return AggregatedScore(participant_id=participant_id, **kwargs)


def test_higher_score_wins():
    outcome = resolve(_agg("a", ippon=1, waza_ari=1), _agg("b", waza_ari=1))

    assert outcome == MatchOutcome.won("a", OutcomeRule.HIGHER_SCORE)


def test_resolution_is_deterministic():
    a = _agg("a", yuko=3, first_score_time=T0)
    b = _agg("b", waza_ari=1, yuko=1, first_score_time=T0 + timedelta(seconds=1))

    assert len({resolve(a, b) for _ in range(20)}) == 1


def test_disqualification_overrides_points():
    outcome = resolve(_agg("a", ippon=5, hansoku=1), _agg("b", yuko=1))

    assert outcome.winner_id == "b"
    assert outcome.decided_by is OutcomeRule.DISQUALIFICATION


def test_both_disqualified_is_undetermined():
    outcome = resolve(_agg("a", hansoku=1, ippon=2), _agg("b", hansoku=2))

    assert outcome.is_undetermined
    assert outcome.to_dict() == {"undetermined": True}


def test_point_gap_wins_outright():
    outcome = resolve(_agg("a", yuko=1), _agg("b", ippon=2, waza_ari=2))

    assert outcome.winner_id == "b"
    assert outcome.decided_by is OutcomeRule.POINT_GAP


def test_point_gap_is_configurable():
    resolver = WinnerResolver(ScoringConfig(point_gap=3))

    outcome = resolver.resolve(_agg("a", ippon=1), _agg("b"))

    assert outcome == MatchOutcome.won("a", OutcomeRule.POINT_GAP)


def test_keikoku_carries_over_to_the_opponent():
    # 3 + 1 carried over against 0
    a = _agg("a", ippon=1)
    b = _agg("b", keikoku=1)

    assert final_scores(a, b) == (4, 0)
    assert resolve(a, b) == MatchOutcome.won("a", OutcomeRule.HIGHER_SCORE)


def test_keikoku_carry_over_can_decide_a_tie():
    a = _agg("a", waza_ari=1, keikoku=1, first_score_time=T0)
    b = _agg("b", waza_ari=1, first_score_time=T0 + timedelta(seconds=1))

    assert final_scores(a, b) == (2, 3)
    assert resolve(a, b).winner_id == "b"


def test_tie_goes_to_first_scorer():
    a = _agg("a", waza_ari=2, yuko=1, first_score_time=T0 + timedelta(seconds=40))
    b = _agg("b", ippon=1, waza_ari=1, first_score_time=T0 + timedelta(seconds=12))

    outcome = resolve(a, b)

    assert outcome == MatchOutcome.won("b", OutcomeRule.FIRST_SCORE)


def test_tie_with_identical_first_score_times_goes_to_the_second_participant():
    a = _agg("aka", ippon=1, first_score_time=T0)
    b = _agg("ao", ippon=1, first_score_time=T0)

    assert resolve(a, b) == MatchOutcome.won("ao", OutcomeRule.FIRST_SCORE)


def test_tie_where_only_one_side_scored_goes_to_that_side():
    # Carry-over gives "b" a point without a scoring action
    a = _agg("a", yuko=1, keikoku=1, first_score_time=T0)
    b = _agg("b")

    assert final_scores(a, b) == (1, 1)
    assert resolve(a, b) == MatchOutcome.won("a", OutcomeRule.FIRST_SCORE)


def test_nobody_scored_is_undetermined():
    assert resolve(_agg("a"), _agg("b")).is_undetermined


@pytest.mark.parametrize("hansoku_side", ["a", "b"])
def test_disqualification_applies_to_either_side(hansoku_side):
    a = _agg("a", hansoku=1 if hansoku_side == "a" else 0)
    b = _agg("b", hansoku=1 if hansoku_side == "b" else 0)

    outcome = resolve(a, b)

    assert outcome.winner_id == ("b" if hansoku_side == "a" else "a")
