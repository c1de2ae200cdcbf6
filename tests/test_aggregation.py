import itertools
from datetime import datetime, timedelta, timezone

from kumitescoring.models.match import Judge, Match, Participant
from kumitescoring.models.scoring import PenaltyTally, ScoreEntry
from kumitescoring.scoring import aggregate, aggregate_match

T0 = datetime(2025, 5, 1, 10, 0, tzinfo=timezone.utc)


def _entry(judge_id, participant_id, **counts):
    return ScoreEntry(
        match_id="m1",
        judge_id=judge_id,
        participant_id=participant_id,
        yuko=counts.get("yuko", 0),
        waza_ari=counts.get("waza_ari", 0),
        ippon=counts.get("ippon", 0),
        category_1=counts.get("category_1", PenaltyTally()),
        category_2=counts.get("category_2", PenaltyTally()),
        first_score_time=counts.get("first_score_time"),
    )


def test_points_are_summed_over_judges():
    entries = [
        _entry("j1", "p1", ippon=1, first_score_time=T0),
        _entry("j2", "p1", waza_ari=1, first_score_time=T0 + timedelta(seconds=3)),
        _entry("j1", "p2", yuko=4),
    ]

    agg = aggregate(entries, "p1")

    assert (agg.yuko, agg.waza_ari, agg.ippon) == (0, 1, 1)
    assert agg.points == 5


def test_aggregation_does_not_depend_on_entry_order():
    entries = [
        _entry("j1", "p1", yuko=2, first_score_time=T0 + timedelta(seconds=9)),
        _entry("j2", "p1", ippon=1, first_score_time=T0 + timedelta(seconds=2)),
        _entry(
            "j3", "p1", category_2=PenaltyTally(keikoku=1), first_score_time=None
        ),
    ]

    results = {aggregate(list(order), "p1") for order in itertools.permutations(entries)}

    assert len(results) == 1


def test_penalties_are_summed_over_both_categories():
    entries = [
        _entry("j1", "p1", category_1=PenaltyTally(chukoku=1, keikoku=1)),
        _entry("j2", "p1", category_2=PenaltyTally(keikoku=2, hansoku_chui=1)),
    ]

    agg = aggregate(entries, "p1")

    assert agg.chukoku == 1
    assert agg.keikoku == 3
    assert agg.hansoku_chui == 1
    assert not agg.disqualified


def test_first_score_time_is_earliest_over_judges():
    later, earlier = T0 + timedelta(seconds=30), T0 + timedelta(seconds=5)
    entries = [
        _entry("j1", "p1", yuko=1, first_score_time=later),
        _entry("j2", "p1", yuko=1, first_score_time=earlier),
        _entry("j3", "p1"),
    ]

    assert aggregate(entries, "p1").first_score_time == earlier


def test_any_hansoku_disqualifies():
    entries = [_entry("j2", "p1", category_2=PenaltyTally(hansoku=1))]

    assert aggregate(entries, "p1").disqualified


def test_participant_without_entries_aggregates_to_zero():
    agg = aggregate({}, "p1")

    assert agg.points == 0
    assert agg.first_score_time is None
    assert not agg.disqualified


def test_custom_point_values_are_applied():
    entries = [_entry("j1", "p1", yuko=1, waza_ari=1, ippon=1)]

    agg = aggregate(entries, "p1", {"yuko": 1, "waza_ari": 1, "ippon": 1})

    assert agg.points == 3


def test_aggregate_match_returns_aka_then_ao():
    match = Match(
        "m1",
        [Participant("red"), Participant("blue")],
        [Judge("j1")],
    )
    snapshot = {
        ("j1", "red"): _entry("j1", "red", ippon=1),
        ("j1", "blue"): _entry("j1", "blue", yuko=1),
    }

    aka, ao = aggregate_match(snapshot, match)

    assert (aka.participant_id, aka.points) == ("red", 3)
    assert (ao.participant_id, ao.points) == ("blue", 1)
