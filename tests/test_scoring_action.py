import pytest

from kumitescoring.exceptions import InvalidScoringActionException
from kumitescoring.models.enums import PenaltyType, PointType
from kumitescoring.models.scoring import (
    PenaltyAction,
    PointAction,
    ScoreEntry,
    parse_action,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("yuko", PointType.YUKO),
        ("wazaAri", PointType.WAZA_ARI),
        ("waza_ari", PointType.WAZA_ARI),
        ("IPPON", PointType.IPPON),
    ],
)
def test_point_actions_are_parsed(text, expected):
    action = parse_action(text)

    assert isinstance(action, PointAction)
    assert action.type is expected
    assert action.kind == "point"


def test_penalty_actions_accept_both_separators():
    colon = parse_action("penalty:1:keikoku")
    underscore = parse_action("penalty_1_keikoku")

    assert colon == underscore == PenaltyAction(1, PenaltyType.KEIKOKU)
    assert colon.label == "penalty:1:keikoku"


def test_penalty_camel_case_type_is_normalized():
    action = parse_action("penalty:2:hansokuChui")

    assert action.category == 2
    assert action.type is PenaltyType.HANSOKU_CHUI
    assert str(action) == "penalty:2:hansoku_chui"


@pytest.mark.parametrize(
    "text",
    ["", "   ", "jogai", "penalty:3:keikoku", "penalty:1:shikkaku", "penalty:1"],
)
def test_unknown_actions_are_rejected(text):
    with pytest.raises(InvalidScoringActionException):
        parse_action(text)


def test_penalty_category_is_validated_on_construction():
    with pytest.raises(InvalidScoringActionException):
        PenaltyAction(0, PenaltyType.CHUKOKU)


def test_increment_addresses_only_the_named_count():
    entry = ScoreEntry.zero("m1", "j1", "p1")

    entry.increment(parse_action("wazaAri"))
    entry.increment(parse_action("penalty:2:chukoku"), 2)

    assert entry.waza_ari == 1
    assert entry.yuko == 0 and entry.ippon == 0
    assert entry.category_2.chukoku == 2
    assert entry.category_1.chukoku == 0
    assert entry.penalty_total(PenaltyType.CHUKOKU) == 2


def test_copy_does_not_share_penalty_tallies():
    entry = ScoreEntry.zero("m1", "j1", "p1")
    clone = entry.copy()

    clone.increment(parse_action("penalty:1:keikoku"))

    assert entry.category_1.keikoku == 0
    assert clone.category_1.keikoku == 1
