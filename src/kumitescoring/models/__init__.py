from kumitescoring.models.enums import MatchStatus, OutcomeRule, PenaltyType, PointType
from kumitescoring.models.match import Judge, Match, Participant
from kumitescoring.models.scoring import (
    AggregatedScore,
    MatchOutcome,
    PenaltyAction,
    PenaltyTally,
    PointAction,
    ScoreEntry,
    ScoringAction,
    ScoringConfig,
    parse_action,
)

__all__ = [
    "MatchStatus",
    "OutcomeRule",
    "PenaltyType",
    "PointType",
    "Judge",
    "Match",
    "Participant",
    "AggregatedScore",
    "MatchOutcome",
    "PenaltyAction",
    "PenaltyTally",
    "PointAction",
    "ScoreEntry",
    "ScoringAction",
    "ScoringConfig",
    "parse_action",
]
