from kumitescoring.models.scoring.aggregated_score import AggregatedScore
from kumitescoring.models.scoring.match_outcome import MatchOutcome
from kumitescoring.models.scoring.score_entry import PenaltyTally, ScoreEntry
from kumitescoring.models.scoring.scoring_action import (
    PenaltyAction,
    PointAction,
    ScoringAction,
    parse_action,
)
from kumitescoring.models.scoring.scoring_config import ScoringConfig

__all__ = [
    "AggregatedScore",
    "MatchOutcome",
    "PenaltyTally",
    "ScoreEntry",
    "PenaltyAction",
    "PointAction",
    "ScoringAction",
    "parse_action",
    "ScoringConfig",
]
