"""Score entry data class."""

# Kumite Scoring
# Copyright (C) 2025  Kumite Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple

from kumitescoring.constants import PENALTY_CATEGORY_1, PENALTY_CATEGORY_2
from kumitescoring.models.enums import PenaltyType, PointType
from kumitescoring.models.scoring.scoring_action import (
    PenaltyAction,
    PointAction,
    ScoringAction,
)


@dataclass
class PenaltyTally:
    """Penalty counts for one penalty category.

    Attributes
    ----------
    chukoku : int
        Warnings.
    keikoku : int
        Point penalties; each one awards the opponent a point.
    hansoku_chui : int
        Final warnings.
    hansoku : int
        Disqualifications.
    """

    chukoku: int = 0
    keikoku: int = 0
    hansoku_chui: int = 0
    hansoku: int = 0

    def get(self, penalty: PenaltyType) -> int:
        return getattr(self, penalty.value)

    def add(self, penalty: PenaltyType, delta: int) -> None:
        setattr(self, penalty.value, self.get(penalty) + delta)


@dataclass
class ScoreEntry:
    """Point and penalty tallies of one judge for one participant in a match.

    Attributes
    ----------
    match_id : str
        Match the entry belongs to.
    judge_id : str
        Judge who recorded the tallies.
    participant_id : str
        Participant the tallies are for.
    yuko : int
        Yuko count (1 point each).
    waza_ari : int
        Waza-ari count (2 points each).
    ippon : int
        Ippon count (3 points each).
    category_1 : PenaltyTally
        Penalties given in category 1.
    category_2 : PenaltyTally
        Penalties given in category 2.
    first_score_time : datetime or None
        Time of the first point-scoring action. Set once, never overwritten.
    """

    match_id: str
    judge_id: str
    participant_id: str
    yuko: int = 0
    waza_ari: int = 0
    ippon: int = 0
    category_1: PenaltyTally = field(default_factory=PenaltyTally)
    category_2: PenaltyTally = field(default_factory=PenaltyTally)
    first_score_time: Optional[datetime] = None

    @classmethod
    def zero(cls, match_id: str, judge_id: str, participant_id: str) -> "ScoreEntry":
        """Create an empty entry for a (judge, participant) pair."""
        return cls(match_id=match_id, judge_id=judge_id, participant_id=participant_id)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.judge_id, self.participant_id)

    @property
    def has_scored(self) -> bool:
        return self.first_score_time is not None

    def penalties(self, category: int) -> PenaltyTally:
        if category == PENALTY_CATEGORY_1:
            return self.category_1
        if category == PENALTY_CATEGORY_2:
            return self.category_2
        raise ValueError(f"Unknown penalty category: {category}")

    def points_of(self, point: PointType) -> int:
        return getattr(self, point.value)

    def penalty_total(self, penalty: PenaltyType) -> int:
        """Return a penalty count summed over both categories."""
        return self.category_1.get(penalty) + self.category_2.get(penalty)

    def increment(self, action: ScoringAction, delta: int = 1) -> None:
        """Add ``delta`` to the count addressed by ``action``.

        The first-score timestamp is handled by the ledger, not here.
        """
        if isinstance(action, PointAction):
            setattr(self, action.type.value, self.points_of(action.type) + delta)
        elif isinstance(action, PenaltyAction):
            self.penalties(action.category).add(action.type, delta)
        else:
            raise TypeError(f"Unsupported scoring action: {action!r}")

    def copy(self) -> "ScoreEntry":
        """Return an independent copy of the entry."""
        return replace(
            self,
            category_1=replace(self.category_1),
            category_2=replace(self.category_2),
        )
