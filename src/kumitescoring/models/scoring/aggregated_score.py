"""Aggregated score data class."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from kumitescoring.constants import DEFAULT_POINT_VALUES, IPPON, WAZA_ARI, YUKO


@dataclass(frozen=True)
class AggregatedScore:
    """Totals of one participant summed over every judge of a match.

    Attributes
    ----------
    participant_id : str
        Participant the totals belong to.
    yuko, waza_ari, ippon : int
        Point category totals.
    chukoku, keikoku, hansoku_chui, hansoku : int
        Penalty totals over both categories.
    first_score_time : datetime or None
        Earliest first-score time recorded by any judge.
    point_values : dict
        Value of each point category used to compute :attr:`points`.
    """

    participant_id: str
    yuko: int = 0
    waza_ari: int = 0
    ippon: int = 0
    chukoku: int = 0
    keikoku: int = 0
    hansoku_chui: int = 0
    hansoku: int = 0
    first_score_time: Optional[datetime] = None
    point_values: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_POINT_VALUES), compare=False
    )

    @property
    def points(self) -> int:
        """Technique points: yuko*1 + waza_ari*2 + ippon*3 by default."""
        return (
            self.yuko * self.point_values[YUKO]
            + self.waza_ari * self.point_values[WAZA_ARI]
            + self.ippon * self.point_values[IPPON]
        )

    @property
    def disqualified(self) -> bool:
        return self.hansoku > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize aggregated score to dictionary."""
        return {
            "participant_id": self.participant_id,
            "yuko": self.yuko,
            "waza_ari": self.waza_ari,
            "ippon": self.ippon,
            "chukoku": self.chukoku,
            "keikoku": self.keikoku,
            "hansoku_chui": self.hansoku_chui,
            "hansoku": self.hansoku,
            "points": self.points,
            "disqualified": self.disqualified,
            "first_score_time": (
                self.first_score_time.isoformat() if self.first_score_time else None
            ),
        }
