"""Enumerations shared by the scoring models."""

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

from enum import Enum

from kumitescoring.constants import (
    CHUKOKU,
    HANSOKU,
    HANSOKU_CHUI,
    IPPON,
    KEIKOKU,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SCHEDULED,
    WAZA_ARI,
    YUKO,
)


class PointType(Enum):
    """Point-scoring techniques."""

    YUKO = YUKO
    WAZA_ARI = WAZA_ARI
    IPPON = IPPON


class PenaltyType(Enum):
    """Penalty ladder, lightest first."""

    CHUKOKU = CHUKOKU
    KEIKOKU = KEIKOKU
    HANSOKU_CHUI = HANSOKU_CHUI
    HANSOKU = HANSOKU


class MatchStatus(Enum):
    """Lifecycle of a match as seen by the scoring core."""

    SCHEDULED = STATUS_SCHEDULED
    IN_PROGRESS = STATUS_IN_PROGRESS
    COMPLETED = STATUS_COMPLETED

    @classmethod
    def parse(cls, value: str) -> "MatchStatus":
        """Accept both ``"In Progress"`` and ``"InProgress"`` spellings."""
        normalized = value.replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.value.replace(" ", "").lower() == normalized:
                return status
        raise ValueError(f"Unknown match status: {value!r}")


class OutcomeRule(Enum):
    """Rule that decided a match outcome."""

    DISQUALIFICATION = "disqualification"
    POINT_GAP = "point_gap"
    HIGHER_SCORE = "higher_score"
    FIRST_SCORE = "first_score"
