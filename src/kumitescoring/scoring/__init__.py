"""Kumite live-scoring engine.

This package records judges' scores, aggregates them per participant and
decides the winner of a match.
"""

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

from kumitescoring.scoring.aggregation import aggregate, aggregate_match
from kumitescoring.scoring.ledger import ScoreLedger
from kumitescoring.scoring.scoreboard import Scoreboard, ScoreboardLine, build_scoreboard
from kumitescoring.scoring.session import ScoringSession
from kumitescoring.scoring.winner_resolver import WinnerResolver, final_scores, resolve

__all__ = [
    "aggregate",
    "aggregate_match",
    "ScoreLedger",
    "Scoreboard",
    "ScoreboardLine",
    "build_scoreboard",
    "ScoringSession",
    "WinnerResolver",
    "final_scores",
    "resolve",
]
