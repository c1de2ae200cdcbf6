"""Scoreboard view of a match: what the officials' table displays."""

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

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from kumitescoring.constants import DISQUALIFIED_DISPLAY, SIDE_AKA, SIDE_AO
from kumitescoring.models.match import Match
from kumitescoring.models.scoring import AggregatedScore, MatchOutcome
from kumitescoring.type_hints import Side


@dataclass(frozen=True)
class ScoreboardLine:
    """One side of the scoreboard.

    Attributes
    ----------
    side : str
        ``"AKA"`` or ``"AO"``.
    participant_id : str
        Participant standing on this side.
    name : str
        Display name.
    aggregate : AggregatedScore
        Totals over all judges.
    carry_over : int
        Points gained from the opponent's keikoku penalties.
    final_score : int or None
        Points plus carry-over, None when disqualified.
    is_winner : bool
        Whether the current outcome names this participant.
    """

    side: Side
    participant_id: str
    name: str
    aggregate: AggregatedScore
    carry_over: int
    final_score: Optional[int]
    is_winner: bool

    @property
    def display_total(self) -> Union[int, str]:
        return DISQUALIFIED_DISPLAY if self.final_score is None else self.final_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.side,
            "participant_id": self.participant_id,
            "name": self.name,
            "totals": self.aggregate.to_dict(),
            "carry_over": self.carry_over,
            "final_score": self.final_score,
            "display_total": self.display_total,
            "is_winner": self.is_winner,
        }


@dataclass(frozen=True)
class Scoreboard:
    match_id: str
    match_name: Optional[str]
    status: str
    lines: List[ScoreboardLine]
    outcome: MatchOutcome

    @property
    def aka(self) -> ScoreboardLine:
        return self.lines[0]

    @property
    def ao(self) -> ScoreboardLine:
        return self.lines[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "match_name": self.match_name,
            "status": self.status,
            "lines": [line.to_dict() for line in self.lines],
            "outcome": self.outcome.to_dict(),
        }

    def render(self) -> str:
        """Plain-text rendering used by the console."""
        header = self.match_name or self.match_id
        rows = [f"{header} [{self.status}]"]
        for line in self.lines:
            agg = line.aggregate
            marker = " *WINNER*" if line.is_winner else ""
            rows.append(
                f"  {line.side:<3} {line.name:<20} {str(line.display_total):>3}"
                f"  (Y{agg.yuko} W{agg.waza_ari} I{agg.ippon}"
                f" | C{agg.chukoku} K{agg.keikoku} HC{agg.hansoku_chui} H{agg.hansoku}"
                f" | +{line.carry_over}){marker}"
            )
        if self.outcome.is_undetermined:
            rows.append("  Outcome: undetermined")
        else:
            rows.append(
                f"  Outcome: {self.outcome.winner_id} "
                f"by {self.outcome.decided_by.value.replace('_', ' ')}"
            )
        return "\n".join(rows)


def build_scoreboard(
    match: Match,
    aka_agg: AggregatedScore,
    ao_agg: AggregatedScore,
    outcome: MatchOutcome,
) -> Scoreboard:
    """Build the scoreboard for a match from both aggregates and the outcome.

    A disqualified opponent carries no keikoku over.
    """
    lines = []
    for side, participant, agg, opponent in (
        (SIDE_AKA, match.aka, aka_agg, ao_agg),
        (SIDE_AO, match.ao, ao_agg, aka_agg),
    ):
        carry_over = 0 if opponent.disqualified else opponent.keikoku
        lines.append(
            ScoreboardLine(
                side=side,
                participant_id=participant.participant_id,
                name=participant.display_name,
                aggregate=agg,
                carry_over=carry_over,
                final_score=None if agg.disqualified else agg.points + carry_over,
                is_winner=outcome.winner_id == participant.participant_id,
            )
        )
    return Scoreboard(
        match_id=match.match_id,
        match_name=match.name,
        status=match.status.value,
        lines=lines,
        outcome=outcome,
    )
