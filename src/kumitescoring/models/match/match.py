"""Match data class."""

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
from typing import Any, Dict, List, Optional

from kumitescoring.constants import SIDE_AKA, SIDE_AO
from kumitescoring.exceptions import InvalidMatchException, ParticipantNotFoundException
from kumitescoring.models.enums import MatchStatus
from kumitescoring.models.match.participant import Judge, Participant


@dataclass
class Match:
    """A Kumite contest between exactly two participants.

    Attributes
    ----------
    match_id : str
        Opaque match identifier.
    participants : list of Participant
        Exactly two entries. The first is AKA (red), the second AO (blue).
    judges : list of Judge
        Officials assigned to the match, each scoring independently.
    status : MatchStatus
        Current lifecycle status.
    winner_id : str or None
        Participant id of the winner once the match is finalized.
    completed_at : datetime or None
        Time the match was finalized.
    name : str or None
        Display name such as "Final" or "Pool A - Bout 3".
    """

    match_id: str
    participants: List[Participant]
    judges: List[Judge] = field(default_factory=list)
    status: MatchStatus = MatchStatus.SCHEDULED
    winner_id: Optional[str] = None
    completed_at: Optional[datetime] = None
    name: Optional[str] = None

    def __post_init__(self):
        if len(self.participants) != 2:
            raise InvalidMatchException(
                f"Match {self.match_id} must have exactly two participants, "
                f"got {len(self.participants)}"
            )

    @property
    def aka(self) -> Participant:
        return self.participants[0]

    @property
    def ao(self) -> Participant:
        return self.participants[1]

    @property
    def participant_ids(self) -> List[str]:
        return [p.participant_id for p in self.participants]

    @property
    def judge_ids(self) -> List[str]:
        return [j.judge_id for j in self.judges]

    @property
    def is_completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    def has_participant(self, participant_id: str) -> bool:
        return participant_id in self.participant_ids

    def has_judge(self, judge_id: str) -> bool:
        return judge_id in self.judge_ids

    def opponent_of(self, participant_id: str) -> Participant:
        """Return the other participant of the match.

        Raises:
            ParticipantNotFoundException: If ``participant_id`` is not in the match
        """
        if participant_id == self.aka.participant_id:
            return self.ao
        if participant_id == self.ao.participant_id:
            return self.aka
        raise ParticipantNotFoundException(
            f"Participant {participant_id} is not part of match {self.match_id}"
        )

    def side_of(self, participant_id: str) -> str:
        """Return ``"AKA"`` or ``"AO"`` for a participant id."""
        if participant_id == self.aka.participant_id:
            return SIDE_AKA
        if participant_id == self.ao.participant_id:
            return SIDE_AO
        raise ParticipantNotFoundException(
            f"Participant {participant_id} is not part of match {self.match_id}"
        )

    def participant_for_side(self, side: str) -> Participant:
        """Return the participant standing on ``side`` (case-insensitive)."""
        side = side.upper()
        if side == SIDE_AKA:
            return self.aka
        if side == SIDE_AO:
            return self.ao
        raise ParticipantNotFoundException(f"Unknown side: {side}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_id": self.match_id,
            "name": self.name,
            "participants": [p.to_dict() for p in self.participants],
            "judges": [j.to_dict() for j in self.judges],
            "status": self.status.value,
            "winner_id": self.winner_id,
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
        }
