"""Match outcome data class."""

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
from typing import Any, Dict, Optional

from kumitescoring.models.enums import OutcomeRule


@dataclass(frozen=True)
class MatchOutcome:
    """Result of resolving a match.

    Attributes
    ----------
    winner_id : str or None
        Winning participant, or None while the outcome is undetermined.
    decided_by : OutcomeRule or None
        The rule that decided the winner.
    """

    winner_id: Optional[str] = None
    decided_by: Optional[OutcomeRule] = None

    @classmethod
    def undetermined(cls) -> "MatchOutcome":
        return cls()

    @classmethod
    def won(cls, winner_id: str, rule: OutcomeRule) -> "MatchOutcome":
        return cls(winner_id=winner_id, decided_by=rule)

    @property
    def is_undetermined(self) -> bool:
        return self.winner_id is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize outcome to dictionary."""
        if self.is_undetermined:
            return {"undetermined": True}
        return {"winner_id": self.winner_id, "decided_by": self.decided_by.value}
