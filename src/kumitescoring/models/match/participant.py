"""Participant and judge data classes."""

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


@dataclass(frozen=True)
class Participant:
    """One contestant (individual player or team) within a match.

    Attributes
    ----------
    participant_id : str
        Opaque identifier used by the score storage.
    name : str or None
        Display name, if known.
    """

    participant_id: str
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.participant_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {"participant_id": self.participant_id, "name": self.name}


@dataclass(frozen=True)
class Judge:
    """An official scoring a match independently of the others.

    Attributes
    ----------
    judge_id : str
        Opaque identifier used by the score storage.
    role : str
        Cosmetic role label (e.g. "Referee", "Judge 1").
    name : str or None
        Display name, if known.
    """

    judge_id: str
    role: str = "Judge"
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.judge_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize judge to dictionary."""
        return {"judge_id": self.judge_id, "role": self.role, "name": self.name}
