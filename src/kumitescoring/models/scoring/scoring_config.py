"""ScoringConfig data class."""

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
from typing import Any, Dict

from kumitescoring.constants import DEFAULT_POINT_GAP, DEFAULT_POINT_VALUES, POINT_TYPES
from kumitescoring.exceptions import InvalidConfigurationException


@dataclass
class ScoringConfig:
    """Competition rule settings used by aggregation and resolution.

    Attributes
    ----------
    point_gap : int
        Lead that wins a match outright (Senshu-style rule).
    point_values : dict of str to int
        Value of each point category, keyed by ``yuko``, ``waza_ari``, ``ippon``.
    """

    point_gap: int = DEFAULT_POINT_GAP
    point_values: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_POINT_VALUES)
    )

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check the settings.

        Raises:
            InvalidConfigurationException: If a value is out of range
        """
        if not isinstance(self.point_gap, int) or self.point_gap < 1:
            raise InvalidConfigurationException(
                f"point_gap must be a positive integer, got {self.point_gap!r}"
            )
        missing = [p for p in POINT_TYPES if p not in self.point_values]
        if missing:
            raise InvalidConfigurationException(
                f"point_values is missing {', '.join(missing)}"
            )
        unknown = [p for p in self.point_values if p not in POINT_TYPES]
        if unknown:
            raise InvalidConfigurationException(
                f"point_values has unknown categories {', '.join(unknown)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {"point_gap": self.point_gap, "point_values": dict(self.point_values)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            point_gap=data.get("point_gap", DEFAULT_POINT_GAP),
            point_values=dict(data.get("point_values", DEFAULT_POINT_VALUES)),
        )
