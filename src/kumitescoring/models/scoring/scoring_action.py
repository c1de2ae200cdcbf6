"""Scoring actions a judge can record.

Actions are a tagged variant: either a point action or a penalty action in
one of the two penalty categories. Free-form text coming from a console or a
UI is parsed into an action once, at the boundary, by :func:`parse_action`.
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

import re
from dataclasses import dataclass
from typing import Union

from kumitescoring.constants import PENALTY_CATEGORIES
from kumitescoring.exceptions import InvalidScoringActionException
from kumitescoring.models.enums import PenaltyType, PointType
from kumitescoring.type_hints import Category


@dataclass(frozen=True)
class PointAction:
    """Award one of the point-scoring techniques."""

    type: PointType

    kind = "point"

    @property
    def label(self) -> str:
        return self.type.value

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PenaltyAction:
    """Give a penalty in category 1 or 2."""

    category: Category
    type: PenaltyType

    kind = "penalty"

    def __post_init__(self):
        if self.category not in PENALTY_CATEGORIES:
            raise InvalidScoringActionException(
                f"Penalty category must be one of {PENALTY_CATEGORIES}, "
                f"got {self.category}"
            )

    @property
    def label(self) -> str:
        return f"penalty:{self.category}:{self.type.value}"

    def __str__(self) -> str:
        return self.label


ScoringAction = Union[PointAction, PenaltyAction]


def _normalize(token: str) -> str:
    """Lower-case and turn camelCase / dashes into snake_case."""
    token = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", token.strip())
    return token.replace("-", "_").lower()


_POINT_ALIASES = {
    "yuko": PointType.YUKO,
    "waza_ari": PointType.WAZA_ARI,
    "wazaari": PointType.WAZA_ARI,
    "ippon": PointType.IPPON,
}

_PENALTY_ALIASES = {
    "chukoku": PenaltyType.CHUKOKU,
    "keikoku": PenaltyType.KEIKOKU,
    "hansoku_chui": PenaltyType.HANSOKU_CHUI,
    "hansokuchui": PenaltyType.HANSOKU_CHUI,
    "hansoku": PenaltyType.HANSOKU,
}

# penalty:1:keikoku  or  penalty_1_hansoku_chui
_PENALTY_PATTERN = re.compile(r"^penalty[:_]([0-9]+)[:_](.+)$")


def parse_action(text: str) -> ScoringAction:
    """Parse action text into a :data:`ScoringAction`.

    Accepted forms are ``yuko``, ``wazaAri``/``waza_ari``, ``ippon``,
    ``penalty:<category>:<type>`` and ``penalty_<category>_<type>``.

    Args:
        text: Action text as typed by an operator or sent by a client

    Returns:
        The parsed action

    Raises:
        InvalidScoringActionException: If the text is not a known action

    Examples:
        >>> parse_action("wazaAri")
        PointAction(type=<PointType.WAZA_ARI: 'waza_ari'>)
        >>> parse_action("penalty:2:hansokuChui").label
        'penalty:2:hansoku_chui'
    """
    if not text or not text.strip():
        raise InvalidScoringActionException("Empty scoring action")

    normalized = _normalize(text)
    if normalized in _POINT_ALIASES:
        return PointAction(_POINT_ALIASES[normalized])

    match = _PENALTY_PATTERN.match(normalized)
    if match:
        penalty = _PENALTY_ALIASES.get(match.group(2))
        if penalty is None:
            raise InvalidScoringActionException(f"Unknown penalty type in {text!r}")
        return PenaltyAction(category=int(match.group(1)), type=penalty)

    raise InvalidScoringActionException(f"Unknown scoring action: {text!r}")
