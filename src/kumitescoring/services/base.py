"""Collaborator interfaces used by the scoring core.

The scoring core never talks to a transport directly. It depends on these
protocols, and callers inject an implementation: in-memory for tests and
offline use, HTTP for the tournament backend.
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

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Protocol, runtime_checkable

from kumitescoring.type_hints import Record


@runtime_checkable
class ScoreStorage(Protocol):
    """Persistent store of per-judge score records."""

    def get_match_scores(self, match_id: str) -> List[Record]:
        """Return every stored score record of a match."""
        ...

    def submit_score(self, payload: Record) -> Record:
        """Create or replace the record keyed by (match, judge, participant)."""
        ...


@runtime_checkable
class MatchService(Protocol):
    """Owner of match records."""

    def get_match(self, match_id: str) -> Record:
        ...

    def update_match(self, match_id: str, data: Record) -> Record:
        ...


@dataclass(frozen=True)
class PushEvent:
    """Notification that something changed on the backend.

    Attributes
    ----------
    kind : str
        ``"score-updated"`` or ``"match-status-changed"``.
    match_id : str
        Match the event is about.
    payload : dict
        Event body as sent by the backend.
    """

    kind: str
    match_id: str
    payload: Dict[str, Any] = field(default_factory=dict)


PushCallback = Callable[[PushEvent], None]


class Subscription(Protocol):
    def cancel(self) -> None:
        ...


@runtime_checkable
class PushChannel(Protocol):
    """Connection delivering live updates for matches."""

    @property
    def connected(self) -> bool:
        ...

    def connect(self) -> None:
        ...

    def disconnect(self) -> None:
        ...

    def subscribe(self, match_id: str, callback: PushCallback) -> Subscription:
        ...
