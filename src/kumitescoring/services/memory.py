"""In-memory score storage and match service.

Used for offline scoring from the console and throughout the test suite.
Both stores can publish to a :class:`LocalPushChannel` the same way the
tournament backend notifies connected clients.
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

import copy
import itertools
import threading
from typing import Dict, List, Optional, Tuple

from kumitescoring.constants import EVENT_MATCH_STATUS_CHANGED, EVENT_SCORE_UPDATED
from kumitescoring.exceptions import APIException
from kumitescoring.models.match import Match
from kumitescoring.services.base import PushEvent
from kumitescoring.services.push import LocalPushChannel
from kumitescoring.type_hints import Record, Records
from kumitescoring.utils import setup_logger
from kumitescoring.utils.api_adapters import ref_id

logger = setup_logger(__name__)


class _FailureQueue:
    """Errors to raise on the next calls, oldest first."""

    def __init__(self):
        self._errors: List[Exception] = []

    def push(self, error: Exception) -> None:
        self._errors.append(error)

    def raise_next(self) -> None:
        if self._errors:
            raise self._errors.pop(0)


class InMemoryScoreStorage:
    """Score storage keeping one record per (match, judge, participant)."""

    def __init__(self, push_channel: Optional[LocalPushChannel] = None):
        self.push_channel = push_channel
        self._records: Dict[Tuple[str, str, str], Record] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._failures = _FailureQueue()
        self.submissions: Records = []

    def fail_next_submission(self, error: Optional[Exception] = None) -> None:
        """Make the next :meth:`submit_score` call raise ``error``."""
        self._failures.push(error or APIException("Score storage unavailable", 503))

    def get_match_scores(self, match_id: str) -> Records:
        with self._lock:
            return [
                copy.deepcopy(record)
                for (stored_match, _, _), record in self._records.items()
                if stored_match == match_id
            ]

    def submit_score(self, payload: Record) -> Record:
        self._failures.raise_next()

        key = (
            ref_id(payload["match_id"]),
            ref_id(payload["judge_id"]),
            ref_id(payload["participant_id"]),
        )
        with self._lock:
            existing = self._records.get(key)
            record = dict(payload)
            record["_id"] = existing["_id"] if existing else f"score-{next(self._ids)}"
            self._records[key] = record
            self.submissions.append(copy.deepcopy(payload))
            stored = copy.deepcopy(record)

        logger.debug("Stored score %s for %s", stored["_id"], key)
        if self.push_channel is not None:
            self.push_channel.publish(
                PushEvent(
                    kind=EVENT_SCORE_UPDATED,
                    match_id=key[0],
                    payload={
                        "matchId": key[0],
                        "participantId": key[2],
                        "score": copy.deepcopy(stored),
                    },
                )
            )
        return stored


class InMemoryMatchService:
    """Match service keeping match records in a dictionary."""

    def __init__(self, push_channel: Optional[LocalPushChannel] = None):
        self.push_channel = push_channel
        self._matches: Dict[str, Record] = {}
        self._lock = threading.Lock()
        self._failures = _FailureQueue()
        self.updates: List[Tuple[str, Record]] = []

    def add_match(self, match: Match) -> Record:
        """Register a match and return its stored record."""
        record = match.to_dict()
        with self._lock:
            self._matches[match.match_id] = record
        return copy.deepcopy(record)

    def fail_next_update(self, error: Optional[Exception] = None) -> None:
        """Make the next :meth:`update_match` call raise ``error``."""
        self._failures.push(error or APIException("Match service unavailable", 503))

    def get_match(self, match_id: str) -> Record:
        with self._lock:
            record = self._matches.get(match_id)
            if record is None:
                raise APIException(f"Match {match_id} not found", 404)
            return copy.deepcopy(record)

    def update_match(self, match_id: str, data: Record) -> Record:
        self._failures.raise_next()

        with self._lock:
            record = self._matches.get(match_id)
            if record is None:
                raise APIException(f"Match {match_id} not found", 404)
            record.update(data)
            self.updates.append((match_id, copy.deepcopy(data)))
            stored = copy.deepcopy(record)

        logger.debug("Updated match %s with %s", match_id, data)
        if self.push_channel is not None and "status" in data:
            self.push_channel.publish(
                PushEvent(
                    kind=EVENT_MATCH_STATUS_CHANGED,
                    match_id=match_id,
                    payload={
                        "matchId": match_id,
                        "status": stored.get("status"),
                        "winner_id": stored.get("winner_id"),
                    },
                )
            )
        return stored
