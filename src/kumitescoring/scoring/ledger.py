"""Score ledger for a single Kumite match.

This module records per-judge point and penalty tallies, persists every
change through the score storage and rolls back when persisting fails.
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

import threading
from datetime import datetime, timezone
from typing import Dict, Optional, Set

from kumitescoring.exceptions import (
    JudgeBusyException,
    JudgeNotFoundException,
    ParticipantNotFoundException,
    ScoreSubmissionException,
)
from kumitescoring.models.match import Match
from kumitescoring.models.scoring import PointAction, ScoreEntry, ScoringAction
from kumitescoring.services.base import ScoreStorage
from kumitescoring.type_hints import Clock, EntryKey
from kumitescoring.utils import setup_logger
from kumitescoring.utils.api_adapters import (
    entry_to_submission_payload,
    score_api_to_entry,
)

logger = setup_logger(__name__)

LedgerSnapshot = Dict[EntryKey, ScoreEntry]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScoreLedger:
    """Holds the ScoreEntry of every (judge, participant) pair of a match.

    This class is responsible for:
    - Loading entries from the score storage, synthesizing empty ones
    - Applying scoring actions and stamping the first-score time
    - Persisting each change and rolling it back on failure
    - Rejecting a judge's second action while the first is still in flight
    """

    def __init__(self, match: Match, storage: ScoreStorage, clock: Optional[Clock] = None):
        """Initialize the ledger.

        Args:
            match: Match being scored
            storage: Score storage collaborator
            clock: Source of the current time, defaults to UTC now
        """
        self.match = match
        self.storage = storage
        self.clock = clock or utc_now
        self._entries: LedgerSnapshot = {}
        self._in_flight: Set[str] = set()
        self._guard = threading.Lock()
        self._synthesize_missing()

    @property
    def match_id(self) -> str:
        return self.match.match_id

    def _synthesize_missing(self) -> None:
        for judge_id in self.match.judge_ids:
            for participant_id in self.match.participant_ids:
                key = (judge_id, participant_id)
                if key not in self._entries:
                    self._entries[key] = ScoreEntry.zero(
                        self.match_id, judge_id, participant_id
                    )

    def load_for_match(self, match_id: Optional[str] = None) -> LedgerSnapshot:
        """Replace the ledger content with what the score storage holds.

        Args:
            match_id: Match to load, defaults to the ledger's match

        Returns:
            Snapshot of all entries after loading
        """
        match_id = match_id or self.match_id
        records = self.storage.get_match_scores(match_id) or []

        entries: LedgerSnapshot = {}
        for record in records:
            entry = score_api_to_entry(record, match_id=match_id)
            if entry is None:
                continue
            if not (
                self.match.has_judge(entry.judge_id)
                and self.match.has_participant(entry.participant_id)
            ):
                logger.debug(
                    "Keeping score of unassigned judge/participant %s", entry.key
                )
            entries[entry.key] = entry

        self._entries = entries
        self._synthesize_missing()
        logger.info(
            "Loaded %d stored score records for match %s", len(records), match_id
        )
        return self.snapshot()

    def get_entry(self, judge_id: str, participant_id: str) -> ScoreEntry:
        """Return a copy of one entry (all-zero if never scored)."""
        entry = self._entries.get((judge_id, participant_id))
        if entry is None:
            entry = ScoreEntry.zero(self.match_id, judge_id, participant_id)
        return entry.copy()

    def snapshot(self) -> LedgerSnapshot:
        """Return an independent copy of every entry."""
        return {key: entry.copy() for key, entry in self._entries.items()}

    def clear(self) -> None:
        """Drop all tallies, keeping empty entries for the assigned pairs."""
        self._entries = {}
        self._synthesize_missing()

    def is_judge_busy(self, judge_id: str) -> bool:
        with self._guard:
            return judge_id in self._in_flight

    def _acquire(self, judge_id: str) -> None:
        with self._guard:
            if judge_id in self._in_flight:
                raise JudgeBusyException(judge_id)
            self._in_flight.add(judge_id)

    def _release(self, judge_id: str) -> None:
        with self._guard:
            self._in_flight.discard(judge_id)

    def record_action(
        self,
        judge_id: str,
        participant_id: str,
        action: ScoringAction,
        delta: int = 1,
    ) -> ScoreEntry:
        """Apply a scoring action and persist the updated entry.

        ``delta`` is not validated; any value supplied is applied as-is.

        Args:
            judge_id: Judge recording the action
            participant_id: Participant the action is for
            action: Point or penalty action
            delta: Amount to add to the addressed count

        Returns:
            Copy of the updated entry

        Raises:
            JudgeNotFoundException: If the judge is not assigned to the match
            ParticipantNotFoundException: If the participant is not in the match
            JudgeBusyException: If the judge already has a submission in flight
            ScoreSubmissionException: If persisting failed; the entry is rolled back
        """
        if not self.match.has_judge(judge_id):
            raise JudgeNotFoundException(
                f"Judge {judge_id} is not assigned to match {self.match_id}"
            )
        if not self.match.has_participant(participant_id):
            raise ParticipantNotFoundException(
                f"Participant {participant_id} is not part of match {self.match_id}"
            )

        try:
            self._acquire(judge_id)
        except JudgeBusyException:
            logger.warning(
                "Ignoring %s from judge %s: previous submission still pending",
                action,
                judge_id,
            )
            raise

        key = (judge_id, participant_id)
        try:
            previous = self._entries.get(key)
            updated = (
                previous.copy()
                if previous is not None
                else ScoreEntry.zero(self.match_id, judge_id, participant_id)
            )
            updated.increment(action, delta)
            if isinstance(action, PointAction) and updated.first_score_time is None:
                updated.first_score_time = self.clock()

            # Optimistic update, reverted below if the storage fails
            self._entries[key] = updated
            try:
                self.storage.submit_score(entry_to_submission_payload(updated))
            except Exception as exc:
                if previous is None:
                    self._entries.pop(key, None)
                else:
                    self._entries[key] = previous
                logger.error(
                    "Failed to submit %s for %s by judge %s, rolled back: %s",
                    action,
                    participant_id,
                    judge_id,
                    exc,
                )
                raise ScoreSubmissionException(
                    f"Failed to submit {action} for participant {participant_id}: {exc}"
                ) from exc
        finally:
            self._release(judge_id)

        logger.debug(
            "Judge %s recorded %s x%s for %s", judge_id, action, delta, participant_id
        )
        return updated.copy()
