"""Live scoring session for one Kumite match.

This module ties the score ledger, aggregation and winner resolution
together. Every successful scoring action, and every push update, ends with
the aggregates and the outcome recomputed from a fresh ledger snapshot.
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

from typing import Callable, List, Optional, Tuple, Union

from kumitescoring.constants import EVENT_MATCH_STATUS_CHANGED, EVENT_SCORE_UPDATED
from kumitescoring.exceptions import (
    MatchAlreadyCompletedException,
    MatchUpdateException,
    UndeterminedOutcomeException,
)
from kumitescoring.models.enums import MatchStatus
from kumitescoring.models.match import Match
from kumitescoring.models.scoring import (
    AggregatedScore,
    MatchOutcome,
    ScoreEntry,
    ScoringAction,
    ScoringConfig,
    parse_action,
)
from kumitescoring.scoring.aggregation import aggregate_match
from kumitescoring.scoring.ledger import ScoreLedger, utc_now
from kumitescoring.scoring.scoreboard import Scoreboard, build_scoreboard
from kumitescoring.scoring.winner_resolver import WinnerResolver
from kumitescoring.services.base import (
    MatchService,
    PushChannel,
    PushEvent,
    ScoreStorage,
    Subscription,
)
from kumitescoring.type_hints import Clock
from kumitescoring.utils import setup_logger
from kumitescoring.utils.api_adapters import format_timestamp, parse_timestamp, ref_id

logger = setup_logger(__name__)

OutcomeListener = Callable[[MatchOutcome], None]


class ScoringSession:
    """Scores one match and keeps its outcome current.

    This class is responsible for:
    - Routing scoring actions to the ledger
    - Recomputing aggregates and the outcome after every change
    - Reloading everything when a push update arrives
    - Finalizing the match through the match service
    """

    def __init__(
        self,
        match: Match,
        score_storage: ScoreStorage,
        match_service: MatchService,
        push_channel: Optional[PushChannel] = None,
        config: Optional[ScoringConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize the session.

        Args:
            match: Match to score
            score_storage: Score storage collaborator
            match_service: Match service collaborator used by :meth:`finalize`
            push_channel: Optional live update channel, see :meth:`attach`
            config: Competition rule settings
            clock: Source of the current time, defaults to UTC now
        """
        self.match = match
        self.match_service = match_service
        self.config = config or ScoringConfig()
        self.clock = clock or utc_now
        self.ledger = ScoreLedger(match, score_storage, clock=self.clock)
        self.resolver = WinnerResolver(self.config)
        self._listeners: List[OutcomeListener] = []
        self._subscription: Optional[Subscription] = None
        self._aggregates: Tuple[AggregatedScore, AggregatedScore]
        self._outcome = MatchOutcome.undetermined()
        self.recompute()
        if push_channel is not None:
            self.attach(push_channel)

    @property
    def outcome(self) -> MatchOutcome:
        return self._outcome

    @property
    def aggregates(self) -> Tuple[AggregatedScore, AggregatedScore]:
        """Aggregated scores as (AKA, AO)."""
        return self._aggregates

    def add_listener(self, listener: OutcomeListener) -> None:
        """Call ``listener`` with the outcome after every recompute."""
        self._listeners.append(listener)

    def remove_listener(self, listener: OutcomeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load(self) -> MatchOutcome:
        """Reload the ledger from storage and recompute the outcome."""
        self.ledger.load_for_match(self.match.match_id)
        return self.recompute()

    def recompute(self) -> MatchOutcome:
        """Aggregate a fresh snapshot and resolve the winner."""
        snapshot = self.ledger.snapshot()
        self._aggregates = aggregate_match(
            snapshot, self.match, self.config.point_values
        )
        self._outcome = self.resolver.resolve(*self._aggregates)
        for listener in list(self._listeners):
            listener(self._outcome)
        return self._outcome

    def record(
        self,
        judge_id: str,
        participant_id: str,
        action: Union[ScoringAction, str],
        delta: int = 1,
    ) -> MatchOutcome:
        """Record a scoring action and return the new outcome.

        Args:
            judge_id: Judge recording the action
            participant_id: Participant the action is for
            action: Action, or action text such as ``"wazaAri"`` or ``"penalty:1:keikoku"``
            delta: Amount to add

        Raises:
            MatchAlreadyCompletedException: If the match is already completed
            InvalidScoringActionException: If the action text is unknown
            JudgeBusyException: If the judge has a submission in flight
            ScoreSubmissionException: If the storage failed; nothing changed
        """
        if self.match.is_completed:
            raise MatchAlreadyCompletedException(
                f"Match {self.match.match_id} is already completed"
            )
        if isinstance(action, str):
            action = parse_action(action)

        self.ledger.record_action(judge_id, participant_id, action, delta)
        if self.match.status is MatchStatus.SCHEDULED:
            self.match.status = MatchStatus.IN_PROGRESS
        return self.recompute()

    def entry(self, judge_id: str, participant_id: str) -> ScoreEntry:
        return self.ledger.get_entry(judge_id, participant_id)

    def scoreboard(self) -> Scoreboard:
        aka, ao = self._aggregates
        return build_scoreboard(self.match, aka, ao, self._outcome)

    def finalize(self) -> MatchOutcome:
        """Persist the winner and mark the match completed.

        Returns:
            The outcome that was persisted

        Raises:
            MatchAlreadyCompletedException: If the match is already completed
            UndeterminedOutcomeException: If there is no winner; nothing is sent
            MatchUpdateException: If the match service failed; nothing changed
        """
        if self.match.is_completed:
            raise MatchAlreadyCompletedException(
                f"Match {self.match.match_id} is already completed"
            )
        outcome = self._outcome
        if outcome.is_undetermined:
            raise UndeterminedOutcomeException(
                f"Match {self.match.match_id} has no winner yet; "
                "keep scoring before finalizing"
            )

        completed_at = self.clock()
        try:
            self.match_service.update_match(
                self.match.match_id,
                {
                    "winner_id": outcome.winner_id,
                    "status": MatchStatus.COMPLETED.value,
                    "completed_at": format_timestamp(completed_at),
                },
            )
        except Exception as exc:
            logger.error("Failed to finalize match %s: %s", self.match.match_id, exc)
            raise MatchUpdateException(
                f"Failed to finalize match {self.match.match_id}: {exc}"
            ) from exc

        self.match.status = MatchStatus.COMPLETED
        self.match.winner_id = outcome.winner_id
        self.match.completed_at = completed_at
        logger.info(
            "Match %s finalized, winner %s (%s)",
            self.match.match_id,
            outcome.winner_id,
            outcome.decided_by.value,
        )
        return outcome

    def attach(self, push_channel: PushChannel) -> None:
        """Subscribe to live updates for this match.

        The caller owns the channel's connection lifecycle.
        """
        self.detach()
        self._subscription = push_channel.subscribe(
            self.match.match_id, self._on_push_event
        )

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_push_event(self, event: PushEvent) -> None:
        if event.match_id != self.match.match_id:
            return
        if event.kind == EVENT_SCORE_UPDATED:
            logger.debug("Score update for match %s, reloading", event.match_id)
            self.load()
        elif event.kind == EVENT_MATCH_STATUS_CHANGED:
            self._apply_status_change(event)
        else:
            logger.debug("Ignoring push event %s", event.kind)

    def _apply_status_change(self, event: PushEvent) -> None:
        status = event.payload.get("status")
        if status:
            try:
                self.match.status = MatchStatus.parse(status)
            except ValueError:
                logger.warning("Ignoring unknown match status %r", status)
        if "winner_id" in event.payload:
            self.match.winner_id = ref_id(event.payload["winner_id"])
        if event.payload.get("completed_at"):
            self.match.completed_at = parse_timestamp(event.payload["completed_at"])
        logger.info(
            "Match %s status changed to %s", self.match.match_id, self.match.status.value
        )
