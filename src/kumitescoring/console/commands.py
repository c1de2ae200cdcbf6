"""Console command handling for live scoring.

The interactive prompt only reads lines; everything else happens in
:class:`LiveConsole`, which turns one command line into one reply.
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

import json
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from kumitescoring.exceptions import (
    InvalidConfigurationException,
    KumiteScoringException,
    ParticipantNotFoundException,
)
from kumitescoring.models.match import Match
from kumitescoring.models.scoring import ScoreEntry, ScoringConfig
from kumitescoring.scoring import ScoringSession, aggregate_match, build_scoreboard
from kumitescoring.scoring.scoreboard import Scoreboard
from kumitescoring.scoring.winner_resolver import WinnerResolver
from kumitescoring.services import (
    InMemoryMatchService,
    InMemoryScoreStorage,
    LocalPushChannel,
)
from kumitescoring.utils import setup_logger
from kumitescoring.utils.api_adapters import (
    entry_to_submission_payload,
    match_api_to_match,
    score_api_to_entry,
)

logger = setup_logger(__name__)

# Command definitions shown by "help" and used for completion
COMMANDS = {
    "score": {
        "usage": "score <judge> <aka|ao|participant> <action> [delta]",
        "description": "Record an action, e.g. 'score j1 aka wazaAri' or "
        "'score j2 ao penalty:1:keikoku'",
    },
    "show": {"usage": "show", "description": "Show the scoreboard"},
    "reload": {
        "usage": "reload",
        "description": "Reload all scores from storage and recompute",
    },
    "finalize": {
        "usage": "finalize",
        "description": "Reload scores, persist the winner and complete the match",
    },
    "help": {"usage": "help", "description": "Show this help"},
    "quit": {"usage": "quit", "description": "Leave the console"},
}

ACTION_WORDS = [
    "yuko",
    "wazaAri",
    "ippon",
    "penalty:1:chukoku",
    "penalty:1:keikoku",
    "penalty:1:hansokuChui",
    "penalty:1:hansoku",
    "penalty:2:chukoku",
    "penalty:2:keikoku",
    "penalty:2:hansokuChui",
    "penalty:2:hansoku",
]


def load_match_file(path: Path) -> Tuple[Match, List[ScoreEntry], ScoringConfig]:
    """Read a match file.

    The file is a JSON object with a ``match`` record, an optional list of
    stored ``scores`` records and an optional ``config`` object.

    Raises:
        InvalidConfigurationException: If the file cannot be read or parsed
    """
    try:
        data: Dict[str, Any] = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise InvalidConfigurationException(
            f"Cannot read match file {path}: {exc}"
        ) from exc

    if not isinstance(data, dict) or "match" not in data:
        raise InvalidConfigurationException(f"Match file {path} has no 'match' object")

    match = match_api_to_match(data["match"])
    entries = []
    for record in data.get("scores", []):
        entry = score_api_to_entry(record, match_id=match.match_id)
        if entry is not None:
            entries.append(entry)
    config = ScoringConfig.from_dict(data.get("config", {}))
    return match, entries, config


def resolve_match_file(path: Path) -> Scoreboard:
    """Aggregate and resolve the scores stored in a match file."""
    match, entries, config = load_match_file(path)
    aka, ao = aggregate_match(entries, match, config.point_values)
    outcome = WinnerResolver(config).resolve(aka, ao)
    return build_scoreboard(match, aka, ao, outcome)


def create_offline_session(
    match: Match,
    entries: Optional[List[ScoreEntry]] = None,
    config: Optional[ScoringConfig] = None,
    push_channel: Optional[LocalPushChannel] = None,
) -> ScoringSession:
    """Build a session on in-memory collaborators seeded with ``entries``.

    When ``push_channel`` is given, both stores publish to it and the session
    subscribes to it, so every stored change goes through the reload path.
    """
    storage = InMemoryScoreStorage(push_channel)
    for entry in entries or []:
        storage.submit_score(entry_to_submission_payload(entry))
    match_service = InMemoryMatchService(push_channel)
    match_service.add_match(match)
    session = ScoringSession(
        match, storage, match_service, push_channel=push_channel, config=config
    )
    session.load()
    return session


class LiveConsole:
    """Executes console commands against a scoring session."""

    def __init__(self, session: ScoringSession):
        self.session = session
        self.finished = False

    def _participant_id(self, token: str) -> str:
        match = self.session.match
        if token.upper() in ("AKA", "AO"):
            return match.participant_for_side(token).participant_id
        if match.has_participant(token):
            return token
        raise ParticipantNotFoundException(f"Unknown participant or side: {token}")

    def execute(self, line: str) -> str:
        """Run one command line and return the text to display."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            return f"Error: {exc}"
        if not parts:
            return ""

        command, args = parts[0].lstrip("/").lower(), parts[1:]
        try:
            if command == "score":
                return self._score(args)
            if command == "show":
                return self.session.scoreboard().render()
            if command == "reload":
                self.session.load()
                return self.session.scoreboard().render()
            if command == "finalize":
                # Finalize on the stored scores, not the cached outcome
                self.session.load()
                outcome = self.session.finalize()
                return f"Match finalized. Winner: {outcome.winner_id}"
            if command == "help":
                return self.help_text()
            if command in ("quit", "exit"):
                self.finished = True
                return "Bye."
        except KumiteScoringException as exc:
            return f"Error: {exc}"
        return f"Unknown command: {command}. Type 'help' for the command list."

    def _score(self, args: List[str]) -> str:
        if len(args) not in (3, 4):
            return f"Usage: {COMMANDS['score']['usage']}"
        judge_id, participant_token, action = args[:3]
        try:
            delta = int(args[3]) if len(args) == 4 else 1
        except ValueError:
            return f"Invalid delta: {args[3]}"
        participant_id = self._participant_id(participant_token)
        self.session.record(judge_id, participant_id, action, delta)
        return self.session.scoreboard().render()

    @staticmethod
    def help_text() -> str:
        lines = ["Commands:"]
        for name, info in COMMANDS.items():
            lines.append(f"  {info['usage']:<52} {info['description']}")
        lines.append("Actions: " + ", ".join(ACTION_WORDS))
        return "\n".join(lines)
