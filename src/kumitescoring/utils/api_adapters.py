"""API Adapters for converting backend records to scoring models.

This module provides adapter functions that convert raw records from the
tournament backend into score entries and matches, and score entries back
into submission payloads. The backend returns populated references
(``{"_id": ...}``) for related documents, so every id goes through
:func:`ref_id`.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from kumitescoring.constants import PENALTY_TYPES
from kumitescoring.models.enums import MatchStatus, PenaltyType
from kumitescoring.models.match import Judge, Match, Participant
from kumitescoring.models.scoring import PenaltyTally, ScoreEntry
from kumitescoring.utils import setup_logger

logger = setup_logger(__name__)


def ref_id(value: Any) -> Optional[str]:
    """Return the id of a plain or populated reference."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("_id") or value.get("id")
        return str(value) if value is not None else None
    return str(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Ignoring unparseable timestamp: %s", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _count(data: Dict[str, Any], key: str) -> int:
    try:
        return int(data.get(key) or 0)
    except (TypeError, ValueError):
        logger.warning("Invalid %s count %r, using 0", key, data.get(key))
        return 0


def score_api_to_entry(
    score_data: Dict[str, Any], match_id: Optional[str] = None
) -> Optional[ScoreEntry]:
    """Convert a stored score record into a :class:`ScoreEntry`.

    Stored records carry penalty totals only, so they land in category 1.

    Args:
        score_data: Raw record returned by the score storage
        match_id: Match id to use when the record does not carry one

    Returns:
        The entry, or None when the record lacks a judge or participant id

    Example:
        >>> entry = score_api_to_entry({
        ...     "match_id": "m1", "judge_id": {"_id": "j1"},
        ...     "participant_id": "p1", "ippon": 1, "keikoku": 2,
        ... })
        >>> entry.ippon, entry.category_1.keikoku
        (1, 2)
    """
    judge_id = ref_id(score_data.get("judge_id"))
    participant_id = ref_id(score_data.get("participant_id"))
    if not judge_id or not participant_id:
        logger.debug("Skipping score record without judge/participant: %s", score_data)
        return None

    return ScoreEntry(
        match_id=ref_id(score_data.get("match_id")) or match_id or "",
        judge_id=judge_id,
        participant_id=participant_id,
        yuko=_count(score_data, "yuko"),
        waza_ari=_count(score_data, "waza_ari"),
        ippon=_count(score_data, "ippon"),
        category_1=PenaltyTally(**{p: _count(score_data, p) for p in PENALTY_TYPES}),
        category_2=PenaltyTally(),
        first_score_time=parse_timestamp(score_data.get("scored_at")),
    )


def entry_to_submission_payload(entry: ScoreEntry) -> Dict[str, Any]:
    """Build the score storage submission payload for an entry.

    Penalty categories are summed per penalty type; the storage does not know
    about the split.
    """
    payload: Dict[str, Any] = {
        "match_id": entry.match_id,
        "participant_id": entry.participant_id,
        "judge_id": entry.judge_id,
        "yuko": entry.yuko,
        "waza_ari": entry.waza_ari,
        "ippon": entry.ippon,
    }
    for penalty in PenaltyType:
        payload[penalty.value] = entry.penalty_total(penalty)
    payload["jogai"] = 0
    payload["scored_at"] = format_timestamp(entry.first_score_time)
    return payload


def match_api_to_match(match_data: Dict[str, Any]) -> Match:
    """Convert a match record from the match service into a :class:`Match`.

    Participants may be given as plain ids, as ``participant_id`` dicts or as
    populated participant documents with a player or team reference.
    """
    participants = []
    for item in match_data.get("participants", []):
        if isinstance(item, dict):
            reference = item.get("participant_id")
            participant_id = ref_id(reference) or ref_id(item)
            document = reference if isinstance(reference, dict) else item
            participants.append(Participant(participant_id, _participant_name(document)))
        else:
            participants.append(Participant(str(item)))

    judges = []
    for item in match_data.get("judges", []):
        if isinstance(item, dict):
            judge_id = ref_id(item.get("judge_id")) or ref_id(item)
            judges.append(
                Judge(
                    judge_id=judge_id,
                    role=item.get("judge_role") or item.get("role") or "Judge",
                    name=item.get("name"),
                )
            )
        else:
            judges.append(Judge(str(item)))

    status = match_data.get("status") or MatchStatus.SCHEDULED.value
    try:
        parsed_status = MatchStatus.parse(status)
    except ValueError:
        logger.warning("Unknown match status %r, treating as scheduled", status)
        parsed_status = MatchStatus.SCHEDULED

    return Match(
        match_id=ref_id(match_data.get("match_id")) or ref_id(match_data),
        participants=participants,
        judges=judges,
        status=parsed_status,
        winner_id=ref_id(match_data.get("winner_id")),
        completed_at=parse_timestamp(match_data.get("completed_at")),
        name=match_data.get("match_name") or match_data.get("name"),
    )


def _participant_name(item: Dict[str, Any]) -> Optional[str]:
    """Best-effort display name from a populated participant document."""
    if item.get("name"):
        return item["name"]
    player = item.get("player_id")
    if isinstance(player, dict):
        user = player.get("user_id")
        if isinstance(user, dict):
            full = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
            return full or user.get("username")
    team = item.get("team_id")
    if isinstance(team, dict):
        return team.get("team_name")
    return None
