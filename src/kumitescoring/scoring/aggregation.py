"""Aggregation of judges' score entries into per-participant totals."""

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

from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from kumitescoring.constants import DEFAULT_POINT_VALUES
from kumitescoring.models.enums import PenaltyType
from kumitescoring.models.match import Match
from kumitescoring.models.scoring import AggregatedScore, ScoreEntry
from kumitescoring.type_hints import EntryKey

SnapshotLike = Union[Mapping[EntryKey, ScoreEntry], Iterable[ScoreEntry]]


def _entries(snapshot: SnapshotLike) -> Iterable[ScoreEntry]:
    if isinstance(snapshot, Mapping):
        return snapshot.values()
    return snapshot


def aggregate(
    snapshot: SnapshotLike,
    participant_id: str,
    point_values: Optional[Dict[str, int]] = None,
) -> AggregatedScore:
    """Sum every judge's entry for one participant.

    Penalties are summed over both categories and all judges. The first-score
    time is the earliest one any judge recorded. The result does not depend on
    the order of the entries.

    Args:
        snapshot: Ledger snapshot, as a mapping or any iterable of entries
        participant_id: Participant to aggregate
        point_values: Override of the yuko/waza-ari/ippon values

    Returns:
        The participant's aggregated score
    """
    totals = {
        "yuko": 0,
        "waza_ari": 0,
        "ippon": 0,
        **{penalty.value: 0 for penalty in PenaltyType},
    }
    first_score_time = None

    for entry in _entries(snapshot):
        if entry.participant_id != participant_id:
            continue
        totals["yuko"] += entry.yuko
        totals["waza_ari"] += entry.waza_ari
        totals["ippon"] += entry.ippon
        for penalty in PenaltyType:
            totals[penalty.value] += entry.penalty_total(penalty)
        if entry.first_score_time is not None and (
            first_score_time is None or entry.first_score_time < first_score_time
        ):
            first_score_time = entry.first_score_time

    return AggregatedScore(
        participant_id=participant_id,
        first_score_time=first_score_time,
        point_values=dict(point_values or DEFAULT_POINT_VALUES),
        **totals,
    )


def aggregate_match(
    snapshot: SnapshotLike,
    match: Match,
    point_values: Optional[Dict[str, int]] = None,
) -> Tuple[AggregatedScore, AggregatedScore]:
    """Aggregate both participants of a match.

    Returns:
        Tuple of (AKA aggregate, AO aggregate)
    """
    entries = list(_entries(snapshot))
    return (
        aggregate(entries, match.aka.participant_id, point_values),
        aggregate(entries, match.ao.participant_id, point_values),
    )
