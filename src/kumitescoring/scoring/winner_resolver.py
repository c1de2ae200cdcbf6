"""Winner resolution for Kumite matches.

This module applies the Kumite decision rules to the aggregated scores of
the two participants of a match.
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

from typing import Optional, Tuple

from kumitescoring.constants import DEFAULT_POINT_GAP
from kumitescoring.models.enums import OutcomeRule
from kumitescoring.models.scoring import AggregatedScore, MatchOutcome, ScoringConfig
from kumitescoring.utils import setup_logger

logger = setup_logger(__name__)


def final_scores(agg_a: AggregatedScore, agg_b: AggregatedScore) -> Tuple[int, int]:
    """Apply keikoku carry-over: each side gains the opponent's keikoku count."""
    return agg_a.points + agg_b.keikoku, agg_b.points + agg_a.keikoku


def resolve(
    agg_a: AggregatedScore,
    agg_b: AggregatedScore,
    point_gap: int = DEFAULT_POINT_GAP,
) -> MatchOutcome:
    """Decide the winner of a match from both aggregated scores.

    Rules, first match decides:

    1. Disqualification. Exactly one side disqualified loses. Both
       disqualified leaves the outcome undetermined.
    2. Keikoku carry-over into the final scores.
    3. A lead of at least ``point_gap`` wins outright.
    4. The higher final score wins.
    5. On a tie, whoever scored first wins; identical times favour ``agg_b``.
       Nobody scored means undetermined.

    The function is pure; identical inputs always give the same outcome.

    Args:
        agg_a: Aggregated score of one participant
        agg_b: Aggregated score of the other participant
        point_gap: Lead that wins outright

    Returns:
        The match outcome
    """
    a_id, b_id = agg_a.participant_id, agg_b.participant_id

    if agg_a.disqualified and agg_b.disqualified:
        logger.warning(
            "Both %s and %s are disqualified, outcome left undetermined", a_id, b_id
        )
        return MatchOutcome.undetermined()
    if agg_a.disqualified:
        return MatchOutcome.won(b_id, OutcomeRule.DISQUALIFICATION)
    if agg_b.disqualified:
        return MatchOutcome.won(a_id, OutcomeRule.DISQUALIFICATION)

    final_a, final_b = final_scores(agg_a, agg_b)

    if abs(final_a - final_b) >= point_gap:
        return MatchOutcome.won(
            a_id if final_a > final_b else b_id, OutcomeRule.POINT_GAP
        )

    if final_a != final_b:
        return MatchOutcome.won(
            a_id if final_a > final_b else b_id, OutcomeRule.HIGHER_SCORE
        )

    first_a, first_b = agg_a.first_score_time, agg_b.first_score_time
    if first_a is not None and first_b is not None:
        # Identical times go to the second participant
        return MatchOutcome.won(
            a_id if first_a < first_b else b_id, OutcomeRule.FIRST_SCORE
        )
    if first_a is not None:
        return MatchOutcome.won(a_id, OutcomeRule.FIRST_SCORE)
    if first_b is not None:
        return MatchOutcome.won(b_id, OutcomeRule.FIRST_SCORE)

    return MatchOutcome.undetermined()


class WinnerResolver:
    """Resolves outcomes with a fixed rule configuration."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def resolve(self, agg_a: AggregatedScore, agg_b: AggregatedScore) -> MatchOutcome:
        return resolve(agg_a, agg_b, point_gap=self.config.point_gap)

    def final_scores(
        self, agg_a: AggregatedScore, agg_b: AggregatedScore
    ) -> Tuple[int, int]:
        return final_scores(agg_a, agg_b)
