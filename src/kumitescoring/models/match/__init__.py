from kumitescoring.models.match.match import Match
from kumitescoring.models.match.participant import Judge, Participant

__all__ = ["Match", "Participant", "Judge"]
