"""Type hints used in Kumite Scoring."""

from datetime import datetime
from typing import Any, Callable, Dict, List, Literal, Tuple

# Side of the mat
Side = Literal["AKA", "AO"]

# Penalty category
Category = Literal[1, 2]

# (judge_id, participant_id)
EntryKey = Tuple[str, str]

# Raw JSON-like record exchanged with the backend
Record = Dict[str, Any]
Records = List[Record]

# Source of "now" for first-score timestamps and completion times
Clock = Callable[[], datetime]

#  LocalWords:  EntryKey
