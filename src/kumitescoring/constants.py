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

# --- Constants ---

# Point categories
YUKO = "yuko"
WAZA_ARI = "waza_ari"
IPPON = "ippon"
POINT_TYPES = (YUKO, WAZA_ARI, IPPON)

# Point values per category
YUKO_POINTS = 1
WAZA_ARI_POINTS = 2
IPPON_POINTS = 3
DEFAULT_POINT_VALUES = {
    YUKO: YUKO_POINTS,
    WAZA_ARI: WAZA_ARI_POINTS,
    IPPON: IPPON_POINTS,
}

# Penalty ladder (warning -> point penalty -> final warning -> disqualification)
CHUKOKU = "chukoku"
KEIKOKU = "keikoku"
HANSOKU_CHUI = "hansoku_chui"
HANSOKU = "hansoku"
PENALTY_TYPES = (CHUKOKU, KEIKOKU, HANSOKU_CHUI, HANSOKU)

# Penalty categories (separate rule classes, summed for aggregation)
PENALTY_CATEGORY_1 = 1
PENALTY_CATEGORY_2 = 2
PENALTY_CATEGORIES = (PENALTY_CATEGORY_1, PENALTY_CATEGORY_2)

# Senshu-style point gap granting outright victory
DEFAULT_POINT_GAP = 8

# Sides
SIDE_AKA = "AKA"  # Red, first participant
SIDE_AO = "AO"  # Blue, second participant

# Match status strings (as used by the match service)
STATUS_SCHEDULED = "Scheduled"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"

# Push event kinds
EVENT_SCORE_UPDATED = "score-updated"
EVENT_MATCH_STATUS_CHANGED = "match-status-changed"

# Display value for a disqualified participant
DISQUALIFIED_DISPLAY = "DQ"

# Default REST endpoint of the tournament backend
DEFAULT_API_URL = "http://localhost:5000/api"
API_URL_ENV = "KUMITE_API_URL"
API_TOKEN_ENV = "KUMITE_API_TOKEN"
DEFAULT_API_TIMEOUT = 10.0
