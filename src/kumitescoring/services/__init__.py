"""Collaborators of the scoring core: score storage, match service, push updates."""

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

from kumitescoring.services.base import (
    MatchService,
    PushChannel,
    PushEvent,
    ScoreStorage,
)
from kumitescoring.services.http import (
    BackendClient,
    HttpMatchService,
    HttpScoreStorage,
    create_http_services,
)
from kumitescoring.services.memory import InMemoryMatchService, InMemoryScoreStorage
from kumitescoring.services.push import LocalPushChannel

__all__ = [
    "MatchService",
    "PushChannel",
    "PushEvent",
    "ScoreStorage",
    "BackendClient",
    "HttpMatchService",
    "HttpScoreStorage",
    "create_http_services",
    "InMemoryMatchService",
    "InMemoryScoreStorage",
    "LocalPushChannel",
]
