"""In-process push channel.

:class:`LocalPushChannel` is an explicit connection object with a
``connect``/``disconnect`` lifecycle. Components that need live updates get
one passed in; there is no module-level connection.
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
from collections import defaultdict
from typing import Dict, List

from kumitescoring.services.base import PushCallback, PushEvent
from kumitescoring.utils import setup_logger

logger = setup_logger(__name__)


class LocalSubscription:
    """Handle returned by :meth:`LocalPushChannel.subscribe`."""

    def __init__(self, channel: "LocalPushChannel", match_id: str, callback: PushCallback):
        self._channel = channel
        self.match_id = match_id
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._channel._remove(self)
            self.active = False

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"LocalSubscription({self.match_id}, {state})"


class LocalPushChannel:
    """Publish/subscribe channel delivering events synchronously.

    Events published while the channel is disconnected are dropped, matching
    a real socket that is not connected. Subscriptions survive a
    disconnect/connect cycle.
    """

    def __init__(self, autoconnect: bool = False):
        self._subscribers: Dict[str, List[LocalSubscription]] = defaultdict(list)
        self._lock = threading.Lock()
        self._connected = False
        if autoconnect:
            self.connect()

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        if not self._connected:
            self._connected = True
            logger.debug("Push channel connected")

    def disconnect(self) -> None:
        if self._connected:
            self._connected = False
            logger.debug("Push channel disconnected")

    def subscribe(self, match_id: str, callback: PushCallback) -> LocalSubscription:
        subscription = LocalSubscription(self, match_id, callback)
        with self._lock:
            self._subscribers[match_id].append(subscription)
        return subscription

    def _remove(self, subscription: LocalSubscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.match_id, [])
            if subscription in subscribers:
                subscribers.remove(subscription)

    def subscriber_count(self, match_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(match_id, []))

    def publish(self, event: PushEvent) -> int:
        """Deliver ``event`` to the match's subscribers.

        A subscriber that raises is logged and the remaining ones still get
        the event.

        Returns:
            Number of callbacks invoked
        """
        if not self._connected:
            logger.debug("Dropping %s for match %s: not connected", event.kind, event.match_id)
            return 0

        with self._lock:
            targets = list(self._subscribers.get(event.match_id, []))

        # Subscriber errors are logged, never raised to the publisher
        for subscription in targets:
            try:
                subscription.callback(event)
            except Exception:
                logger.exception(
                    "Subscriber failed on %s for match %s", event.kind, event.match_id
                )
        return len(targets)
