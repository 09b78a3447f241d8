"""A small publish/subscribe bus that fans every message out to all subscribers."""

from __future__ import annotations

import itertools
from collections.abc import Callable

Subscriber = Callable[[str], object]


class EventBus:
    """Delivers each message sent on the bus to every connected subscriber."""

    def __init__(self) -> None:
        self._subscribers: dict[int, Subscriber] = {}
        self._ids = itertools.count(1)

    def connect(self, callback: Subscriber) -> int:
        """Register a subscriber and return its handler id."""
        handler_id = next(self._ids)
        self._subscribers[handler_id] = callback
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Remove a subscriber; unknown ids are ignored."""
        self._subscribers.pop(handler_id, None)

    def send(self, message: str) -> None:
        """Deliver a message to every current subscriber."""
        for callback in list(self._subscribers.values()):
            callback(message)

    def __len__(self) -> int:
        return len(self._subscribers)