"""In-memory notification preferences, kept for the lifetime of the process.

Entries are never evicted, so memory grows with the number of distinct chats.
"""

import threading
from dataclasses import dataclass


@dataclass
class Subscriber:
    user_id: int
    notifications_enabled: bool = False


class SubscriptionStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[int, Subscriber] = {}

    def get(self, user_id: int) -> Subscriber:
        """Return the subscriber, creating it with notifications off on first contact."""
        with self._lock:
            subscriber = self._subscribers.get(user_id)
            if subscriber is None:
                subscriber = Subscriber(user_id)
                self._subscribers[user_id] = subscriber
            return Subscriber(subscriber.user_id, subscriber.notifications_enabled)

    def set_enabled(self, user_id: int, enabled: bool) -> None:
        with self._lock:
            subscriber = self._subscribers.setdefault(user_id, Subscriber(user_id))
            subscriber.notifications_enabled = bool(enabled)

    def is_enabled(self, user_id: int) -> bool:
        with self._lock:
            subscriber = self._subscribers.get(user_id)
            return bool(subscriber and subscriber.notifications_enabled)

    def enabled_user_ids(self) -> list[int]:
        with self._lock:
            return [s.user_id for s in self._subscribers.values() if s.notifications_enabled]

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)
