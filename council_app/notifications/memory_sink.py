"""In-memory notification sink."""

import threading

from .base import BaseNotificationSink
from .events import LedgerEvent


class MemoryNotificationSink(BaseNotificationSink):
    """Collects events in a list until they are drained."""

    def __init__(self, name: str = "memory"):
        super().__init__(name)
        self.events: list[LedgerEvent] = []
        self._lock = threading.Lock()

    def notify(self, event: LedgerEvent) -> None:
        with self._lock:
            self.events.append(event)

    def get_events(self) -> list[LedgerEvent]:
        """Get and clear collected events."""
        with self._lock:
            events = self.events.copy()
            self.events.clear()
        return events

    def health_check(self) -> bool:
        return True
