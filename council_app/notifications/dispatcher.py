"""Fan-out of ledger events to the configured sinks."""

from typing import Iterable, Optional

import structlog

from ..errors import NotificationError
from .base import BaseNotificationSink
from .events import LedgerEvent

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Delivers each event to every sink, fire-and-forget.

    A failing sink is logged and counted; the failure never reaches the
    ledger operation that produced the event.
    """

    def __init__(self, sinks: Optional[Iterable[BaseNotificationSink]] = None):
        self.sinks: list[BaseNotificationSink] = list(sinks or [])
        self.logger = logger

    def add_sink(self, sink: BaseNotificationSink) -> None:
        self.sinks.append(sink)

    def dispatch(self, events: Iterable[LedgerEvent]) -> None:
        for event in events:
            for sink in self.sinks:
                try:
                    sink.notify(event)
                    sink.record_delivery(True)
                except NotificationError as e:
                    sink.record_delivery(False)
                    self.logger.error(
                        "Notification delivery failed",
                        sink_name=sink.name,
                        event_type=event.event_type,
                        error=str(e)
                    )
                except Exception as e:
                    sink.record_delivery(False)
                    self.logger.exception(
                        "Unexpected notification sink error",
                        sink_name=sink.name,
                        event_type=event.event_type,
                        error=str(e)
                    )

    def health_check(self) -> dict[str, bool]:
        return {sink.name: sink.health_check() for sink in self.sinks}

    def get_stats(self) -> list[dict]:
        return [sink.get_stats() for sink in self.sinks]
