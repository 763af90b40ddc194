"""Standard output notification sink."""

import json
import sys
from datetime import datetime, timezone

from ..errors import NotificationError
from .base import BaseNotificationSink
from .events import LedgerEvent


class StdoutNotificationSink(BaseNotificationSink):
    """Prints events to stdout."""

    def __init__(self, name: str = "stdout", format: str = "json",
                 include_timestamp: bool = True):
        super().__init__(name)
        self.format = format
        self.include_timestamp = include_timestamp

    def notify(self, event: LedgerEvent) -> None:
        try:
            print(self._format_event(event), file=sys.stdout, flush=True)
        except (OSError, ValueError) as e:
            raise NotificationError(
                f"Stdout error: {e}",
                sink_name=self.name,
                event_type=event.event_type,
            ) from e

    def _format_event(self, event: LedgerEvent) -> str:
        """Format event for stdout output."""
        data = event.to_dict()
        if self.format == "pretty":
            details = " ".join(f"{k}={v}" for k, v in data.items() if k != "event_type")
            return f"[{datetime.now(timezone.utc).isoformat()}] EVENT: {event.event_type} {details}"

        if self.include_timestamp:
            data["stdout_timestamp"] = datetime.now(timezone.utc).isoformat()
        return json.dumps(data)

    def health_check(self) -> bool:
        """Check if stdout is available."""
        try:
            return sys.stdout.writable()
        except (OSError, ValueError):
            return False
