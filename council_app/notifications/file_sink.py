"""File-based notification sink writing JSON lines."""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path

from ..errors import NotificationError
from .base import BaseNotificationSink
from .events import LedgerEvent


class FileNotificationSink(BaseNotificationSink):
    """Appends one JSON object per event to a file."""

    def __init__(self, output_path: str, name: str = "file", create_dirs: bool = True):
        super().__init__(name)
        self.output_path = Path(output_path)
        self._lock = threading.Lock()

        if create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def notify(self, event: LedgerEvent) -> None:
        record = event.to_dict()
        record["written_at"] = datetime.now(timezone.utc).isoformat()

        try:
            with self._lock:
                with open(self.output_path, "a", encoding="utf-8") as f:
                    f.write(json.dumps(record) + "\n")
        except OSError as e:
            raise NotificationError(
                f"File system error: {e}",
                sink_name=self.name,
                event_type=event.event_type,
            ) from e

        self.logger.debug(
            "Event written to file",
            sink_name=self.name,
            event_type=event.event_type,
            output_path=str(self.output_path)
        )

    def health_check(self) -> bool:
        """Check that the output directory is present."""
        return self.output_path.parent.is_dir()
