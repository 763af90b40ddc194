"""Base class for notification sinks."""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from .events import LedgerEvent


class BaseNotificationSink(ABC):
    """Base class for ledger event sinks."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"council.notifications.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def notify(self, event: LedgerEvent) -> None:
        """
        Deliver one event.

        Args:
            event: Ledger event to deliver

        Raises:
            NotificationError: if the event could not be delivered
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the sink is able to deliver."""
        pass

    def record_delivery(self, succeeded: bool) -> None:
        if succeeded:
            self._delivery_count += 1
        else:
            self._error_count += 1

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
