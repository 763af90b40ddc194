"""
Notification module.

Ledger events and the sinks they are delivered to.
"""
from .base import BaseNotificationSink
from .dispatcher import NotificationDispatcher
from .events import LedgerEvent, ProposalCreated, VoteCast
from .file_sink import FileNotificationSink
from .memory_sink import MemoryNotificationSink
from .stdout_sink import StdoutNotificationSink

__all__ = [
    "BaseNotificationSink",
    "NotificationDispatcher",
    "LedgerEvent",
    "ProposalCreated",
    "VoteCast",
    "FileNotificationSink",
    "MemoryNotificationSink",
    "StdoutNotificationSink",
]
