"""
Error classification for the governance engine.

Governance errors are surfaced to the caller of a ledger operation and leave
the ledger untouched. System failures come from the collaborators around the
ledger (storage, notification sinks, configuration).
"""

from .governance import (
    GovernanceError,
    Unauthorized,
    NotFound,
    ExecutionFailed,
    VoteInProgress,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    NotificationError,
    ConfigurationError,
)

__all__ = [
    # Governance Errors
    "GovernanceError",
    "Unauthorized",
    "NotFound",
    "ExecutionFailed",
    "VoteInProgress",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "NotificationError",
    "ConfigurationError",
]
