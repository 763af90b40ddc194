"""
Time utilities.

All timestamps recorded by the ledger and written by sinks are timezone-aware
UTC datetimes, serialized as ISO 8601.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as a UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(ts: datetime) -> datetime:
    """
    Normalize a datetime to UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: Optional[datetime] = None) -> str:
    """Format a timestamp (default: now) as ISO 8601 UTC."""
    return ensure_utc(ts or utc_now()).isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string into a UTC datetime, passing None through."""
    if not value:
        return None
    return ensure_utc(datetime.fromisoformat(value))
