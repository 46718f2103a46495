"""General utility functions."""
from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def epoch_seconds(dt: datetime) -> int:
    """Whole seconds since the Unix epoch for a (possibly naive UTC) datetime."""
    return int(to_utc(dt).timestamp())


def isoformat_utc(dt):
    """Render a stored datetime as an ISO 8601 UTC string (None passes through)."""
    if dt is None:
        return None
    return to_utc(dt).isoformat()
