"""Time utilities (UTC)."""

from datetime import datetime, timezone


def now_utc_naive() -> datetime:
    """
    Current time in UTC, returned as naive datetime for DB storage.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_iso(dt: datetime) -> str:
    """Return ISO string with offset, treating naive values as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()
