"""Datetime utility functions."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from backoffice.config import settings

# Business timezone (from config): API responses and calendar-based numbering use it
LOCAL_TIMEZONE = ZoneInfo(settings.timezone)


def local_now() -> datetime:
    """Return the current time as an aware datetime in the business timezone."""
    return datetime.now(LOCAL_TIMEZONE)


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite returns stored UTC values without tzinfo)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def to_utc(dt: datetime) -> datetime:
    """Normalize a datetime to UTC for storage."""
    return ensure_aware(dt).astimezone(UTC)


def to_api_timezone(dt: datetime | None) -> datetime | None:
    """Convert a datetime to API timezone (from config).

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Datetime in API timezone, or None if input was None
    """
    if dt is None:
        return None
    return ensure_aware(dt).astimezone(LOCAL_TIMEZONE)
