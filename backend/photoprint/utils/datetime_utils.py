"""Datetime utility functions."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from photoprint.config import settings

# Timezone for API responses (from config)
API_TIMEZONE = ZoneInfo(settings.timezone)

# Injectable "now" source, pinned in tests
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def from_timestamp_ns(timestamp_ns: int) -> datetime:
    """Convert a nanosecond POSIX timestamp (e.g. st_mtime_ns) to UTC datetime.

    Integer arithmetic keeps microsecond precision exact, which a float
    timestamp cannot guarantee.
    """
    seconds, nanoseconds = divmod(timestamp_ns, 1_000_000_000)
    return datetime.fromtimestamp(seconds, UTC) + timedelta(microseconds=nanoseconds // 1000)


def to_api_timezone(dt: datetime | None) -> datetime | None:
    """Convert a datetime to API timezone (from config).

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Datetime in API timezone, or None if input was None
    """
    if dt is None:
        return None
    # Ensure datetime is timezone-aware (assume UTC if naive)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(API_TIMEZONE)
