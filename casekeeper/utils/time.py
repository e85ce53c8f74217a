"""Timestamp helpers.

All stored timestamps are timezone-aware UTC datetimes. Values typed in by a
user (no offset) are read as local time.
"""

from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

Clock = Callable[[], datetime]
TimestampLike = Union[str, datetime]


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Today's local date as YYYY-MM-DD."""
    return date.today().isoformat()


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC (naive values are local time)."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc)


def parse_timestamp(value: TimestampLike) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts datetime objects, full ISO strings (a trailing "Z" is allowed),
    and HTML-style local datetime input such as "2025-01-15T10:30".

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a timestamp: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


def parse_optional_timestamp(value: Optional[TimestampLike]) -> Optional[datetime]:
    """Parse a timestamp, passing None (and empty strings) through."""
    if value is None or value == "":
        return None
    return parse_timestamp(value)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp for storage."""
    if value is None:
        return None
    return to_utc(value).isoformat()


def resolve_now(now: Union[datetime, Clock, None] = None) -> datetime:
    """Turn an injected `now` (datetime, clock callable or None) into a datetime."""
    if now is None:
        return utc_now()
    if callable(now):
        return to_utc(now())
    return to_utc(now)


def format_duration(seconds: int) -> str:
    """Format a number of seconds as HH:MM:SS."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_datetime(value: Optional[datetime]) -> str:
    """Format a timestamp as local "YYYY-MM-DD HH:MM" for display."""
    if value is None:
        return ""
    return to_utc(value).astimezone().strftime("%Y-%m-%d %H:%M")
