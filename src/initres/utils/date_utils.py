import re
from datetime import datetime, timedelta, timezone

_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensures a datetime object is timezone-aware and in UTC.
    If input is naive, it assumes UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_unix_millis(dt: datetime) -> int:
    """Converts a datetime to milliseconds since the epoch, as the metrics backend expects."""
    return int(ensure_utc(dt).timestamp() * 1000)


def parse_duration(value: str) -> timedelta:
    """Parses a duration string (e.g., '30m', '12h', '7d') into a timedelta."""
    match = re.match(r"^(\d+)([smhd])$", value.strip().lower())
    if not match:
        raise ValueError(f"Invalid duration '{value}'. Use a number followed by 's', 'm', 'h' or 'd'.")

    amount, unit = int(match.group(1)), match.group(2)
    return timedelta(**{_DURATION_UNITS[unit]: amount})
