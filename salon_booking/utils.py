"""Shared time and date helpers used across the booking engine."""

import re
from datetime import date, datetime

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def time_to_minutes(value: str) -> int:
    """Convert a 24-hour ``HH:MM`` string to minutes since midnight.

    Examples:
        >>> time_to_minutes("09:30")
        570
        >>> time_to_minutes("00:00")
        0
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time (expected HH:MM): {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded ``HH:MM`` string.

    Examples:
        >>> minutes_to_time(570)
        '09:30'
        >>> minutes_to_time(1050)
        '17:30'
    """
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def is_valid_time(value: str) -> bool:
    return bool(_TIME_RE.match(value.strip()))


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date (no timezone)."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from None


def format_time_12h(value: str) -> str:
    """Convert a 24-hour ``HH:MM`` time to a 12-hour label.

    Examples:
        >>> format_time_12h("13:05")
        '1:05 PM'
        >>> format_time_12h("00:30")
        '12:30 AM'
    """
    if not value:
        return ""
    total = time_to_minutes(value)
    hour, minute = divmod(total, 60)
    suffix = "PM" if hour >= 12 else "AM"
    display = hour % 12 or 12
    return f"{display}:{minute:02d} {suffix}"
