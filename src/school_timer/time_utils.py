"""Helpers for "HH:MM" wall-clock strings.

Shared by the analyzer (minute offsets), the editor helpers (chaining default
period boundaries) and the display layer (12h/24h formatting, countdowns).
"""

import math
from datetime import datetime

from src.school_timer.models import TimeFormat

MINUTES_PER_DAY = 24 * 60

# Sunday-first, same indexing as WeeklySchedule keys
DAY_NAMES: tuple[str, ...] = (
    "일요일",
    "월요일",
    "화요일",
    "수요일",
    "목요일",
    "금요일",
    "토요일",
)


def _to_int(part: str) -> int | None:
    # Blank means 0 ("9:" is 09:00); digit separators are not accepted
    part = part.strip()
    if not part:
        return 0
    if "_" in part:
        return None
    try:
        return int(part)
    except ValueError:
        return None


def _split_hhmm(time_str: str) -> tuple[int, int] | None:
    """Split "HH:MM" into integer hours and minutes, None if not numeric."""
    parts = time_str.split(":")
    if len(parts) < 2:
        return None
    hours, minutes = _to_int(parts[0]), _to_int(parts[1])
    if hours is None or minutes is None:
        return None
    return hours, minutes


def time_to_minutes(time_str: str) -> int | float:
    """Convert "HH:MM" to minutes after midnight.

    No range check is done ("25:99" gives 1599). Malformed input gives NaN, so
    every comparison against the result is False.
    """
    parsed = _split_hhmm(time_str)
    if parsed is None:
        return math.nan
    hours, minutes = parsed
    return hours * 60 + minutes


def add_minutes(time_str: str, minutes_to_add: int) -> str:
    """Shift "HH:MM" by a (possibly negative) number of minutes, wrapping at midnight.

    Raises:
        ValueError: If time_str is not of the form "HH:MM".
    """
    parsed = _split_hhmm(time_str)
    if parsed is None:
        raise ValueError(f"Bad time {time_str!r}, expected HH:MM")
    hours, minutes = parsed
    total = hours * 60 + minutes + minutes_to_add
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


def format_time_value(time_str: str, time_format: TimeFormat) -> str:
    """Format "HH:MM" for display.

    "24h" returns the string unchanged; "12h" gives e.g. "1:05 PM" with
    midnight shown as "12:00 AM". Unparsable strings are returned as-is.
    """
    if time_format == "24h":
        return time_str

    parsed = _split_hhmm(time_str)
    if parsed is None:
        return time_str
    hours, minutes = parsed
    suffix = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes:02d} {suffix}"


def day_name(day_index: int) -> str:
    """Localized weekday name for 0=Sunday .. 6=Saturday, "" when out of range."""
    if 0 <= day_index < len(DAY_NAMES):
        return DAY_NAMES[day_index]
    return ""


def weekday_index(moment: datetime) -> int:
    """Sunday-based weekday index (0=Sunday) of a datetime."""
    return (moment.weekday() + 1) % 7


def seconds_since_midnight(moment: datetime) -> int:
    return moment.hour * 3600 + moment.minute * 60 + moment.second


def format_seconds(seconds: int) -> str:
    """Countdown text "M:SS", minutes unbounded (e.g. 3725 -> "62:05")."""
    return f"{seconds // 60}:{seconds % 60:02d}"
