"""Schedule editing helpers used by the settings collaborator.

Builds default timetables, appends the next period of a day, cleans up
free-typed time input and copies one day's periods to other weekdays.
"""

import re
import secrets
import string
from collections.abc import Iterable

from src.school_timer.models import Period, PeriodType, SchoolLevel, WeeklySchedule
from src.school_timer.time_utils import add_minutes

BREAK_MINUTES = 10
DEFAULT_START = "09:00"
WEEKDAYS: tuple[int, ...] = (1, 2, 3, 4, 5)

_CLASS_NUMBER = re.compile(r"(\d+)교시")
_LEADING_INT = re.compile(r"^\s*[+-]?(\d+)")
_ID_ALPHABET = string.digits + string.ascii_lowercase


def class_duration(school_level: SchoolLevel) -> int:
    """Minutes per class: 45 for middle school, 50 for high school."""
    return 45 if school_level == "MIDDLE" else 50


def new_period_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


def create_default_schedule(minutes_per_class: int) -> list[Period]:
    """Homeroom, first class, a break and a second class starting 08:40."""
    first_end = add_minutes(DEFAULT_START, minutes_per_class)
    second_start = add_minutes(DEFAULT_START, minutes_per_class + BREAK_MINUTES)
    second_end = add_minutes(DEFAULT_START, minutes_per_class * 2 + BREAK_MINUTES)
    return [
        Period(
            id="1",
            name="조회",
            start_time="08:40",
            end_time=DEFAULT_START,
            period_type=PeriodType.OTHER,
        ),
        Period(
            id="2",
            name="1교시",
            start_time=DEFAULT_START,
            end_time=first_end,
            period_type=PeriodType.CLASS,
        ),
        Period(
            id="3",
            name="쉬는 시간",
            start_time=first_end,
            end_time=second_start,
            period_type=PeriodType.BREAK,
        ),
        Period(
            id="4",
            name="2교시",
            start_time=second_start,
            end_time=second_end,
            period_type=PeriodType.CLASS,
        ),
    ]


def _highest_class_number(periods: Iterable[Period]) -> int:
    highest = 0
    for period in periods:
        if period.period_type != PeriodType.CLASS:
            continue
        match = _CLASS_NUMBER.search(period.name) or _LEADING_INT.match(period.name)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def next_period(
    day_periods: list[Period],
    school_level: SchoolLevel,
    period_id: str | None = None,
) -> Period:
    """Build the period that follows the last one of a day.

    A class is followed by a 10 minute break; anything else (or an empty day)
    is followed by the next numbered class. The new period starts where the
    last one ends, or at 09:00 on an empty day.

    Args:
        day_periods: The day's periods in their current list order.
        school_level: Decides the class length.
        period_id: Id for the new period (default: random 9-char id).

    Raises:
        ValueError: If the last period's end time is malformed.
    """
    start = DEFAULT_START
    period_type = PeriodType.CLASS
    name = "1교시"

    if day_periods:
        last = day_periods[-1]
        start = last.end_time
        if last.period_type == PeriodType.CLASS:
            period_type = PeriodType.BREAK
            name = "쉬는 시간"
        else:
            name = f"{_highest_class_number(day_periods) + 1}교시"

    duration = class_duration(school_level) if period_type == PeriodType.CLASS else BREAK_MINUTES
    return Period(
        id=period_id or new_period_id(),
        name=name,
        start_time=start,
        end_time=add_minutes(start, duration),
        period_type=period_type,
    )


def normalize_time_input(raw: str) -> str | None:
    """Turn free-typed time input into a clamped "HH:MM" string.

    "9" -> "09:00", "900" -> "09:00", "1230" -> "12:30", "25:75" -> "23:59".
    Returns None when no hour/minute pair can be recovered.
    """
    clean = re.sub(r"[^\d:]", "", raw)

    if ":" not in clean:
        if len(clean) == 3:
            clean = f"0{clean[0]}:{clean[1:]}"
        elif len(clean) == 4:
            clean = f"{clean[:2]}:{clean[2:]}"
        elif len(clean) in (1, 2):
            clean = f"{clean.zfill(2)}:00"

    parts = clean.split(":")
    if len(parts) < 2:
        return None

    hours = int(parts[0]) if parts[0] else 0
    minutes = int(parts[1]) if parts[1] else 0
    hours = min(23, max(0, hours))
    minutes = min(59, max(0, minutes))
    return f"{hours:02d}:{minutes:02d}"


def copy_day(
    schedule: WeeklySchedule, source_day: int, target_days: Iterable[int]
) -> WeeklySchedule:
    """Return a new weekly schedule with source_day's periods copied to target_days."""
    source = schedule.get(source_day, [])
    copied = dict(schedule)
    for day in target_days:
        copied[day] = [period.model_copy(deep=True) for period in source]
    return copied


def default_copy_targets(source_day: int) -> list[int]:
    """Weekdays (Mon-Fri) other than the source day."""
    return [day for day in WEEKDAYS if day != source_day]


def sort_weekly(schedule: WeeklySchedule) -> WeeklySchedule:
    """Order each day's periods by their start-time string, as saved from the form."""
    return {
        day: sorted(periods, key=lambda p: p.start_time)
        for day, periods in schedule.items()
    }
