"""Schedule analyzer - classifies an instant against a day's periods.

analyze_schedule() is a pure function: each tick re-derives the state from
scratch, so a transition such as "period just ended" is only visible to the
caller as a changed status between two calls.

Interval matching is done on whole minutes while elapsed/remaining figures
use the seconds of "now". At 09:49:30 in a 09:00-09:50 period the remaining
time is therefore 30 s, and at 09:50:00 the next period takes over.
"""

from collections.abc import Sequence
from datetime import datetime

from src.school_timer.models import CurrentStatus, Period, ScheduleStatus
from src.school_timer.time_utils import (
    day_name,
    seconds_since_midnight,
    time_to_minutes,
    weekday_index,
)


def _finished(day: str) -> CurrentStatus:
    return CurrentStatus(
        status=ScheduleStatus.AFTER_SCHOOL,
        remaining_seconds=0,
        total_duration_seconds=1,
        elapsed_seconds=1,
        day_name=day,
    )


def analyze_schedule(
    periods: Sequence[Period] | None, now: datetime | None = None
) -> CurrentStatus:
    """Determine where `now` falls within today's periods.

    Args:
        periods: Today's periods, in any order. Overlaps and holes are allowed;
            periods with malformed times are never matched.
        now: Instant to evaluate (default: local wall clock). Its weekday
            provides the day name.

    Returns:
        CurrentStatus with one of the five ScheduleStatus values.
        totalDurationSeconds is never 0 so callers can divide by it.
    """
    if now is None:
        now = datetime.now()
    current_minutes = now.hour * 60 + now.minute
    now_seconds = seconds_since_midnight(now)
    today = day_name(weekday_index(now))

    if not periods:
        return CurrentStatus(
            status=ScheduleStatus.NO_SCHEDULE,
            remaining_seconds=0,
            total_duration_seconds=1,
            elapsed_seconds=0,
            day_name=today,
        )

    # sorted() is stable, so periods sharing a start minute keep their order
    ordered = sorted(periods, key=lambda p: time_to_minutes(p.start_time))

    first = ordered[0]
    first_start = time_to_minutes(first.start_time)
    if current_minutes < first_start:
        start_seconds = first_start * 60
        return CurrentStatus(
            next_period=first,
            status=ScheduleStatus.BEFORE_SCHOOL,
            remaining_seconds=start_seconds - now_seconds,
            # Progress denominator only, not a real duration
            total_duration_seconds=start_seconds,
            elapsed_seconds=0,
            day_name=today,
        )

    if current_minutes >= time_to_minutes(ordered[-1].end_time):
        return _finished(today)

    for index, period in enumerate(ordered):
        start_minutes = time_to_minutes(period.start_time)
        end_minutes = time_to_minutes(period.end_time)
        if start_minutes <= current_minutes < end_minutes:
            start_seconds = start_minutes * 60
            end_seconds = end_minutes * 60
            return CurrentStatus(
                current_period=period,
                next_period=ordered[index + 1] if index + 1 < len(ordered) else None,
                status=ScheduleStatus.ACTIVE,
                remaining_seconds=end_seconds - now_seconds,
                total_duration_seconds=end_seconds - start_seconds,
                elapsed_seconds=now_seconds - start_seconds,
                day_name=today,
            )

    # Hole between declared periods: count down to the next start
    upcoming = next(
        (p for p in ordered if time_to_minutes(p.start_time) > current_minutes),
        None,
    )
    if upcoming is None:
        return _finished(today)

    remaining = time_to_minutes(upcoming.start_time) * 60 - now_seconds
    return CurrentStatus(
        next_period=upcoming,
        status=ScheduleStatus.GAP,
        remaining_seconds=remaining,
        total_duration_seconds=remaining + 60,
        elapsed_seconds=60,
        day_name=today,
    )
