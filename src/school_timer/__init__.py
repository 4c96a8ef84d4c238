"""Weekly class schedule timer.

Tells where the current instant falls within today's periods (class, break,
lunch) and how long until the next transition.
"""

from src.school_timer.analyzer import analyze_schedule
from src.school_timer.models import (
    AppPreferences,
    CurrentStatus,
    Period,
    PeriodType,
    ScheduleStatus,
    WeeklySchedule,
)
from src.school_timer.poller import StatusPoller
from src.school_timer.storage import ScheduleStore

__all__ = [
    "analyze_schedule",
    "AppPreferences",
    "CurrentStatus",
    "Period",
    "PeriodType",
    "ScheduleStatus",
    "ScheduleStore",
    "StatusPoller",
    "WeeklySchedule",
]
