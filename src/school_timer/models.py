"""Pydantic models for schedule data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Attributes are snake_case in Python; the JSON wire format keeps the camelCase
keys of the stored documents (startTime, remainingSeconds, exportedAt, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

TimeFormat = Literal["12h", "24h"]
SchoolLevel = Literal["MIDDLE", "HIGH"]


class PeriodType(str, Enum):
    CLASS = "CLASS"
    BREAK = "BREAK"
    LUNCH = "LUNCH"
    OTHER = "OTHER"


class ScheduleStatus(str, Enum):
    """Classification of one instant against a day's periods."""

    ACTIVE = "active"
    BEFORE_SCHOOL = "before_school"
    AFTER_SCHOOL = "after_school"
    GAP = "gap"
    NO_SCHEDULE = "no_schedule"


class Period(BaseModel):
    """A named, typed, time-bounded segment of a school day.

    Times are not validated here: a malformed "HH:MM" string is kept as-is and
    the analyzer simply never matches it.
    """

    id: str  # Opaque, unique within one day's list
    name: str  # e.g. "1교시", "Lunch"
    start_time: str = Field(alias="startTime")  # "09:00"
    end_time: str = Field(alias="endTime")  # "09:50", same day as start
    period_type: PeriodType = Field(alias="type")

    model_config = {"populate_by_name": True, "frozen": True}


# Weekday index (0=Sunday .. 6=Saturday) -> periods of that day
WeeklySchedule = dict[int, list[Period]]


class CurrentStatus(BaseModel):
    """Result of one analyzer tick. Always a fresh value, never mutated."""

    current_period: Period | None = Field(default=None, alias="currentPeriod")
    next_period: Period | None = Field(default=None, alias="nextPeriod")
    status: ScheduleStatus
    remaining_seconds: int = Field(alias="remainingSeconds")
    total_duration_seconds: int = Field(alias="totalDurationSeconds")
    elapsed_seconds: int = Field(alias="elapsedSeconds")
    day_name: str = Field(default="", alias="dayName")

    model_config = {"populate_by_name": True, "frozen": True}


class AppPreferences(BaseModel):
    """Display preferences chosen in the settings form."""

    time_format: TimeFormat = Field(default="24h", alias="timeFormat")
    school_level: SchoolLevel = Field(default="HIGH", alias="schoolLevel")
    opacity: float = Field(default=0.7, ge=0.1, le=1.0)

    model_config = {"populate_by_name": True}


class Backup(BaseModel):
    """Export document written by the settings "download" action."""

    version: int = 1
    schedule: WeeklySchedule
    preferences: AppPreferences
    exported_at: datetime = Field(alias="exportedAt")

    model_config = {"populate_by_name": True}
