"""Text rendering of a CurrentStatus for terminal output."""

from src.school_timer.models import AppPreferences, CurrentStatus, ScheduleStatus, TimeFormat
from src.school_timer.time_utils import format_seconds, format_time_value

_COUNTDOWN_STATES = frozenset(
    {ScheduleStatus.ACTIVE, ScheduleStatus.BEFORE_SCHOOL, ScheduleStatus.GAP}
)

_HEADLINES: dict[ScheduleStatus, str] = {
    ScheduleStatus.NO_SCHEDULE: "일정 없음",
    ScheduleStatus.BEFORE_SCHOOL: "등교 전",
    ScheduleStatus.AFTER_SCHOOL: "일과 종료",
    ScheduleStatus.GAP: "쉬는 시간",
}


def main_text(status: CurrentStatus) -> str:
    """Headline: the active period's name, or a label for the other states."""
    if status.status in _HEADLINES:
        return _HEADLINES[status.status]
    return status.current_period.name if status.current_period else "Unknown"


def sub_text(status: CurrentStatus, time_format: TimeFormat) -> str:
    if status.status == ScheduleStatus.NO_SCHEDULE:
        return "휴일/일정없음"
    if status.status == ScheduleStatus.BEFORE_SCHOOL and status.next_period:
        return f"첫 수업: {format_time_value(status.next_period.start_time, time_format)}"
    if status.status == ScheduleStatus.AFTER_SCHOOL:
        return "수고했어요!"
    if status.status == ScheduleStatus.GAP and status.next_period:
        return f"다음: {status.next_period.name}"
    if status.current_period:
        start = format_time_value(status.current_period.start_time, time_format)
        end = format_time_value(status.current_period.end_time, time_format)
        return f"{start} - {end}"
    return ""


def progress_percentage(status: CurrentStatus) -> float:
    """Elapsed share of the total in percent, clamped to 0-100."""
    if status.total_duration_seconds == 0:
        return 0.0
    pct = status.elapsed_seconds * 100 / status.total_duration_seconds
    return min(max(pct, 0.0), 100.0)


def shows_countdown(status: CurrentStatus) -> bool:
    return status.status in _COUNTDOWN_STATES


def render_line(status: CurrentStatus, preferences: AppPreferences) -> str:
    """One-line summary, e.g. "[월요일] 1교시 | 09:00 - 09:50 | 30:00 (40%)"."""
    countdown = "--:--"
    if shows_countdown(status):
        countdown = format_seconds(status.remaining_seconds)
        if status.status == ScheduleStatus.ACTIVE:
            countdown += f" ({progress_percentage(status):.0f}%)"
    return (
        f"[{status.day_name}] {main_text(status)} | "
        f"{sub_text(status, preferences.time_format)} | {countdown}"
    )
