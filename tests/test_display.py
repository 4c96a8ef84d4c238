"""
Tests for status text rendering.
"""

from conftest import monday_at

from src.school_timer.analyzer import analyze_schedule
from src.school_timer.display import (
    main_text,
    progress_percentage,
    render_line,
    shows_countdown,
    sub_text,
)
from src.school_timer.models import AppPreferences, CurrentStatus, ScheduleStatus


def test_active_texts(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(9, 20))

    assert main_text(status) == "Period p1"
    assert sub_text(status, "24h") == "09:00 - 09:50"
    assert sub_text(status, "12h") == "9:00 AM - 9:50 AM"
    assert progress_percentage(status) == 40.0
    assert shows_countdown(status)


def test_before_school_texts(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(8, 0))

    assert main_text(status) == "등교 전"
    assert sub_text(status, "12h") == "첫 수업: 8:40 AM"
    assert shows_countdown(status)


def test_gap_texts(gapped_day):
    status = analyze_schedule(gapped_day, monday_at(9, 55))

    assert main_text(status) == "쉬는 시간"
    assert sub_text(status, "24h") == "다음: Period p2"


def test_closed_states_hide_countdown(gapped_day):
    after = analyze_schedule(gapped_day, monday_at(18, 0))
    empty = analyze_schedule([], monday_at(18, 0))

    assert main_text(after) == "일과 종료"
    assert sub_text(after, "24h") == "수고했어요!"
    assert main_text(empty) == "일정 없음"
    assert sub_text(empty, "24h") == "휴일/일정없음"
    assert not shows_countdown(after)
    assert not shows_countdown(empty)


def test_progress_is_clamped_and_safe():
    zero_total = CurrentStatus(
        status=ScheduleStatus.ACTIVE,
        remaining_seconds=0,
        total_duration_seconds=0,
        elapsed_seconds=10,
    )
    overrun = CurrentStatus(
        status=ScheduleStatus.ACTIVE,
        remaining_seconds=0,
        total_duration_seconds=10,
        elapsed_seconds=20,
    )
    assert progress_percentage(zero_total) == 0.0
    assert progress_percentage(overrun) == 100.0


def test_render_line(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(9, 20))
    line = render_line(status, AppPreferences())

    assert line == "[월요일] Period p1 | 09:00 - 09:50 | 30:00 (40%)"


def test_render_line_without_countdown(gapped_day):
    status = analyze_schedule(gapped_day, monday_at(18, 0))
    assert render_line(status, AppPreferences()).endswith("| --:--")
