"""
Tests for the schedule analyzer.
"""

from conftest import make_period, monday_at

from src.school_timer.analyzer import analyze_schedule
from src.school_timer.models import PeriodType, ScheduleStatus


def test_empty_schedule():
    status = analyze_schedule([], monday_at(10, 0))

    assert status.status == ScheduleStatus.NO_SCHEDULE
    assert status.total_duration_seconds == 1
    assert status.remaining_seconds == 0
    assert status.elapsed_seconds == 0
    assert status.current_period is None
    assert status.next_period is None
    assert status.day_name == "월요일"


def test_none_schedule_is_empty():
    assert analyze_schedule(None, monday_at(10, 0)).status == ScheduleStatus.NO_SCHEDULE


def test_before_school(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(8, 30))

    assert status.status == ScheduleStatus.BEFORE_SCHOOL
    assert status.next_period.id == "homeroom"
    assert status.current_period is None
    assert status.remaining_seconds == 600
    # Start of the first period in seconds, used as a progress denominator
    assert status.total_duration_seconds == (8 * 60 + 40) * 60
    assert status.elapsed_seconds == 0


def test_before_school_counts_seconds(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(8, 39, 45))

    assert status.status == ScheduleStatus.BEFORE_SCHOOL
    assert status.remaining_seconds == 15


def test_active_period(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(9, 20))

    assert status.status == ScheduleStatus.ACTIVE
    assert status.current_period.id == "p1"
    assert status.next_period is None
    assert status.elapsed_seconds == 1200
    assert status.remaining_seconds == 1800
    assert status.total_duration_seconds == 3000


def test_active_period_has_following_period(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(8, 45, 30))

    assert status.current_period.id == "homeroom"
    assert status.next_period.id == "p1"
    assert status.elapsed_seconds == 330
    assert status.remaining_seconds == 870


def test_boundary_minute_belongs_to_next_period(homeroom_and_first_class):
    last_second = analyze_schedule(homeroom_and_first_class, monday_at(8, 59, 59))
    assert last_second.current_period.id == "homeroom"
    assert last_second.remaining_seconds == 1

    on_the_minute = analyze_schedule(homeroom_and_first_class, monday_at(9, 0))
    assert on_the_minute.current_period.id == "p1"
    assert on_the_minute.elapsed_seconds == 0


def test_gap_between_periods(gapped_day):
    status = analyze_schedule(gapped_day, monday_at(9, 55))

    assert status.status == ScheduleStatus.GAP
    assert status.next_period.id == "p2"
    assert status.current_period is None
    assert status.remaining_seconds == 300
    assert status.total_duration_seconds == 360
    assert status.elapsed_seconds == 60


def test_after_school(gapped_day):
    for moment in (monday_at(10, 50), monday_at(15, 0), monday_at(23, 59, 59)):
        status = analyze_schedule(gapped_day, moment)
        assert status.status == ScheduleStatus.AFTER_SCHOOL
        assert status.current_period is None
        assert status.next_period is None
        assert status.remaining_seconds == 0
        assert status.total_duration_seconds == 1
        assert status.elapsed_seconds == 1


def test_after_school_uses_end_of_latest_starting_period():
    # The last period by start time ends before an earlier, longer one.
    periods = [
        make_period("long", "09:00", "12:00"),
        make_period("short", "10:00", "10:30"),
    ]
    status = analyze_schedule(periods, monday_at(11, 0))
    assert status.status == ScheduleStatus.AFTER_SCHOOL


def test_unsorted_input_is_sorted_without_mutation(gapped_day):
    reversed_day = list(reversed(gapped_day))
    status = analyze_schedule(reversed_day, monday_at(8, 0))

    assert status.next_period.id == "p1"
    assert [p.id for p in reversed_day] == ["p2", "p1"]


def test_overlap_picks_earliest_in_sorted_order():
    periods = [
        make_period("late", "09:30", "10:30"),
        make_period("early", "09:00", "10:00"),
    ]
    status = analyze_schedule(periods, monday_at(9, 45))

    assert status.current_period.id == "early"
    assert status.next_period.id == "late"


def test_shared_start_keeps_input_order():
    periods = [
        make_period("a", "09:00", "09:50"),
        make_period("b", "09:00", "09:30", PeriodType.OTHER),
    ]
    status = analyze_schedule(periods, monday_at(9, 10))

    assert status.current_period.id == "a"
    assert status.next_period.id == "b"


def test_malformed_period_is_never_matched():
    periods = [
        make_period("p1", "09:00", "09:50"),
        make_period("broken", "ab:cd", "10:50"),
        make_period("p3", "11:00", "11:50"),
    ]

    assert analyze_schedule(periods, monday_at(9, 10)).current_period.id == "p1"
    gap = analyze_schedule(periods, monday_at(10, 0))
    assert gap.status == ScheduleStatus.GAP
    assert gap.next_period.id == "p3"


def test_only_malformed_periods_fall_back_to_after_school():
    periods = [make_period("broken", "later", "never")]
    status = analyze_schedule(periods, monday_at(10, 0))
    assert status.status == ScheduleStatus.AFTER_SCHOOL


def test_identical_inputs_give_identical_results(gapped_day):
    first = analyze_schedule(gapped_day, monday_at(9, 20, 13))
    second = analyze_schedule(gapped_day, monday_at(9, 20, 13))

    assert first == second
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_status_serializes_with_camel_case_keys(homeroom_and_first_class):
    status = analyze_schedule(homeroom_and_first_class, monday_at(9, 20))
    data = status.model_dump(mode="json", by_alias=True)

    assert data["status"] == "active"
    assert data["remainingSeconds"] == 1800
    assert data["currentPeriod"]["startTime"] == "09:00"
    assert data["currentPeriod"]["type"] == "CLASS"
    assert data["dayName"] == "월요일"
