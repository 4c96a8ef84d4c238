"""Shared fixtures for school timer tests."""

from datetime import datetime

import pytest

from src.school_timer.models import Period, PeriodType

# 2026-10-19 is a Monday (weekday index 1)
MONDAY = (2026, 10, 19)


def make_period(
    period_id: str,
    start: str,
    end: str,
    period_type: PeriodType = PeriodType.CLASS,
    name: str | None = None,
) -> Period:
    return Period(
        id=period_id,
        name=name or f"Period {period_id}",
        start_time=start,
        end_time=end,
        period_type=period_type,
    )


def monday_at(hour: int, minute: int, second: int = 0) -> datetime:
    return datetime(*MONDAY, hour, minute, second)


@pytest.fixture
def homeroom_and_first_class() -> list[Period]:
    return [
        make_period("homeroom", "08:40", "09:00", PeriodType.OTHER),
        make_period("p1", "09:00", "09:50"),
    ]


@pytest.fixture
def gapped_day() -> list[Period]:
    return [
        make_period("p1", "09:00", "09:50"),
        make_period("p2", "10:00", "10:50"),
    ]
