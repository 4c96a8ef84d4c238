"""Status poller - re-derives the current status once per tick.

There are no timers keyed to period boundaries: every tick analyzes the
current weekday's periods against the clock reading of that tick, and a
transition is whatever differs from the previous tick.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from src.school_timer.analyzer import analyze_schedule
from src.school_timer.logging import get_logger
from src.school_timer.models import CurrentStatus, WeeklySchedule
from src.school_timer.time_utils import weekday_index

logger = get_logger(__name__)


class StatusPoller:
    """Feeds today's periods from a weekly schedule to the analyzer.

    The schedule is treated as a read-only snapshot; update_schedule() swaps
    in a new one between ticks.
    """

    def __init__(
        self,
        schedule: WeeklySchedule,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.schedule = schedule
        self.clock = clock
        self.last_status: CurrentStatus | None = None

    def update_schedule(self, schedule: WeeklySchedule) -> None:
        self.schedule = schedule
        logger.info("schedule_updated", days=sorted(schedule))

    def tick(self, now: datetime | None = None) -> CurrentStatus:
        """Analyze one instant (default: a fresh clock reading)."""
        if now is None:
            now = self.clock()
        # Weekday and time of day come from the same reading
        periods = self.schedule.get(weekday_index(now), [])
        status = analyze_schedule(periods, now)

        previous = self.last_status
        if previous is None or _transitioned(previous, status):
            logger.info(
                "status_changed",
                status=status.status.value,
                period=status.current_period.name if status.current_period else None,
                next_period=status.next_period.name if status.next_period else None,
                previous=previous.status.value if previous else None,
            )
        self.last_status = status
        return status

    async def run(
        self,
        on_status: Callable[[CurrentStatus], None],
        interval: float = 1.0,
        stop_event: asyncio.Event | None = None,
        max_ticks: int | None = None,
    ) -> None:
        """Tick immediately, then every `interval` seconds.

        Stops when stop_event is set, after max_ticks ticks, or when the task
        is cancelled. Errors raised by on_status are logged and do not stop
        the loop.

        Args:
            on_status: Receives every derived status.
            interval: Seconds between ticks.
            stop_event: Optional event that ends the loop between ticks.
            max_ticks: Optional tick limit.
        """
        ticks = 0
        logger.info("poller_started", interval=interval)
        while stop_event is None or not stop_event.is_set():
            status = self.tick()
            try:
                on_status(status)
            except Exception:
                logger.exception("status_callback_failed", status=status.status.value)

            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break

            if stop_event is None:
                await asyncio.sleep(interval)
                continue
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
        logger.info("poller_stopped", ticks=ticks)


def _transitioned(previous: CurrentStatus, current: CurrentStatus) -> bool:
    if previous.status != current.status:
        return True
    previous_id = previous.current_period.id if previous.current_period else None
    current_id = current.current_period.id if current.current_period else None
    return previous_id != current_id
