"""Show where you are in today's class schedule and count down to the next change.

Standalone CLI around the school timer package. Loads the weekly schedule and
preferences from the state directory, then prints one status line per second
until interrupted.

Run with:  python scripts/run_timer.py
Once:      python scripts/run_timer.py --once
JSON:      python scripts/run_timer.py --once --json --at 09:20
Table:     python scripts/run_timer.py --table --day 1
Template:  python scripts/run_timer.py --init-template 1
Backup:    python scripts/run_timer.py --export backups/
Restore:   python scripts/run_timer.py --import backups/school-timer-backup-2026-10-18.json

Day numbers: 0=Sunday, 1=Monday, ..., 6=Saturday.

Exit codes:
  0 = success
  1 = error (message on stderr)
"""

import argparse
import asyncio
import json
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.school_timer.config import get_config  # noqa: E402
from src.school_timer.display import render_line  # noqa: E402
from src.school_timer.editor import (  # noqa: E402
    class_duration,
    create_default_schedule,
    sort_weekly,
)
from src.school_timer.logging import setup_logging  # noqa: E402
from src.school_timer.models import AppPreferences, CurrentStatus, Period  # noqa: E402
from src.school_timer.poller import StatusPoller  # noqa: E402
from src.school_timer.storage import (  # noqa: E402
    ScheduleStore,
    backup_filename,
    export_backup,
    import_backup,
    read_json,
    write_json,
)
from src.school_timer.time_utils import (  # noqa: E402
    day_name,
    format_time_value,
    weekday_index,
)


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _day_arg(value: str) -> int:
    day = int(value)
    if not 0 <= day <= 6:
        raise argparse.ArgumentTypeError("day must be between 0 (Sunday) and 6 (Saturday)")
    return day


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Show the current position in the weekly class schedule.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--state-dir",
        type=str,
        default=None,
        help="Directory with schedule.json and preferences.json (default: from config).",
    )
    parser.add_argument(
        "--at",
        type=str,
        default=None,
        help="Evaluate a fixed time today instead of the clock (HH:MM or HH:MM:SS).",
    )
    parser.add_argument(
        "--day",
        type=_day_arg,
        default=None,
        help="Weekday to use with --at or --table (0=Sunday .. 6=Saturday).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print status as JSON instead of a text line.",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--once",
        action="store_true",
        help="Print a single status and exit.",
    )
    mode_group.add_argument(
        "--table",
        action="store_true",
        help="Print the periods of a day as a table.",
    )
    mode_group.add_argument(
        "--init-template",
        type=_day_arg,
        default=None,
        metavar="DAY",
        help="Replace a weekday's periods with the default timetable.",
    )
    mode_group.add_argument(
        "--export",
        type=str,
        default=None,
        metavar="PATH",
        help="Write a backup file (a directory gets the default file name).",
    )
    mode_group.add_argument(
        "--import",
        dest="import_path",
        type=str,
        default=None,
        metavar="PATH",
        help="Restore schedule and preferences from a backup file.",
    )
    return parser.parse_args()


def _resolve_now(at: str | None, day: int | None) -> datetime | None:
    """Build the instant for --at/--day, or None to follow the clock."""
    if at is None and day is None:
        return None

    now = datetime.now().replace(microsecond=0)
    if at is not None:
        parts = [int(p) for p in at.split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(f"Bad --at value {at!r}, expected HH:MM or HH:MM:SS")
        hour, minute = parts[0], parts[1]
        second = parts[2] if len(parts) == 3 else 0
        now = now.replace(hour=hour, minute=minute, second=second)
    if day is not None:
        now += timedelta(days=(day - weekday_index(now)) % 7)
    return now


def _format_table(periods: list[Period], preferences: AppPreferences) -> str:
    """Format a day's periods as a human-readable table.

    Columns: Start | End | Type | Name
    """
    if not periods:
        return "(no periods scheduled)"

    headers = ["Start", "End", "Type", "Name"]
    rows = [
        [
            format_time_value(p.start_time, preferences.time_format),
            format_time_value(p.end_time, preferences.time_format),
            p.period_type.value,
            p.name,
        ]
        for p in periods
    ]

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows
    ]
    return "\n".join([header_line, separator, *row_lines])


def _print_status(status: CurrentStatus, preferences: AppPreferences, as_json: bool) -> None:
    if as_json:
        print(json.dumps(status.model_dump(mode="json", by_alias=True), ensure_ascii=False))
    else:
        print(render_line(status, preferences), flush=True)


async def main(args: argparse.Namespace) -> None:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    store = ScheduleStore(args.state_dir or config.state_dir)
    schedule = store.load_schedule()
    preferences = store.load_preferences()

    if args.init_template is not None:
        day = args.init_template
        schedule = dict(schedule)
        schedule[day] = create_default_schedule(class_duration(preferences.school_level))
        store.save(sort_weekly(schedule), preferences)
        _log(f"  Default timetable written for {day_name(day)} ({day})")
        return

    if args.export is not None:
        target = Path(args.export)
        if target.is_dir():
            target = target / backup_filename()
        target.parent.mkdir(parents=True, exist_ok=True)
        write_json(target, export_backup(schedule, preferences))
        _log(f"  Backup written -> {target}")
        return

    if args.import_path is not None:
        schedule, preferences = import_backup(read_json(Path(args.import_path)))
        store.save(sort_weekly(schedule), preferences)
        _log(f"  Restored {sum(len(p) for p in schedule.values())} periods from {args.import_path}")
        return

    if not store.has_schedule():
        _log("  No schedule saved yet. Try --init-template 1 or --import PATH.")

    fixed_now = _resolve_now(args.at, args.day)

    if args.table:
        day = weekday_index(fixed_now or datetime.now())
        print(_format_table(sort_weekly(schedule).get(day, []), preferences))
        return

    poller = StatusPoller(schedule)
    if args.once or fixed_now is not None:
        _print_status(poller.tick(fixed_now), preferences, args.json)
        return

    await poller.run(
        lambda status: _print_status(status, preferences, args.json),
        interval=config.tick_interval_seconds,
    )


if __name__ == "__main__":
    args = _parse_args()
    try:
        asyncio.run(main(args))
    except KeyboardInterrupt:
        _log("run_timer: stopped")
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
