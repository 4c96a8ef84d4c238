"""JSON persistence for the weekly schedule and preferences.

ScheduleStore keeps two files in a state directory, mirroring what the widget
stores locally: schedule.json (weekday -> periods) and preferences.json.
Backups bundle both into one document:

    {"version": 1, "schedule": {...}, "preferences": {...}, "exportedAt": "..."}

Everything is validated here so the analyzer only ever sees well-typed
Period lists. Load failures are logged and replaced with an empty schedule or
default preferences; they must never propagate into the tick loop.
"""

import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.school_timer.editor import WEEKDAYS
from src.school_timer.errors import BackupFormatError, StorageError
from src.school_timer.logging import get_logger
from src.school_timer.models import AppPreferences, Backup, Period, WeeklySchedule

logger = get_logger(__name__)

BACKUP_VERSION = 1
MIN_OPACITY = 0.1
MAX_OPACITY = 1.0

_schedule_adapter: TypeAdapter[WeeklySchedule] = TypeAdapter(WeeklySchedule)
_period_list_adapter: TypeAdapter[list[Period]] = TypeAdapter(list[Period])


def parse_weekly_schedule(data: Any) -> WeeklySchedule:
    """Validate a stored schedule document.

    Accepts the weekly mapping ({"1": [...], ...}) as well as the legacy
    single-day list, which is copied to Monday-Friday.

    Raises:
        BackupFormatError: If the document is not a valid schedule.
    """
    try:
        if isinstance(data, list):
            day = _period_list_adapter.validate_python(data)
            logger.info("legacy_schedule_migrated", periods=len(day))
            return {weekday: [p.model_copy(deep=True) for p in day] for weekday in WEEKDAYS}
        return _schedule_adapter.validate_python(data)
    except ValidationError as e:
        raise BackupFormatError(f"Invalid schedule: {e.error_count()} error(s)") from e


def parse_preferences(data: Any) -> AppPreferences:
    """Validate stored preferences, filling fields added after the first release.

    An out-of-range opacity is clamped to 0.1-1.0 rather than rejected.

    Raises:
        BackupFormatError: If the document is not a valid preferences object.
    """
    if not isinstance(data, dict):
        raise BackupFormatError("Invalid preferences: expected an object")

    data = dict(data)
    if not data.get("schoolLevel"):
        data["schoolLevel"] = "HIGH"
    opacity = data.get("opacity")
    if isinstance(opacity, bool) or not isinstance(opacity, (int, float)) or math.isnan(opacity):
        data["opacity"] = 0.7
    else:
        data["opacity"] = min(max(float(opacity), MIN_OPACITY), MAX_OPACITY)

    try:
        return AppPreferences.model_validate(data)
    except ValidationError as e:
        raise BackupFormatError(f"Invalid preferences: {e.error_count()} error(s)") from e


def dump_schedule(schedule: WeeklySchedule) -> dict[str, Any]:
    return _schedule_adapter.dump_python(schedule, mode="json", by_alias=True)


def dump_preferences(preferences: AppPreferences) -> dict[str, Any]:
    return preferences.model_dump(mode="json", by_alias=True)


def export_backup(
    schedule: WeeklySchedule,
    preferences: AppPreferences,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build a JSON-ready backup document."""
    backup = Backup(
        version=BACKUP_VERSION,
        schedule=schedule,
        preferences=preferences,
        exported_at=now or datetime.now(timezone.utc),
    )
    return backup.model_dump(mode="json", by_alias=True)


def backup_filename(now: datetime | None = None) -> str:
    """Default download name, e.g. school-timer-backup-2026-10-18.json."""
    now = now or datetime.now(timezone.utc)
    return f"school-timer-backup-{now.strftime('%Y-%m-%d')}.json"


def import_backup(data: Any) -> tuple[WeeklySchedule, AppPreferences]:
    """Extract schedule and preferences from a backup document.

    Raises:
        BackupFormatError: If either part is missing or invalid.
    """
    if not isinstance(data, dict) or data.get("schedule") is None or data.get("preferences") is None:
        raise BackupFormatError("Not a school timer backup: schedule and preferences are required")
    return parse_weekly_schedule(data["schedule"]), parse_preferences(data["preferences"])


def read_json(path: Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        StorageError: If the file cannot be read or is not valid JSON.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageError(f"Cannot read {path}: {e}") from e


def write_json(path: Path, data: Any) -> None:
    """Write data as indented UTF-8 JSON.

    Raises:
        StorageError: If the file cannot be written.
    """
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e}") from e


class ScheduleStore:
    """Loads and saves the schedule and preferences files of one state directory."""

    def __init__(self, state_dir: str = "data/state") -> None:
        """Initialize ScheduleStore.

        Args:
            state_dir: Directory to store schedule.json and preferences.json.
        """
        self.state_dir = Path(state_dir)
        self.schedule_file = self.state_dir / "schedule.json"
        self.preferences_file = self.state_dir / "preferences.json"

        self.state_dir.mkdir(parents=True, exist_ok=True)

        logger.info("schedule_store_initialized", state_dir=str(self.state_dir))

    def has_schedule(self) -> bool:
        """False for a first-time user who never saved a schedule."""
        return self.schedule_file.exists()

    def load_schedule(self) -> WeeklySchedule:
        """Load the weekly schedule, or an empty one if missing or corrupt.

        A legacy single-day file is migrated and rewritten in weekly form.
        """
        if not self.has_schedule():
            logger.debug("schedule_load", result="missing", path=str(self.schedule_file))
            return {}

        try:
            raw = read_json(self.schedule_file)
            schedule = parse_weekly_schedule(raw)
        except (StorageError, BackupFormatError) as e:
            logger.warning("schedule_load_failed", path=str(self.schedule_file), error=str(e))
            return {}

        if isinstance(raw, list):
            # The migrated schedule is used even if it cannot be written back
            try:
                write_json(self.schedule_file, dump_schedule(schedule))
            except StorageError as e:
                logger.warning(
                    "schedule_migration_write_failed",
                    path=str(self.schedule_file),
                    error=str(e),
                )

        logger.info(
            "schedule_loaded",
            days=sorted(schedule),
            periods=sum(len(periods) for periods in schedule.values()),
        )
        return schedule

    def load_preferences(self) -> AppPreferences:
        """Load preferences, or defaults if missing or corrupt."""
        if not self.preferences_file.exists():
            return AppPreferences()

        try:
            return parse_preferences(read_json(self.preferences_file))
        except (StorageError, BackupFormatError) as e:
            logger.warning(
                "preferences_load_failed", path=str(self.preferences_file), error=str(e)
            )
            return AppPreferences()

    def save(self, schedule: WeeklySchedule, preferences: AppPreferences) -> None:
        """Persist both documents.

        Raises:
            StorageError: If either file cannot be written.
        """
        write_json(self.schedule_file, dump_schedule(schedule))
        self.save_preferences(preferences)
        logger.info("schedule_saved", path=str(self.schedule_file), days=sorted(schedule))

    def save_preferences(self, preferences: AppPreferences) -> None:
        write_json(self.preferences_file, dump_preferences(preferences))
