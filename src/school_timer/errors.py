"""Error hierarchy for schedule storage and backup validation.

The analyzer never raises for malformed periods; these exceptions belong to
the persistence boundary, which rejects corrupt documents before they reach
the tick loop.

Example usage:
    try:
        schedule, preferences = import_backup(data)
    except BackupFormatError:
        log.warning("backup_rejected")
"""


class SchoolTimerError(Exception):
    """Base exception for all school timer errors."""

    pass


class StorageError(SchoolTimerError):
    """A state file could not be read, decoded or written.

    Examples: missing permissions, truncated JSON, full disk.
    """

    pass


class BackupFormatError(SchoolTimerError):
    """A schedule, preferences or backup document failed validation.

    Examples: missing "schedule" key, non-numeric weekday key, period without
    a name.
    """

    pass
