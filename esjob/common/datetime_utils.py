"""UTC datetime utilities.

Usage:
    from esjob.common.datetime_utils import utcnow, format_path_timestamp

    stamp = format_path_timestamp(utcnow())  # '2025-01-15-10-30-00'
"""

from datetime import UTC, datetime

# Second resolution, filesystem-safe (no colons or spaces)
PATH_TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


def utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Use this instead of datetime.now() or datetime.utcnow().

    Returns:
        Current time in UTC with timezone information.
    """
    return datetime.now(UTC)


def format_path_timestamp(dt: datetime) -> str:
    """Format datetime for use as a path segment.

    Aware datetimes are converted to UTC first; naive datetimes are
    formatted as given.

    Args:
        dt: Datetime to format

    Returns:
        Timestamp like '2025-01-15-10-30-00'
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return dt.strftime(PATH_TIMESTAMP_FORMAT)
