"""Datetime helpers shared across the reminder subsystem."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Ensure a datetime is timezone aware.

    Naive values are assumed to already be in UTC (this is how they come back
    from databases that drop the offset); aware values are converted to UTC.

    :param value: The datetime to normalise.
    :returns: A timezone-aware UTC datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
