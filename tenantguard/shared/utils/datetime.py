"""
UTC datetime helpers.

Every timestamp the service writes (assignment grants, audit records) is
timezone-aware UTC. SQLite hands naive values back, so reads go through
ensure_utc at the repository boundary.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a datetime to UTC-aware.

    Naive values are assumed to already be UTC; aware values are converted.

    Args:
        dt: A datetime that may be naive or aware, or None

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_ago(days: int) -> datetime:
    """Return the UTC instant `days` days before now (retention cutoffs)."""
    return utc_now() - timedelta(days=days)
