"""Timestamp helpers.

All stored timestamps are UTC. SQLite drops tzinfo on write, so incoming
timestamps are normalized before they reach the store.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime:
    """Normalize a client-supplied timestamp to UTC, defaulting to now."""
    if value is None:
        return utcnow()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
