"""Helpers for working with UTC datetimes across the storage boundary."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def now_utc_naive() -> datetime:
    """Return the current UTC time without ``tzinfo``.

    Used as column default: SQLite and SQL Server ``DATETIME`` columns drop the
    offset, so every persisted value is stored as naive UTC.
    """

    return now_utc().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` to an aware UTC datetime; naive values are taken as UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_naive(value: datetime | None) -> datetime | None:
    """Return ``value`` expressed in UTC with ``tzinfo`` stripped."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def to_ticks(value: datetime) -> int:
    """Return a monotonic-ish integer stamp (100ns units since epoch) for ids."""

    return int(ensure_utc(value).timestamp() * 10_000_000)
