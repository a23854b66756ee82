"""Time helpers"""

import time
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_epoch_ms(moment: datetime) -> int:
    """Convert datetime to epoch milliseconds (naive values are treated as UTC)"""
    return (ensure_utc(moment) - EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(value: int | float) -> datetime:
    """Convert epoch milliseconds to a UTC datetime"""
    return EPOCH + timedelta(milliseconds=value)


def truncate_to_ms(moment: datetime) -> datetime:
    """Drop sub-millisecond precision so every record store keeps the value exactly"""
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def elapsed_ms(start_time: float) -> float:
    """Milliseconds since a time.time() reading"""
    return (time.time() - start_time) * 1000
