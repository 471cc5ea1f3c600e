from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def start_of_day(value: date | datetime) -> date:
    """Calendar day of a date or datetime (datetimes keep their own local day)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(earlier: date | datetime, later: date | datetime) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (start_of_day(later) - start_of_day(earlier)).days


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5  # Saturday=5, Sunday=6


def time_of_day(dt: datetime) -> str:
    """Bucket an hour into morning (<12), afternoon (<17) or evening."""
    if dt.hour < 12:
        return "morning"
    if dt.hour < 17:
        return "afternoon"
    return "evening"


def trailing_days(end: date, days: int) -> List[date]:
    """The ``days`` calendar days ending at ``end`` inclusive, oldest first."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
