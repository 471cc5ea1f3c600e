"""Shared fixtures: a fixed clock and check-in factories."""

from datetime import date, datetime, time, timedelta, timezone

import pytest


# Friday
TODAY = date(2024, 6, 14)
NOW = datetime(2024, 6, 14, 21, 0, tzinfo=timezone.utc)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_check_in():
    """Build a CheckIn for ``day``; created at 20:00 UTC unless overridden."""
    from flect_analytics.schemas.checkin import CheckIn

    def _make(day: date, **kwargs):
        kwargs.setdefault("created_at", datetime.combine(day, time(20, 0), tzinfo=timezone.utc))
        return CheckIn(date=day, **kwargs)

    return _make


@pytest.fixture
def daily_check_ins(make_check_in):
    """``count`` consecutive daily check-ins ending on ``end`` (oldest first)."""

    def _make(count: int, end: date = TODAY, **kwargs):
        return [make_check_in(end - timedelta(days=offset), **kwargs) for offset in range(count - 1, -1, -1)]

    return _make


@pytest.fixture
def low_mood():
    """Fields that score about 0.53 (pending, negative happy text, sad label)."""
    from flect_analytics.schemas.checkin import CheckInState

    return {
        "happy_text": "sad awful",
        "improve_text": "great",
        "mood": "Sad",
        "completion_state": CheckInState.PENDING,
    }


@pytest.fixture
def high_mood():
    """Fields that clamp to a score of 1.0."""
    from flect_analytics.schemas.checkin import CheckInState

    return {
        "happy_text": "great love",
        "improve_text": "",
        "mood": "Great",
        "completion_state": CheckInState.PENDING,
    }
