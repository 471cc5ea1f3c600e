"""
Tests for consecutive-day streaks with the one-day grace gap.

Run with: python -m pytest tests/test_streak_tracker.py -v
"""

from datetime import datetime, timedelta, timezone


def _days(today, *offsets):
    return [today - timedelta(days=o) for o in offsets]


class TestCurrentStreak:
    """Tests for the streak ending at the as-of day."""

    def test_three_consecutive_days(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 0, 1, 2)]
        assert StreakTracker.current_streak(check_ins, today) == 3

    def test_single_missed_day_is_tolerated(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 0, 2)]
        assert StreakTracker.current_streak(check_ins, today) == 2

    def test_two_missed_days_break_the_streak(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 0, 3)]
        assert StreakTracker.current_streak(check_ins, today) == 1

    def test_streak_survives_until_today_is_logged(self, make_check_in, today):
        """Yesterday's check-in still counts when today has none yet."""
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 1, 2)]
        assert StreakTracker.current_streak(check_ins, today) == 2

    def test_no_recent_check_in(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 2, 3, 4)]
        assert StreakTracker.current_streak(check_ins, today) == 0

    def test_empty_history(self, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        assert StreakTracker.current_streak([], today) == 0

    def test_duplicate_and_future_entries_are_skipped(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [
            make_check_in(today + timedelta(days=1)),
            make_check_in(today),
            make_check_in(today),
            make_check_in(today - timedelta(days=1)),
        ]
        assert StreakTracker.current_streak(check_ins, today) == 2

    def test_order_of_input_does_not_matter(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 2, 0, 1)]
        assert StreakTracker.current_streak(check_ins, today) == 3

    def test_as_of_accepts_datetime(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 0, 1)]
        as_of = datetime(today.year, today.month, today.day, 23, 30, tzinfo=timezone.utc)
        assert StreakTracker.current_streak(check_ins, as_of) == 2


class TestStreakDates:
    """Tests for the dates making up the current streak."""

    def test_dates_are_ascending(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 0, 2, 3)]
        assert StreakTracker.streak_dates(check_ins, today) == _days(today, 3, 2, 0)

    def test_gap_days_fill_between_streak_dates(self, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        streak = _days(today, 3, 2, 0)
        assert StreakTracker.gap_days(streak) == _days(today, 1)
        assert StreakTracker.gap_days([]) == []


class TestLongestStreak:
    """Tests for the longest run anywhere in the history."""

    def test_older_run_is_longer(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        older = _days(today, 20, 19, 18, 17, 16, 15)
        check_ins = [make_check_in(d) for d in older + _days(today, 1, 0)]
        assert StreakTracker.longest_streak(check_ins, today) == 6

    def test_grace_applies_to_longest(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 10, 8, 6)]
        assert StreakTracker.longest_streak(check_ins) == 3

    def test_never_less_than_current(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        check_ins = [make_check_in(d) for d in _days(today, 4, 3, 2, 1, 0)]
        current = StreakTracker.current_streak(check_ins, today)
        assert StreakTracker.longest_streak(check_ins, today) >= current == 5

    def test_empty_history(self):
        from flect_analytics.services.streak_tracker import StreakTracker

        assert StreakTracker.longest_streak([]) == 0


class TestStreakState:
    def test_state_bundles_current_longest_and_dates(self, make_check_in, today):
        from flect_analytics.services.streak_tracker import StreakTracker

        older = _days(today, 30, 29, 28, 27)
        check_ins = [make_check_in(d) for d in older + _days(today, 1, 0)]
        state = StreakTracker.state(check_ins, today)

        assert state.current_streak == 2
        assert state.longest_streak == 4
        assert state.dates == _days(today, 1, 0)
