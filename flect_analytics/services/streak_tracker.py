from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

from flect_analytics.schemas.checkin import CheckIn
from flect_analytics.schemas.engagement import StreakState
from flect_analytics.utils.date_utils import days_between, start_of_day

DateLike = Union[date, datetime]


class StreakTracker:
    """Consecutive-day streaks with a one-day grace gap.

    A single skipped day does not break a streak, so a user who checks in late
    at night across a day boundary keeps it. Two or more missed days do.
    """

    GRACE_DAYS = 1

    @staticmethod
    def _as_of(as_of: Optional[DateLike]) -> date:
        return start_of_day(as_of) if as_of is not None else date.today()

    @classmethod
    def _walk(cls, check_ins: Iterable[CheckIn], as_of: Optional[DateLike]) -> List[date]:
        """Dates counted toward the current streak, most recent first."""
        cursor = cls._as_of(as_of)
        counted: List[date] = []

        for check_in in sorted(check_ins, key=lambda c: c.date, reverse=True):
            day = start_of_day(check_in.date)
            if day == cursor:
                counted.append(day)
                cursor = cursor - timedelta(days=1)
            elif day < cursor:
                if days_between(day, cursor) <= cls.GRACE_DAYS:
                    counted.append(day)
                    cursor = day - timedelta(days=1)
                else:
                    break
            # Dates after the cursor are duplicates or future entries

        return counted

    @classmethod
    def current_streak(cls, check_ins: Iterable[CheckIn], as_of: Optional[DateLike] = None) -> int:
        return len(cls._walk(check_ins, as_of))

    @classmethod
    def streak_dates(cls, check_ins: Iterable[CheckIn], as_of: Optional[DateLike] = None) -> List[date]:
        return sorted(cls._walk(check_ins, as_of))

    @classmethod
    def longest_streak(cls, check_ins: Iterable[CheckIn], as_of: Optional[DateLike] = None) -> int:
        """Longest run anywhere in the history, same grace rule as the current streak."""
        check_ins = list(check_ins)
        days = sorted({start_of_day(c.date) for c in check_ins})

        longest = 0
        run = 0
        previous: Optional[date] = None
        for day in days:
            if previous is not None and days_between(previous, day) <= cls.GRACE_DAYS + 1:
                run += 1
            else:
                run = 1
            longest = max(longest, run)
            previous = day

        if as_of is not None:
            longest = max(longest, cls.current_streak(check_ins, as_of))
        return longest

    @classmethod
    def gap_days(cls, streak_dates: Sequence[date]) -> List[date]:
        """Missed days bridged by the grace rule inside an ascending streak."""
        gaps: List[date] = []
        for earlier, later in zip(streak_dates, streak_dates[1:]):
            day = earlier + timedelta(days=1)
            while day < later:
                gaps.append(day)
                day += timedelta(days=1)
        return gaps

    @classmethod
    def state(cls, check_ins: Iterable[CheckIn], as_of: Optional[DateLike] = None) -> StreakState:
        check_ins = list(check_ins)
        dates = cls.streak_dates(check_ins, as_of)
        return StreakState(
            current_streak=len(dates),
            longest_streak=cls.longest_streak(check_ins, cls._as_of(as_of)),
            dates=dates,
        )
