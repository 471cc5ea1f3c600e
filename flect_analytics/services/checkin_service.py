from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from flect_analytics.schemas.checkin import CheckIn, CheckInCreate, CheckInState
from flect_analytics.schemas.engagement import CalendarDayState
from flect_analytics.schemas.insight import Insight
from flect_analytics.services.streak_tracker import StreakTracker
from flect_analytics.utils.date_utils import ensure_aware, trailing_days, utcnow

logger = logging.getLogger(__name__)


class CheckinService:
    """Helpers over a caller-owned list of check-ins.

    Nothing here holds state; every method takes the current snapshot and
    returns new values.
    """

    @staticmethod
    def submit(payload: CheckInCreate, *, now: Optional[datetime] = None) -> CheckIn:
        current = ensure_aware(now or utcnow())
        data = payload.model_dump(exclude={"date"})
        check_in = CheckIn(
            **data,
            date=payload.date or current.date(),
            completion_state=CheckInState.COMPLETED,
            created_at=current,
            updated_at=current,
        )
        logger.info(f"Check-in submitted for {check_in.date} (mood={check_in.mood})")
        return check_in

    @staticmethod
    def upsert(check_ins: Iterable[CheckIn], check_in: CheckIn) -> List[CheckIn]:
        """Replace any entry for the same day, newest day first."""
        kept = [c for c in check_ins if c.date != check_in.date]
        kept.append(check_in)
        return sorted(kept, key=lambda c: c.date, reverse=True)

    @staticmethod
    def check_in_for_date(check_ins: Iterable[CheckIn], day: date) -> Optional[CheckIn]:
        matches = [c for c in check_ins if c.date == day]
        if not matches:
            return None
        # Latest edit wins when a day has more than one entry
        return max(matches, key=lambda c: ensure_aware(c.updated_at))

    @classmethod
    def todays_check_in(cls, check_ins: Iterable[CheckIn], today: Optional[date] = None) -> Optional[CheckIn]:
        return cls.check_in_for_date(check_ins, today or date.today())

    @classmethod
    def has_checked_in_today(cls, check_ins: Iterable[CheckIn], today: Optional[date] = None) -> bool:
        return cls.todays_check_in(check_ins, today) is not None

    @staticmethod
    def recent(check_ins: Iterable[CheckIn], limit: int = 10) -> List[CheckIn]:
        ordered = sorted(check_ins, key=lambda c: (c.date, ensure_aware(c.created_at)), reverse=True)
        return ordered[:max(limit, 0)]

    @staticmethod
    def _touch(check_in: CheckIn, now: Optional[datetime]) -> datetime:
        current = ensure_aware(now or utcnow())
        return max(current, ensure_aware(check_in.created_at))

    @classmethod
    def attach_ai_response(
        cls,
        check_in: CheckIn,
        response: str,
        question: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> CheckIn:
        return check_in.model_copy(
            update={
                "ai_response": response,
                "ai_question_asked": question if question is not None else response,
                "completion_state": CheckInState.FOLLOW_UP_PENDING,
                "updated_at": cls._touch(check_in, now),
            }
        )

    @classmethod
    def complete_follow_up(cls, check_in: CheckIn, *, now: Optional[datetime] = None) -> CheckIn:
        return check_in.model_copy(
            update={
                "follow_up_completed": True,
                "completion_state": CheckInState.FOLLOW_UP_COMPLETED,
                "updated_at": cls._touch(check_in, now),
            }
        )

    @staticmethod
    def active_insights(insights: Iterable[Insight], now: Optional[datetime] = None) -> List[Insight]:
        current = ensure_aware(now or utcnow())
        return [i for i in insights if i.is_active and not i.is_expired(current)]

    @staticmethod
    def calendar_state(
        check_ins: Iterable[CheckIn],
        today: Optional[date] = None,
        days: int = 7,
    ) -> Dict[date, CalendarDayState]:
        """State of each of the trailing ``days`` days, oldest first.

        A day with no entry that the grace rule bridges inside the current
        streak is a ``streak_gap``.
        """
        check_ins = list(check_ins)
        end = today or date.today()
        logged = {c.date for c in check_ins}
        gaps = set(StreakTracker.gap_days(StreakTracker.streak_dates(check_ins, end)))

        state: Dict[date, CalendarDayState] = {}
        for day in trailing_days(end, days):
            if day in logged:
                state[day] = CalendarDayState.HAS_CHECK_IN
            elif day in gaps:
                state[day] = CalendarDayState.STREAK_GAP
            else:
                state[day] = CalendarDayState.NO_CHECK_IN
        return state
