from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from flect_analytics.schemas.checkin import CheckIn
from flect_analytics.schemas.engagement import EngagementProfile, EngagementTier, JourneyStage
from flect_analytics.services.streak_tracker import StreakTracker
from flect_analytics.utils.date_utils import days_between, ensure_aware, utcnow

logger = logging.getLogger(__name__)


class EngagementTierCalculator:
    """Maps how long and how often someone has checked in to an engagement tier.

    The tier decides which insight types and follow-up questions are unlocked.
    """

    SMART_QUESTION_MIN_CHECK_INS = 5
    DEEP_INSIGHT_MIN_CHECK_INS = 20

    @staticmethod
    def tier(days_since_install: int, total_check_ins: int) -> EngagementTier:
        if 0 <= days_since_install <= 7:
            return EngagementTier.NEWCOMER
        if 8 <= days_since_install <= 30 and total_check_ins >= 5:
            return EngagementTier.EXPLORING
        if 31 <= days_since_install <= 90 and total_check_ins >= 20:
            return EngagementTier.ENGAGED
        if days_since_install >= 91 and total_check_ins >= 50:
            return EngagementTier.COMMITTED
        return EngagementTier.NEWCOMER

    @classmethod
    def should_get_smart_questions(cls, days_since_install: int, total_check_ins: int) -> bool:
        return (
            cls.tier(days_since_install, total_check_ins) >= EngagementTier.EXPLORING
            and total_check_ins >= cls.SMART_QUESTION_MIN_CHECK_INS
        )

    @classmethod
    def should_get_deep_insights(cls, days_since_install: int, total_check_ins: int) -> bool:
        return (
            cls.tier(days_since_install, total_check_ins) >= EngagementTier.ENGAGED
            and total_check_ins >= cls.DEEP_INSIGHT_MIN_CHECK_INS
        )

    @staticmethod
    def days_since_first_check_in(check_ins: Iterable[CheckIn], now: Optional[datetime] = None) -> int:
        check_ins = list(check_ins)
        if not check_ins:
            return 0
        first = min(ensure_aware(c.created_at) for c in check_ins)
        current = ensure_aware(now or utcnow())
        return max(0, (current - first).days)

    @classmethod
    def build_profile(cls, check_ins: Iterable[CheckIn], now: Optional[datetime] = None) -> EngagementProfile:
        check_ins = list(check_ins)
        current = ensure_aware(now or utcnow())
        days = cls.days_since_first_check_in(check_ins, current)
        total = len(check_ins)

        streak = StreakTracker.state(check_ins, current.date())
        weeks = max(days, 1) / 7.0

        profile = EngagementProfile(
            days_since_install=days,
            total_check_ins=total,
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            average_check_ins_per_week=total / weeks,
        )
        logger.debug(
            f"Engagement profile: days={days} total={total} streak={streak.current_streak} "
            f"tier={profile.level.name}"
        )
        return profile


def journey_day(journey_start: Optional[date], today: Optional[date] = None) -> int:
    """1-based day number of the user's journey; 0 before it has started."""
    if journey_start is None:
        return 0
    return max(1, days_between(journey_start, today or date.today()) + 1)


def journey_stage(journey_day: int, consecutive_days: int, total_check_ins: int) -> JourneyStage:
    if journey_day <= 3:
        return JourneyStage.ONBOARDING
    if journey_day <= 7:
        return JourneyStage.FIRST_WEEK
    if journey_day <= 14:
        return JourneyStage.SECOND_WEEK
    if journey_day <= 30:
        return JourneyStage.FIRST_MONTH
    if consecutive_days >= 7:
        return JourneyStage.CONSISTENT
    if total_check_ins >= 10:
        return JourneyStage.ENGAGED
    return JourneyStage.CASUAL
