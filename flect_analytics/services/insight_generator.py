from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence

from flect_analytics.schemas.checkin import CheckIn
from flect_analytics.schemas.engagement import EngagementProfile
from flect_analytics.schemas.insight import Insight, InsightMetadata, InsightType
from flect_analytics.schemas.planning import Goal, Task
from flect_analytics.schemas.theme import HappinessTheme, ImprovementTheme
from flect_analytics.services.engagement_service import EngagementTierCalculator
from flect_analytics.services.mood_scorer import MoodScorer
from flect_analytics.services.pattern_analysis_service import PatternAnalysisService
from flect_analytics.services.streak_tracker import StreakTracker
from flect_analytics.services.theme_classifier import ThemeClassifier
from flect_analytics.utils.date_utils import ensure_aware, is_weekend, start_of_day, utcnow
from flect_analytics.utils.text_cleaning import non_blank

logger = logging.getLogger(__name__)


HAPPINESS_DESCRIPTIONS: Dict[HappinessTheme, str] = {
    HappinessTheme.EXERCISE: "You're consistently happiest when being active - exercise and movement bring you joy",
    HappinessTheme.SOCIAL: "Your happiness peaks during social connections and time with others",
    HappinessTheme.ACHIEVEMENT: "Completing goals and achieving milestones consistently lifts your mood",
    HappinessTheme.NATURE: "You feel most content when spending time outdoors or in nature",
    HappinessTheme.CREATIVITY: "Creative activities and self-expression bring you consistent happiness",
    HappinessTheme.LEARNING: "Learning new things and personal growth fuel your happiness",
    HappinessTheme.RELAXATION: "Rest and relaxation activities consistently improve your mood",
}
DEFAULT_HAPPINESS_DESCRIPTION = "You have consistent patterns in what brings you happiness"

IMPROVEMENT_DESCRIPTIONS: Dict[ImprovementTheme, str] = {
    ImprovementTheme.HEALTH: "Health and wellness improvements are your primary focus area",
    ImprovementTheme.PRODUCTIVITY: "You're consistently working on productivity and time management",
    ImprovementTheme.SOCIAL: "Strengthening relationships and social connections is important to you",
    ImprovementTheme.LEARNING: "Skill development and learning new things drive your growth",
    ImprovementTheme.MINDFULNESS: "Mental wellness and mindfulness practices are your growth priority",
    ImprovementTheme.ORGANIZATION: "Getting organized and creating structure is a recurring theme",
}
DEFAULT_IMPROVEMENT_DESCRIPTION = "You have clear areas where you're focused on improvement"


class InsightGenerator:
    """Builds the ranked insight list shown to the user.

    Each analysis is independent and returns ``None`` when its data
    requirements are not met. The combined list is gated on confidence and
    expiry, then sorted by confidence and recency.
    """

    MIN_CONFIDENCE = 0.6
    RECENT_WINDOW = 21
    THEME_MIN_ENTRIES = 5
    THEME_MIN_OCCURRENCES = 3
    TREND_MIN_ENTRIES = 14
    TEMPORAL_MIN_DIFFERENCE = 0.3
    PROGRESS_MIN_CHANGE = 0.2
    MILESTONE_STREAK = 30

    @staticmethod
    def confidence(occurrences: int, total: int, min_occurrences: int) -> float:
        """Blend of how frequent a pattern is and how much data backs it."""
        if total <= 0 or occurrences < min_occurrences:
            return 0.0
        frequency_confidence = min(0.9, 2.0 * occurrences / total)
        data_confidence = min(0.9, total / 20.0)
        return (frequency_confidence + data_confidence) / 2.0

    @classmethod
    def generate(
        cls,
        check_ins: Iterable[CheckIn],
        tasks: Iterable[Task] = (),
        goals: Iterable[Goal] = (),
        *,
        as_of: Optional[date] = None,
        now: Optional[datetime] = None,
        profile: Optional[EngagementProfile] = None,
    ) -> List[Insight]:
        current = ensure_aware(now or utcnow())
        today = start_of_day(as_of) if as_of is not None else current.date()
        ordered = sorted(check_ins, key=lambda c: (c.date, ensure_aware(c.created_at)))
        tasks = list(tasks)
        goals = list(goals)
        recent = ordered[-cls.RECENT_WINDOW:]

        candidates: List[Optional[Insight]] = [
            cls.happiness_pattern(recent),
            cls.improvement_focus(recent),
            cls.temporal_pattern(ordered),
            cls.progress_trend(ordered),
            cls.milestone(ordered, today),
        ]
        insights = [insight for insight in candidates if insight is not None]

        if profile is None:
            profile = EngagementTierCalculator.build_profile(ordered, current)
        if profile.should_get_deep_insights:
            insights.extend(PatternAnalysisService.analyze_check_ins(ordered, current))
        if tasks:
            insights.extend(PatternAnalysisService.analyze_tasks(tasks, current))
        if goals:
            insights.extend(PatternAnalysisService.analyze_goals(goals, today))

        ranked = cls.filter_insights(insights, current)
        logger.info(
            f"Generated {len(ranked)} insights from {len(ordered)} check-ins "
            f"({len(insights) - len(ranked)} below confidence or expired)"
        )
        return ranked

    @classmethod
    def filter_insights(cls, insights: Iterable[Insight], now: Optional[datetime] = None) -> List[Insight]:
        current = ensure_aware(now or utcnow())
        kept = [
            insight
            for insight in insights
            if insight.confidence >= cls.MIN_CONFIDENCE and not insight.is_expired(current)
        ]
        return sorted(
            kept,
            key=lambda insight: (insight.confidence, ensure_aware(insight.created_at)),
            reverse=True,
        )

    @classmethod
    def happiness_pattern(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        texts = non_blank(c.happy_text for c in check_ins)
        if len(texts) < cls.THEME_MIN_ENTRIES:
            return None

        top = ThemeClassifier.dominant(ThemeClassifier.classify_happiness(texts), HappinessTheme)
        if top is None:
            return None
        theme, count = top

        return Insight(
            type=InsightType.PATTERN,
            title="Happiness Pattern",
            description=HAPPINESS_DESCRIPTIONS.get(theme, DEFAULT_HAPPINESS_DESCRIPTION),
            confidence=cls.confidence(count, len(texts), cls.THEME_MIN_OCCURRENCES),
            data_points=len(texts),
            metadata=InsightMetadata(
                related_check_in_ids=[c.id for c in check_ins[-7:]],
                keywords=[theme.value],
                frequency_data={theme.value: count},
            ),
        )

    @classmethod
    def improvement_focus(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        texts = non_blank(c.improve_text for c in check_ins)
        if len(texts) < cls.THEME_MIN_ENTRIES:
            return None

        top = ThemeClassifier.dominant(ThemeClassifier.classify_improvement(texts), ImprovementTheme)
        if top is None:
            return None
        theme, count = top

        return Insight(
            type=InsightType.SUGGESTION,
            title="Growth Focus",
            description=IMPROVEMENT_DESCRIPTIONS.get(theme, DEFAULT_IMPROVEMENT_DESCRIPTION),
            confidence=cls.confidence(count, len(texts), cls.THEME_MIN_OCCURRENCES),
            data_points=len(texts),
            metadata=InsightMetadata(
                related_check_in_ids=[c.id for c in check_ins[-5:]],
                keywords=[theme.value],
                frequency_data={theme.value: count},
            ),
        )

    @classmethod
    def temporal_pattern(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        """Weekend vs weekday mood, compared as per-entry means."""
        if len(check_ins) < cls.TREND_MIN_ENTRIES:
            return None

        weekend: List[float] = []
        weekday: List[float] = []
        for check_in in check_ins:
            bucket = weekend if is_weekend(check_in.date) else weekday
            bucket.append(MoodScorer.score(check_in))
        if not weekend or not weekday:
            return None

        weekend_avg = sum(weekend) / len(weekend)
        weekday_avg = sum(weekday) / len(weekday)
        difference = abs(weekend_avg - weekday_avg)
        if difference <= cls.TEMPORAL_MIN_DIFFERENCE:
            return None

        if weekend_avg > weekday_avg:
            description = "Your mood tends to be significantly better on weekends than weekdays"
        else:
            description = "You maintain better consistency and mood during structured weekdays"

        return Insight(
            type=InsightType.PATTERN,
            title="Weekly Pattern",
            description=description,
            confidence=min(0.9, difference * 2),
            data_points=len(check_ins),
            metadata=InsightMetadata(
                related_check_in_ids=[c.id for c in check_ins[-10:]],
                time_patterns={
                    "weekday_avg": f"{weekday_avg:.2f}",
                    "weekend_avg": f"{weekend_avg:.2f}",
                },
            ),
        )

    @classmethod
    def progress_trend(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        """Last seven entries against the seven before them."""
        if len(check_ins) < cls.TREND_MIN_ENTRIES:
            return None

        recent = check_ins[-7:]
        older = check_ins[-14:-7]
        recent_avg = sum(MoodScorer.score(c) for c in recent) / len(recent)
        older_avg = sum(MoodScorer.score(c) for c in older) / len(older)
        change = recent_avg - older_avg
        if abs(change) <= cls.PROGRESS_MIN_CHANGE:
            return None

        if change > 0:
            title = "Positive Trend"
            description = "Your overall mood and satisfaction have improved noticeably this week"
        else:
            title = "Gentle Reminder"
            description = "You've had some challenging days recently - this is normal and temporary"

        return Insight(
            type=InsightType.CORRELATION,
            title=title,
            description=description,
            confidence=min(0.85, abs(change) * 3),
            data_points=len(recent),
            metadata=InsightMetadata(related_check_in_ids=[c.id for c in recent]),
        )

    @classmethod
    def milestone(cls, check_ins: Sequence[CheckIn], as_of: Optional[date] = None) -> Optional[Insight]:
        streak = StreakTracker.current_streak(check_ins, as_of)
        if streak < cls.MILESTONE_STREAK:
            return None

        return Insight(
            type=InsightType.MILESTONE,
            title="30-day streak",
            description="You've been consistent with your daily check-ins for 30 days! Keep up the great habit.",
            # Every streak day counts as one occurrence, so a 30-day streak lands at 0.9
            confidence=cls.confidence(streak, streak, cls.MILESTONE_STREAK),
            data_points=streak,
        )
