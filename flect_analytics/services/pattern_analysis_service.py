from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from flect_analytics.schemas.checkin import CheckIn, Level
from flect_analytics.schemas.insight import Insight, InsightMetadata, InsightType
from flect_analytics.schemas.planning import Goal, GoalCategory, Task, TaskPriority
from flect_analytics.services.mood_scorer import MoodScorer
from flect_analytics.utils.date_utils import ensure_aware, time_of_day, trailing_days, utcnow

logger = logging.getLogger(__name__)

_DAY_PARTS = ("morning", "afternoon", "evening")


def _pct(value: float) -> int:
    return int(value * 100)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _best_part(rates: Dict[str, float]) -> str:
    return max(_DAY_PARTS, key=lambda part: rates.get(part, 0.0))


class PatternAnalysisService:
    """Behavioural analyses over check-ins, tasks and goals.

    Mood is expressed on the 1-5 point scale (see ``MoodScorer.mood_points``).
    Every analysis returns ``None`` when it does not have enough data.
    """

    WEEKLY_MIN_CHECK_INS = 7
    BEHAVIOR_MIN_CHECK_INS = 14
    CORRELATION_MIN_CHECK_INS = 7
    CORRELATION_MIN_DIFFERENCE = 0.5
    TASK_MIN_COMPLETED = 10
    GOAL_MIN_COUNT = 5
    GOAL_MIN_COMPLETED = 5
    SHORT_TERM_GOAL_DAYS = 30

    # ---- Check-ins ----

    @classmethod
    def analyze_check_ins(cls, check_ins: Iterable[CheckIn], now: Optional[datetime] = None) -> List[Insight]:
        ordered = sorted(check_ins, key=lambda c: c.date)
        current = ensure_aware(now or utcnow())
        candidates = [
            cls.weekly_mood_trend(ordered),
            cls.time_of_day_mood(ordered),
            cls.sleep_correlation(ordered),
            cls.social_correlation(ordered),
            cls.energy_correlation(ordered),
            cls.check_in_consistency(ordered, current.date()),
            cls.check_in_timing(ordered),
            cls.check_in_detail(ordered),
        ]
        found = [insight for insight in candidates if insight is not None]
        logger.debug(f"Behavioral analysis: {len(found)} patterns from {len(ordered)} check-ins")
        return found

    @classmethod
    def weekly_mood_trend(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        if len(check_ins) < cls.WEEKLY_MIN_CHECK_INS:
            return None

        recent = list(check_ins[-cls.WEEKLY_MIN_CHECK_INS:])
        points = [MoodScorer.mood_points(c) for c in recent]
        average = _mean(points)
        trend = points[-1] - points[0]

        if trend > 0.5:
            description = "Your mood has been improving over the past week. Keep up the positive momentum!"
        elif trend < -0.5:
            description = (
                "Your mood has been declining over the past week. "
                "Consider what factors might be affecting your wellbeing."
            )
        else:
            description = (
                f"Your mood has been relatively stable over the past week, averaging {average:.1f} out of 5."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Weekly Mood Trend",
            description=description,
            confidence=0.8,
            data_points=len(recent),
            metadata=InsightMetadata(
                related_check_in_ids=[c.id for c in recent],
                frequency_data={"averageMood": _pct(average)},
            ),
        )

    @classmethod
    def time_of_day_mood(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        if len(check_ins) < cls.BEHAVIOR_MIN_CHECK_INS:
            return None

        buckets: Dict[str, List[float]] = {part: [] for part in _DAY_PARTS}
        for check_in in check_ins:
            buckets[time_of_day(check_in.created_at)].append(MoodScorer.mood_points(check_in))

        averages = {part: _mean(values) for part, values in buckets.items() if values}
        if len(averages) < 2:
            return None

        best = max(averages, key=averages.get)
        worst = min(averages, key=averages.get)
        if best == worst:
            return None

        return Insight(
            type=InsightType.PATTERN,
            title="Time of Day Mood Pattern",
            description=(
                f"You tend to feel best during the {best} and less energetic during the {worst}. "
                "Consider scheduling important tasks during your peak hours."
            ),
            confidence=0.7,
            data_points=len(check_ins),
            metadata=InsightMetadata(
                frequency_data={f"{part}Mood": _pct(avg) for part, avg in averages.items()},
                time_patterns={"best": best, "worst": worst},
            ),
        )

    @classmethod
    def _level_correlation(
        cls,
        check_ins: Sequence[CheckIn],
        field: str,
        title: str,
        keys: Sequence[str],
        describe: Callable[[float], str],
    ) -> Optional[Insight]:
        """Mood gap between HIGH and LOW days for one of the ordinal fields."""
        rated = [c for c in check_ins if getattr(c, field) is not None]
        if len(rated) < cls.CORRELATION_MIN_CHECK_INS:
            return None

        high = [MoodScorer.mood_points(c) for c in rated if getattr(c, field) == Level.HIGH]
        low = [MoodScorer.mood_points(c) for c in rated if getattr(c, field) == Level.LOW]
        if not high or not low:
            return None

        high_avg = _mean(high)
        low_avg = _mean(low)
        difference = high_avg - low_avg
        if abs(difference) < cls.CORRELATION_MIN_DIFFERENCE:
            return None

        return Insight(
            type=InsightType.CORRELATION,
            title=title,
            description=describe(difference),
            # Largest possible gap on the 1-5 scale is 4
            confidence=min(1.0, abs(difference) / 4.0),
            data_points=len(rated),
            metadata=InsightMetadata(frequency_data={keys[0]: _pct(high_avg), keys[1]: _pct(low_avg)}),
        )

    @classmethod
    def sleep_correlation(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        def describe(diff: float) -> str:
            if diff > 0:
                return (
                    f"You tend to feel {diff:.1f} points better on days with good sleep. "
                    "Prioritize your sleep schedule!"
                )
            return (
                "Surprisingly, your mood doesn't seem strongly tied to sleep quality. "
                "Consider other factors that might be more influential."
            )

        return cls._level_correlation(
            check_ins, "sleep", "Sleep-Mood Connection", ("goodSleepMood", "badSleepMood"), describe
        )

    @classmethod
    def social_correlation(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        def describe(diff: float) -> str:
            if diff > 0:
                return (
                    f"You tend to feel {diff:.1f} points better on days with more social interaction. "
                    "Consider scheduling more social activities!"
                )
            return (
                f"You seem to thrive with more alone time, feeling {abs(diff):.1f} points better. "
                "Honor your need for solitude."
            )

        return cls._level_correlation(
            check_ins, "social", "Social-Mood Connection", ("socialMood", "aloneMood"), describe
        )

    @classmethod
    def energy_correlation(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        def describe(diff: float) -> str:
            if diff > 0:
                return (
                    f"Higher energy levels correlate with better moods ({diff:.1f} points higher). "
                    "Focus on activities that boost your energy!"
                )
            return (
                "Your mood seems relatively stable regardless of energy levels. "
                "You handle low-energy days well!"
            )

        return cls._level_correlation(
            check_ins, "energy", "Energy-Mood Connection", ("highEnergyMood", "lowEnergyMood"), describe
        )

    @classmethod
    def check_in_consistency(cls, check_ins: Sequence[CheckIn], today: date) -> Optional[Insight]:
        if len(check_ins) < cls.BEHAVIOR_MIN_CHECK_INS:
            return None

        window = set(trailing_days(today, cls.BEHAVIOR_MIN_CHECK_INS))
        covered = {c.date for c in check_ins if c.date in window}
        rate = len(covered) / len(window)

        if rate >= 0.9:
            description = (
                f"Excellent check-in consistency! You've logged your mood {_pct(rate)}% of days in the past "
                "two weeks. This regular reflection helps build self-awareness."
            )
        elif rate >= 0.7:
            description = (
                f"Good check-in habits - you've logged your mood {_pct(rate)}% of days in the past two weeks. "
                "Try to make it a daily ritual for even better insights."
            )
        else:
            description = (
                f"You've logged your mood {_pct(rate)}% of days in the past two weeks. "
                "More regular check-ins will help build a clearer picture of your patterns."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Check-in Consistency",
            description=description,
            confidence=0.9,
            data_points=len(window),
            metadata=InsightMetadata(
                frequency_data={
                    "consistencyRate": _pct(rate),
                    "daysCovered": len(covered),
                    "totalDays": len(window),
                }
            ),
        )

    @classmethod
    def check_in_timing(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        if len(check_ins) < cls.BEHAVIOR_MIN_CHECK_INS:
            return None

        counts = {part: 0 for part in _DAY_PARTS}
        for check_in in check_ins:
            counts[time_of_day(check_in.created_at)] += 1
        rates = {part: count / len(check_ins) for part, count in counts.items()}
        preferred = _best_part(rates)

        return Insight(
            type=InsightType.PATTERN,
            title="Check-in Timing Pattern",
            description=(
                f"You tend to check in during the {preferred} ({_pct(rates[preferred])}% of entries). "
                "This consistency helps build a reliable reflection habit."
            ),
            confidence=0.8,
            data_points=len(check_ins),
            metadata=InsightMetadata(
                frequency_data={f"{part}Rate": _pct(rate) for part, rate in rates.items()},
                time_patterns={"preferred": preferred},
            ),
        )

    @classmethod
    def check_in_detail(cls, check_ins: Sequence[CheckIn]) -> Optional[Insight]:
        if len(check_ins) < cls.BEHAVIOR_MIN_CHECK_INS:
            return None

        detailed = [c for c in check_ins if c.is_detailed]
        rate = len(detailed) / len(check_ins)

        if rate >= 0.8:
            description = (
                f"You're great at providing comprehensive check-ins! {_pct(rate)}% of your entries include "
                "complete details about energy, sleep, social interaction, and highlights."
            )
        elif rate >= 0.5:
            description = (
                f"You provide detailed check-ins {_pct(rate)}% of the time. "
                "More complete entries can help uncover deeper patterns in your wellbeing."
            )
        else:
            description = (
                f"You tend to keep check-ins brief, with {_pct(rate)}% including full details. "
                "Consider adding more context for richer insights."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Check-in Detail Pattern",
            description=description,
            confidence=0.8,
            data_points=len(check_ins),
            metadata=InsightMetadata(
                frequency_data={
                    "detailRate": _pct(rate),
                    "detailedCheckIns": len(detailed),
                    "totalCheckIns": len(check_ins),
                }
            ),
        )

    # ---- Tasks ----

    @classmethod
    def analyze_tasks(cls, tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Insight]:
        tasks = list(tasks)
        if not tasks:
            return []
        candidates = [
            cls.task_completion_time(tasks),
            cls.task_size(tasks),
            cls.task_priority(tasks),
            cls.task_engagement(tasks, now),
        ]
        return [insight for insight in candidates if insight is not None]

    @staticmethod
    def _completed_with_time(tasks: Sequence[Task]) -> List[Task]:
        return [t for t in tasks if t.is_completed and t.completed_at is not None]

    @classmethod
    def task_completion_time(cls, tasks: Sequence[Task]) -> Optional[Insight]:
        completed = cls._completed_with_time(tasks)
        if len(completed) < cls.TASK_MIN_COMPLETED:
            return None

        counts = {part: 0 for part in _DAY_PARTS}
        for task in completed:
            counts[time_of_day(task.completed_at)] += 1
        rates = {part: count / len(completed) for part, count in counts.items()}
        best = _best_part(rates)

        return Insight(
            type=InsightType.PATTERN,
            title="Task Completion Time Pattern",
            description=(
                f"You're most productive in the {best}, completing {_pct(rates[best])}% of your tasks during "
                "these hours. Consider scheduling important tasks during this time."
            ),
            confidence=0.7,
            data_points=len(completed),
            metadata=InsightMetadata(
                frequency_data={f"{part}Rate": _pct(rate) for part, rate in rates.items()},
                time_patterns={"best": best},
            ),
        )

    @classmethod
    def task_size(cls, tasks: Sequence[Task]) -> Optional[Insight]:
        completed = cls._completed_with_time(tasks)
        if len(completed) < cls.TASK_MIN_COMPLETED:
            return None

        small = medium = large = 0
        for task in completed:
            if task.estimated_hours is None:
                continue
            if task.estimated_hours <= 1:
                small += 1
            elif task.estimated_hours <= 4:
                medium += 1
            else:
                large += 1

        total = small + medium + large
        if total == 0:
            return None
        small_rate, medium_rate, large_rate = small / total, medium / total, large / total

        if small_rate > medium_rate and small_rate > large_rate:
            description = (
                f"You excel at completing small tasks (up to 1 hour), with a {_pct(small_rate)}% completion "
                "rate. Consider breaking down larger tasks into smaller chunks."
            )
        elif medium_rate > small_rate and medium_rate > large_rate:
            description = (
                f"You handle medium-sized tasks (1-4 hours) well, with a {_pct(medium_rate)}% completion rate. "
                "This seems to be your sweet spot for task size."
            )
        else:
            description = (
                f"You show strong follow-through on large tasks (>4 hours), with a {_pct(large_rate)}% "
                "completion rate. You're good at tackling big challenges!"
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Task Size Pattern",
            description=description,
            confidence=0.7,
            data_points=total,
            metadata=InsightMetadata(
                frequency_data={
                    "smallRate": _pct(small_rate),
                    "mediumRate": _pct(medium_rate),
                    "largeRate": _pct(large_rate),
                }
            ),
        )

    @classmethod
    def task_priority(cls, tasks: Sequence[Task]) -> Optional[Insight]:
        if sum(1 for t in tasks if t.is_completed) < cls.TASK_MIN_COMPLETED:
            return None

        rates: Dict[TaskPriority, float] = {}
        for priority in TaskPriority:
            bucket = [t for t in tasks if t.priority == priority]
            rates[priority] = sum(1 for t in bucket if t.is_completed) / len(bucket) if bucket else 0.0

        high, medium, low = rates[TaskPriority.HIGH], rates[TaskPriority.MEDIUM], rates[TaskPriority.LOW]
        if high > medium and high > low:
            description = (
                f"You prioritize high-priority tasks well, completing {_pct(high)}% of them. "
                "Keep focusing on what's most important!"
            )
        elif low > high and low > medium:
            description = (
                f"You tend to complete more low-priority tasks ({_pct(low)}%). "
                "Consider focusing more on high-priority items for greater impact."
            )
        else:
            description = (
                "You maintain a balanced approach to task priorities, with similar completion rates across all levels."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Task Priority Pattern",
            description=description,
            confidence=0.8,
            data_points=len(tasks),
            metadata=InsightMetadata(
                frequency_data={f"{p.value}Rate": _pct(rate) for p, rate in rates.items()}
            ),
        )

    @classmethod
    def task_engagement(cls, tasks: Sequence[Task], now: Optional[datetime] = None) -> Optional[Insight]:
        if not tasks:
            return None

        week_ago = ensure_aware(now or utcnow()) - timedelta(days=7)
        recent = [t for t in tasks if ensure_aware(t.created_at) >= week_ago]
        creation_rate = len(recent) / 7.0
        completion_rate = sum(1 for t in recent if t.is_completed) / len(recent) if recent else 0.0

        if creation_rate >= 2.0 and completion_rate >= 0.7:
            description = (
                f"Strong task engagement! You're creating {creation_rate:.1f} tasks per day and "
                f"completing {_pct(completion_rate)}% of them."
            )
        elif creation_rate >= 1.0 or completion_rate >= 0.5:
            description = (
                f"Moderate task engagement with {creation_rate:.1f} tasks created per day and "
                f"{_pct(completion_rate)}% completion rate."
            )
        else:
            description = (
                "Light task engagement recently. Consider using tasks more actively to track and achieve your goals."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Task Engagement Pattern",
            description=description,
            confidence=0.8,
            data_points=len(tasks),
            metadata=InsightMetadata(
                frequency_data={
                    "taskCreationRate": _pct(creation_rate),
                    "taskCompletionRate": _pct(completion_rate),
                }
            ),
        )

    # ---- Goals ----

    @classmethod
    def analyze_goals(cls, goals: Iterable[Goal], today: Optional[date] = None) -> List[Insight]:
        goals = list(goals)
        if not goals:
            return []
        candidates = [
            cls.goal_completion(goals),
            cls.goal_category_success(goals),
            cls.goal_timeframe(goals),
            cls.goal_engagement(goals, today),
        ]
        return [insight for insight in candidates if insight is not None]

    @classmethod
    def goal_completion(cls, goals: Sequence[Goal]) -> Optional[Insight]:
        if len(goals) < cls.GOAL_MIN_COUNT:
            return None

        rate = sum(1 for g in goals if g.is_completed) / len(goals)
        average_progress = _mean([g.progress for g in goals])

        if rate > 0.7:
            description = (
                f"You have an impressive goal completion rate of {_pct(rate)}%! "
                "Your commitment to achieving your goals is paying off."
            )
        elif rate > 0.4:
            description = (
                f"You're making steady progress with a {_pct(rate)}% goal completion rate. Keep pushing forward!"
            )
        else:
            description = (
                f"Your current goal completion rate is {_pct(rate)}%. "
                "Consider setting more achievable milestones or adjusting your approach."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Goal Achievement Pattern",
            description=description,
            confidence=0.8,
            data_points=len(goals),
            metadata=InsightMetadata(
                frequency_data={"completionRate": _pct(rate), "averageProgress": _pct(average_progress)}
            ),
        )

    @classmethod
    def goal_category_success(cls, goals: Sequence[Goal]) -> Optional[Insight]:
        if len(goals) < cls.GOAL_MIN_COUNT:
            return None

        rates: Dict[GoalCategory, float] = {}
        for category in GoalCategory:
            bucket = [g for g in goals if g.category == category]
            if bucket:
                rates[category] = sum(1 for g in bucket if g.is_completed) / len(bucket)

        best: Optional[GoalCategory] = None
        worst: Optional[GoalCategory] = None
        best_rate, worst_rate = 0.0, 1.0
        for category, rate in rates.items():
            if rate > best_rate:
                best, best_rate = category, rate
            if rate < worst_rate:
                worst, worst_rate = category, rate
        if best is None or worst is None:
            return None

        return Insight(
            type=InsightType.PATTERN,
            title="Goal Category Success Pattern",
            description=(
                f"You excel in {best.value} goals with a {_pct(best_rate)}% success rate, while "
                f"{worst.value} goals show more room for growth at {_pct(worst_rate)}%. "
                "Consider applying your successful strategies across categories."
            ),
            confidence=0.7,
            data_points=len(goals),
            metadata=InsightMetadata(frequency_data={c.value: _pct(r) for c, r in rates.items()}),
        )

    @classmethod
    def goal_timeframe(cls, goals: Sequence[Goal]) -> Optional[Insight]:
        if sum(1 for g in goals if g.is_completed) < cls.GOAL_MIN_COMPLETED:
            return None

        short = [g for g in goals if (g.end_date - g.start_date).days <= cls.SHORT_TERM_GOAL_DAYS]
        long_term = [g for g in goals if (g.end_date - g.start_date).days > cls.SHORT_TERM_GOAL_DAYS]
        short_rate = sum(1 for g in short if g.is_completed) / len(short) if short else 0.0
        long_rate = sum(1 for g in long_term if g.is_completed) / len(long_term) if long_term else 0.0

        if abs(short_rate - long_rate) < 0.2:
            description = (
                f"You show consistent success rates across both short-term ({_pct(short_rate)}%) and "
                f"long-term ({_pct(long_rate)}%) goals. Keep maintaining this balanced approach!"
            )
        elif short_rate > long_rate:
            description = (
                f"You excel at short-term goals ({_pct(short_rate)}% success rate) compared to long-term ones "
                f"({_pct(long_rate)}%). Consider breaking down long-term goals into shorter milestones."
            )
        else:
            description = (
                f"You show strong follow-through on long-term goals ({_pct(long_rate)}% success rate) compared "
                f"to short-term ones ({_pct(short_rate)}%). Your persistence pays off!"
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Goal Timeframe Pattern",
            description=description,
            confidence=0.7,
            data_points=len(goals),
            metadata=InsightMetadata(
                frequency_data={"shortTermRate": _pct(short_rate), "longTermRate": _pct(long_rate)}
            ),
        )

    @classmethod
    def goal_engagement(cls, goals: Sequence[Goal], today: Optional[date] = None) -> Optional[Insight]:
        active = [g for g in goals if g.is_active]
        if not active:
            return None

        month_ago = (today or date.today()) - timedelta(days=30)
        recent = [g for g in active if g.start_date >= month_ago]
        progress_rate = sum(1 for g in active if g.progress_percentage > 0) / len(active)

        if len(recent) >= 3 and progress_rate >= 0.7:
            description = (
                f"Excellent goal engagement! You've set {len(recent)} new goals this month and are making "
                f"progress on {_pct(progress_rate)}% of your goals."
            )
        elif len(recent) >= 1 or progress_rate >= 0.5:
            description = (
                f"Good goal engagement with {len(recent)} new goals this month and progress on "
                f"{_pct(progress_rate)}% of your goals."
            )
        else:
            description = (
                "Consider setting new goals or revisiting existing ones to maintain momentum. "
                f"{_pct(progress_rate)}% of your goals show recent progress."
            )

        return Insight(
            type=InsightType.PATTERN,
            title="Goal Engagement Pattern",
            description=description,
            confidence=0.8,
            data_points=len(active),
            metadata=InsightMetadata(
                frequency_data={"recentGoals": len(recent), "goalProgressRate": _pct(progress_rate)}
            ),
        )
