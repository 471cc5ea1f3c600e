"""
Tests for insight generation, confidence and ranking.

Run with: python -m pytest tests/test_insight_generator.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest


class TestConfidence:
    """Tests for the generic confidence blend."""

    def test_below_min_occurrences_is_zero(self):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.confidence(2, 10, 3) == 0

    def test_frequency_and_data_blend(self):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.confidence(5, 10, 3) == pytest.approx(0.7)

    def test_no_data_is_zero(self):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.confidence(0, 0, 0) == 0

    def test_caps_at_point_nine(self):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.confidence(40, 40, 3) == pytest.approx(0.9)


class TestThemeInsights:
    """Tests for the happiness and growth-focus insights."""

    def test_fewer_than_five_happy_texts(self, daily_check_ins):
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(4, happy_text="Long swim at the pool")
        check_ins += daily_check_ins(3, end=check_ins[0].date - timedelta(days=1))
        assert InsightGenerator.happiness_pattern(check_ins) is None

    def test_happiness_pattern(self, daily_check_ins):
        from flect_analytics.schemas.insight import InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(12, happy_text="Long swim at the pool")
        insight = InsightGenerator.happiness_pattern(check_ins)

        assert insight.type == InsightType.PATTERN
        assert insight.title == "Happiness Pattern"
        assert "active" in insight.description
        assert insight.confidence == pytest.approx(0.75)
        assert insight.data_points == 12
        assert insight.metadata.keywords == ["exercise"]
        assert insight.metadata.related_check_in_ids == [c.id for c in check_ins[-7:]]

    def test_growth_focus(self, daily_check_ins):
        from flect_analytics.schemas.insight import InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(10, improve_text="stick to the budget")
        insight = InsightGenerator.improvement_focus(check_ins)

        assert insight.type == InsightType.SUGGESTION
        assert insight.title == "Growth Focus"
        assert insight.metadata.keywords == ["finance"]
        assert insight.confidence == pytest.approx(0.7)
        assert len(insight.metadata.related_check_in_ids) == 5


class TestTrendInsights:
    """Tests for weekday/weekend and week-over-week insights."""

    def test_weekend_better_than_weekday(self, daily_check_ins, high_mood, low_mood):
        from flect_analytics.services.insight_generator import InsightGenerator
        from flect_analytics.utils.date_utils import is_weekend

        base = daily_check_ins(14)
        check_ins = [
            c.model_copy(update=high_mood if is_weekend(c.date) else low_mood)
            for c in base
        ]
        insight = InsightGenerator.temporal_pattern(check_ins)

        assert insight.title == "Weekly Pattern"
        assert "weekends" in insight.description
        assert insight.confidence == pytest.approx(0.9)
        assert float(insight.metadata.time_patterns["weekend_avg"]) == pytest.approx(1.0)

    def test_temporal_needs_fourteen_entries(self, daily_check_ins, low_mood):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.temporal_pattern(daily_check_ins(13, **low_mood)) is None

    def test_small_difference_is_not_reported(self, daily_check_ins):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.temporal_pattern(daily_check_ins(14)) is None

    def test_positive_trend(self, daily_check_ins, today, high_mood, low_mood):
        from flect_analytics.schemas.insight import InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        older = daily_check_ins(7, end=today - timedelta(days=7), **low_mood)
        recent = daily_check_ins(7, end=today, **high_mood)
        insight = InsightGenerator.progress_trend(older + recent)

        assert insight.type == InsightType.CORRELATION
        assert insight.title == "Positive Trend"
        assert insight.confidence == pytest.approx(0.85)
        assert insight.metadata.related_check_in_ids == [c.id for c in recent]

    def test_declining_trend_is_gentle(self, daily_check_ins, today, high_mood, low_mood):
        from flect_analytics.services.insight_generator import InsightGenerator

        older = daily_check_ins(7, end=today - timedelta(days=7), **high_mood)
        recent = daily_check_ins(7, end=today, **low_mood)
        insight = InsightGenerator.progress_trend(older + recent)

        assert insight.title == "Gentle Reminder"


class TestGenerate:
    """Tests for the full ranked, gated insight list."""

    def test_thirty_day_streak_milestone(self, daily_check_ins, now):
        from flect_analytics.schemas.insight import InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        insights = InsightGenerator.generate(daily_check_ins(30), now=now)
        milestones = [i for i in insights if i.title == "30-day streak"]

        assert len(milestones) == 1
        assert milestones[0].type == InsightType.MILESTONE
        assert milestones[0].data_points == 30
        assert milestones[0].confidence == pytest.approx(0.9)

    def test_no_milestone_before_thirty_days(self, daily_check_ins, now):
        from flect_analytics.services.insight_generator import InsightGenerator

        insights = InsightGenerator.generate(daily_check_ins(29), now=now)
        assert all(i.title != "30-day streak" for i in insights)

    def test_empty_history(self, now):
        from flect_analytics.services.insight_generator import InsightGenerator

        assert InsightGenerator.generate([], now=now) == []

    def test_low_confidence_patterns_are_dropped(self, daily_check_ins, now):
        """Five matching texts out of five only reach 0.575."""
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(5, happy_text="Long swim at the pool")
        assert InsightGenerator.happiness_pattern(check_ins).confidence == pytest.approx(0.575)
        assert InsightGenerator.generate(check_ins, now=now) == []

    def test_results_are_sorted_and_gated(self, daily_check_ins, now):
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(
            30, happy_text="Long swim at the pool", improve_text="stick to the budget"
        )
        insights = InsightGenerator.generate(check_ins, now=now)
        titles = [i.title for i in insights]

        assert {"Happiness Pattern", "Growth Focus", "30-day streak"} <= set(titles)
        confidences = [i.confidence for i in insights]
        assert confidences == sorted(confidences, reverse=True)
        assert all(c >= 0.6 for c in confidences)

    def test_deep_insights_only_for_engaged_users(self, daily_check_ins, now):
        from flect_analytics.schemas.engagement import EngagementProfile
        from flect_analytics.services.insight_generator import InsightGenerator

        check_ins = daily_check_ins(14)
        newcomer = EngagementProfile(days_since_install=3, total_check_ins=14)
        engaged = EngagementProfile(days_since_install=45, total_check_ins=25)

        shallow = InsightGenerator.generate(check_ins, now=now, profile=newcomer)
        deep = InsightGenerator.generate(check_ins, now=now, profile=engaged)

        assert "Check-in Consistency" not in [i.title for i in shallow]
        assert "Check-in Consistency" in [i.title for i in deep]

    def test_sleep_correlation_reaches_engaged_users(self, make_check_in, today, now):
        from flect_analytics.schemas.checkin import CheckInState, Level
        from flect_analytics.schemas.engagement import EngagementProfile
        from flect_analytics.schemas.insight import InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        rested = dict(happy_text="great love", mood="Excellent", completion_state=CheckInState.COMPLETED)
        drained = dict(happy_text="sad awful", mood="Sad", completion_state=CheckInState.PENDING)
        check_ins = [make_check_in(today - timedelta(days=n), sleep=Level.HIGH, **rested) for n in range(10)]
        check_ins += [make_check_in(today - timedelta(days=n), sleep=Level.LOW, **drained) for n in range(10, 20)]
        engaged = EngagementProfile(days_since_install=45, total_check_ins=25)

        insights = InsightGenerator.generate(check_ins, now=now, profile=engaged)
        sleep = [i for i in insights if i.title == "Sleep-Mood Connection"]

        assert len(sleep) == 1
        assert sleep[0].type == InsightType.CORRELATION
        assert sleep[0].confidence == pytest.approx(1.0)

    def test_task_and_goal_insights_are_included(self, now):
        from flect_analytics.schemas.planning import Task, TaskPriority
        from flect_analytics.services.insight_generator import InsightGenerator

        completed_at = datetime(2024, 6, 13, 9, 0, tzinfo=timezone.utc)
        tasks = [
            Task(
                title=f"task {n}",
                priority=TaskPriority.HIGH,
                is_completed=True,
                created_at=completed_at - timedelta(hours=2),
                completed_at=completed_at,
                estimated_hours=0.5,
            )
            for n in range(10)
        ]
        insights = InsightGenerator.generate([], tasks, now=now)
        titles = [i.title for i in insights]

        assert "Task Priority Pattern" in titles
        assert "Task Completion Time Pattern" in titles


class TestFilterInsights:
    """Tests for the shared confidence/expiry gate."""

    def test_expired_and_low_confidence_are_removed(self, now):
        from flect_analytics.schemas.insight import Insight, InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        kept = Insight(type=InsightType.PATTERN, title="kept", description="", confidence=0.7)
        weak = Insight(type=InsightType.PATTERN, title="weak", description="", confidence=0.59)
        expired = Insight(
            type=InsightType.PATTERN,
            title="expired",
            description="",
            confidence=0.95,
            valid_until=now - timedelta(days=1),
        )
        assert [i.title for i in InsightGenerator.filter_insights([weak, kept, expired], now)] == ["kept"]

    def test_ties_break_on_recency(self, now):
        from flect_analytics.schemas.insight import Insight, InsightType
        from flect_analytics.services.insight_generator import InsightGenerator

        older = Insight(
            type=InsightType.PATTERN, title="older", description="", confidence=0.8,
            created_at=now - timedelta(hours=1),
        )
        newer = Insight(type=InsightType.PATTERN, title="newer", description="", confidence=0.8, created_at=now)
        ranked = InsightGenerator.filter_insights([older, newer], now)
        assert [i.title for i in ranked] == ["newer", "older"]
