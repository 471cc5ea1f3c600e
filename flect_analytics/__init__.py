"""Check-in analytics: mood scoring, streaks, engagement tiers and insights."""
from flect_analytics.schemas.checkin import CheckIn, CheckInCreate, CheckInState, Level, MoodLabel
from flect_analytics.schemas.engagement import (
    CalendarDayState,
    EngagementProfile,
    EngagementTier,
    JourneyStage,
    StreakState,
)
from flect_analytics.schemas.insight import ConfidenceLevel, Insight, InsightMetadata, InsightType
from flect_analytics.schemas.planning import Goal, GoalCategory, Task, TaskPriority
from flect_analytics.services.checkin_service import CheckinService
from flect_analytics.services.engagement_service import EngagementTierCalculator, journey_stage
from flect_analytics.services.insight_generator import InsightGenerator
from flect_analytics.services.mood_scorer import MoodScorer
from flect_analytics.services.streak_tracker import StreakTracker
from flect_analytics.services.theme_classifier import ThemeClassifier

__version__ = "0.1.0"

__all__ = [
    "CalendarDayState",
    "CheckIn",
    "CheckInCreate",
    "CheckInState",
    "CheckinService",
    "ConfidenceLevel",
    "EngagementProfile",
    "EngagementTier",
    "EngagementTierCalculator",
    "Goal",
    "GoalCategory",
    "Insight",
    "InsightGenerator",
    "InsightMetadata",
    "InsightType",
    "JourneyStage",
    "Level",
    "MoodLabel",
    "MoodScorer",
    "StreakState",
    "StreakTracker",
    "Task",
    "TaskPriority",
    "ThemeClassifier",
    "journey_stage",
]
