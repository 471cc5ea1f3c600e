from __future__ import annotations

from datetime import date
from enum import Enum, IntEnum
from typing import List

from pydantic import BaseModel, Field


class EngagementTier(IntEnum):
    NEWCOMER = 0
    EXPLORING = 1
    ENGAGED = 2
    COMMITTED = 3

    @property
    def display_name(self) -> str:
        return {
            EngagementTier.NEWCOMER: "Getting Started",
            EngagementTier.EXPLORING: "Exploring Patterns",
            EngagementTier.ENGAGED: "Building Habits",
            EngagementTier.COMMITTED: "Self-Aware",
        }[self]

    @property
    def description(self) -> str:
        return {
            EngagementTier.NEWCOMER: "Welcome! Just focus on daily check-ins.",
            EngagementTier.EXPLORING: "I'm starting to notice patterns in your responses.",
            EngagementTier.ENGAGED: "Let's dive deeper into your behavioral insights.",
            EngagementTier.COMMITTED: "You've unlocked advanced personal intelligence.",
        }[self]


class JourneyStage(str, Enum):
    ONBOARDING = "onboarding"
    FIRST_WEEK = "first_week"
    SECOND_WEEK = "second_week"
    FIRST_MONTH = "first_month"
    CONSISTENT = "consistent"
    ENGAGED = "engaged"
    CASUAL = "casual"


class CalendarDayState(str, Enum):
    HAS_CHECK_IN = "has_check_in"
    STREAK_GAP = "streak_gap"
    NO_CHECK_IN = "no_check_in"


class StreakState(BaseModel):
    current_streak: int = Field(ge=0, default=0)
    longest_streak: int = Field(ge=0, default=0)
    dates: List[date] = Field(default_factory=list)


class EngagementProfile(BaseModel):
    days_since_install: int = Field(ge=0, default=0)
    total_check_ins: int = Field(ge=0, default=0)
    current_streak: int = Field(ge=0, default=0)
    longest_streak: int = Field(ge=0, default=0)
    average_check_ins_per_week: float = Field(ge=0, default=0.0)

    @property
    def level(self) -> EngagementTier:
        from flect_analytics.services.engagement_service import EngagementTierCalculator

        return EngagementTierCalculator.tier(self.days_since_install, self.total_check_ins)

    @property
    def should_get_smart_questions(self) -> bool:
        return self.level >= EngagementTier.EXPLORING and self.total_check_ins >= 5

    @property
    def should_get_deep_insights(self) -> bool:
        return self.level >= EngagementTier.ENGAGED and self.total_check_ins >= 20
