from __future__ import annotations

import datetime as dt
from enum import Enum as PyEnum, IntEnum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from flect_analytics.utils.date_utils import ensure_aware, utcnow as _utcnow


class CheckInState(str, PyEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FOLLOW_UP_PENDING = "follow_up_pending"
    FOLLOW_UP_COMPLETED = "follow_up_completed"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").replace("follow up", "follow-up").capitalize()


class Level(IntEnum):
    """3-point ordinal scale shared by energy, sleep and social fields."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


class MoodLabel(str, PyEnum):
    """Known mood vocabulary. Check-ins may carry labels outside this set."""

    AMAZING = "Amazing"
    AWESOME = "Awesome"
    EXCELLENT = "Excellent"
    FANTASTIC = "Fantastic"
    GREAT = "Great"
    WONDERFUL = "Wonderful"
    JOYFUL = "Joyful"
    EXCITED = "Excited"
    GRATEFUL = "Grateful"
    PROUD = "Proud"
    ENERGIZED = "Energized"
    GOOD = "Good"
    CONTENT = "Content"
    RELAXED = "Relaxed"
    PEACEFUL = "Peaceful"
    CONFIDENT = "Confident"
    SATISFIED = "Satisfied"
    REFRESHED = "Refreshed"
    OKAY = "Okay"
    NEUTRAL = "Neutral"
    ROUGH = "Rough"
    BAD = "Bad"
    TERRIBLE = "Terrible"
    AWFUL = "Awful"
    TIRED = "Tired"
    EXHAUSTED = "Exhausted"
    STRESSED = "Stressed"
    FRUSTRATED = "Frustrated"
    BUSY = "Busy"
    SAD = "Sad"
    WORRIED = "Worried"
    ANXIOUS = "Anxious"
    OVERWHELMED = "Overwhelmed"
    SICK = "Sick"


class CheckInBase(BaseModel):
    happy_text: str = ""
    improve_text: str = ""
    mood: str = MoodLabel.OKAY.value
    energy: Optional[Level] = None
    sleep: Optional[Level] = None
    social: Optional[Level] = None
    highlight: Optional[str] = None
    wellbeing_score: Optional[int] = Field(default=None, ge=0, le=100)


class CheckInCreate(CheckInBase):
    """Submission payload. Both reflection texts are required."""

    happy_text: str = Field(min_length=1)
    improve_text: str = Field(min_length=1)
    date: Optional[dt.date] = None

    @field_validator("happy_text", "improve_text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text cannot be blank")
        return v.strip()


class CheckIn(CheckInBase):
    """A single daily reflection as stored by the persistence layer."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    date: dt.date = Field(default_factory=dt.date.today, frozen=True)
    completion_state: CheckInState = CheckInState.COMPLETED
    ai_response: Optional[str] = None
    ai_question_asked: Optional[str] = None
    follow_up_completed: bool = False
    created_at: dt.datetime = Field(default_factory=_utcnow)
    updated_at: dt.datetime = Field(default_factory=_utcnow)

    @model_validator(mode="before")
    @classmethod
    def default_updated_at(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("created_at") and not data.get("updated_at"):
            data = {**data, "updated_at": data["created_at"]}
        return data

    @model_validator(mode="after")
    def timestamps_ordered(self) -> "CheckIn":
        if ensure_aware(self.updated_at) < ensure_aware(self.created_at):
            raise ValueError("updated_at cannot be earlier than created_at")
        return self

    @property
    def has_ai_response(self) -> bool:
        return bool(self.ai_response)

    @property
    def is_detailed(self) -> bool:
        return (
            self.energy is not None
            and self.sleep is not None
            and self.social is not None
            and self.highlight is not None
        )
