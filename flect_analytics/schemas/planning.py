from __future__ import annotations

from datetime import date, datetime
from enum import Enum as PyEnum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from flect_analytics.utils.date_utils import utcnow


class TaskPriority(str, PyEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GoalCategory(str, PyEnum):
    HEALTH = "health"
    CAREER = "career"
    LEARNING = "learning"
    RELATIONSHIPS = "relationships"
    FINANCE = "finance"
    PERSONAL = "personal"
    CREATIVITY = "creativity"
    OTHER = "other"


class Task(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)


class Goal(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    category: GoalCategory = GoalCategory.OTHER
    start_date: date
    end_date: date
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    is_completed: bool = False
    is_active: bool = True

    @property
    def progress_percentage(self) -> int:
        return int(self.progress * 100)
