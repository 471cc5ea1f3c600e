"""Pydantic schemas for derived insights."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from flect_analytics.utils.date_utils import ensure_aware, utcnow


class InsightType(str, Enum):
    PATTERN = "pattern"
    CORRELATION = "correlation"
    PREDICTION = "prediction"
    SUGGESTION = "suggestion"
    MILESTONE = "milestone"
    STREAK = "streak"

    @property
    def display_name(self) -> str:
        return _INSIGHT_DISPLAY_NAMES[self]


_INSIGHT_DISPLAY_NAMES: Dict[InsightType, str] = {
    InsightType.PATTERN: "Pattern",
    InsightType.CORRELATION: "Connection",
    InsightType.PREDICTION: "Prediction",
    InsightType.SUGGESTION: "Suggestion",
    InsightType.MILESTONE: "Milestone",
    InsightType.STREAK: "Streak",
}


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return {
            ConfidenceLevel.LOW: "Emerging Pattern",
            ConfidenceLevel.MEDIUM: "Likely Pattern",
            ConfidenceLevel.HIGH: "Strong Pattern",
        }[self]


class InsightMetadata(BaseModel):
    """Supporting data attached to an insight."""
    related_check_in_ids: Optional[List[UUID]] = None
    keywords: Optional[List[str]] = None
    frequency_data: Optional[Dict[str, int]] = None
    time_patterns: Optional[Dict[str, str]] = None


class Insight(BaseModel):
    """A derived observation about the user's patterns."""
    id: UUID = Field(default_factory=uuid4)
    type: InsightType
    title: str = Field(min_length=1, max_length=100)
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    data_points: int = Field(ge=0, default=0)
    created_at: datetime = Field(default_factory=utcnow)
    valid_until: Optional[datetime] = None
    is_active: bool = True
    metadata: Optional[InsightMetadata] = None

    @property
    def confidence_level(self) -> ConfidenceLevel:
        if self.confidence >= 0.8:
            return ConfidenceLevel.HIGH
        if self.confidence >= 0.6:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.valid_until is None:
            return False
        current = ensure_aware(now or utcnow())
        return current > ensure_aware(self.valid_until)
