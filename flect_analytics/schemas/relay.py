"""Request/response shapes exchanged with the AI relay function."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RelayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryEntry(RelayModel):
    happy_text: str
    improve_text: str
    date: str
    energy: Optional[int] = None
    sleep: Optional[int] = None
    social: Optional[int] = None
    highlight: Optional[str] = None


class JourneyMetadata(RelayModel):
    journey_day: int = Field(ge=0, default=0)
    journey_stage: str = "onboarding"
    total_check_ins: int = Field(ge=0, default=0)
    consecutive_check_in_days: int = Field(ge=0, default=0)
    engagement_tier: str = "newcomer"


class RelayRequest(RelayModel):
    happy_text: str
    improve_text: str
    energy: Optional[int] = None
    sleep: Optional[int] = None
    social: Optional[int] = None
    highlight: Optional[str] = None
    wellbeing_score: Optional[int] = None
    user_history_sample: List[HistoryEntry] = Field(default_factory=list)
    journey_metadata: JourneyMetadata = Field(default_factory=JourneyMetadata)


class RelayInsight(RelayModel):
    type: str = "pattern"
    title: str
    description: str = ""
    confidence: float = 0.0


class ThemeAnalysis(RelayModel):
    happiness: List[str] = Field(default_factory=list)
    improvement: List[str] = Field(default_factory=list)


class RelayResponse(RelayModel):
    ai_response: str
    insights: List[RelayInsight] = Field(default_factory=list)
    themes: ThemeAnalysis = Field(default_factory=ThemeAnalysis)
    engagement_level: str = "developing"
