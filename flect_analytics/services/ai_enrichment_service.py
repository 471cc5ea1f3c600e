"""
AI enrichment for a freshly submitted check-in.

Local analysis always runs first. The relay call is then awaited with a
bounded timeout; on success its follow-up question and insights are merged
in. On any failure the local result stands and a deterministic fallback
response is returned; users who qualify for smart questions also get it
attached to the check-in as a follow-up.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from flect_analytics.core.config import settings
from flect_analytics.core.exceptions import RelayError
from flect_analytics.schemas.checkin import CheckIn
from flect_analytics.schemas.engagement import EngagementProfile
from flect_analytics.schemas.insight import Insight, InsightType
from flect_analytics.schemas.planning import Goal, Task
from flect_analytics.schemas.relay import (
    HistoryEntry,
    JourneyMetadata,
    RelayInsight,
    RelayRequest,
    RelayResponse,
    ThemeAnalysis,
)
from flect_analytics.services.checkin_service import CheckinService
from flect_analytics.services.engagement_service import EngagementTierCalculator, journey_day, journey_stage
from flect_analytics.services.insight_generator import InsightGenerator
from flect_analytics.utils.date_utils import ensure_aware, utcnow
from flect_analytics.utils.text_cleaning import extract_keyword

logger = logging.getLogger(__name__)


class AIRelayClient:
    """Posts check-ins to the relay function and validates what comes back."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.AI_RELAY_URL
        self.api_key = api_key if api_key is not None else settings.AI_RELAY_API_KEY
        self.timeout = timeout or settings.AI_RELAY_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def process_check_in(self, request: RelayRequest) -> RelayResponse:
        payload = request.model_dump(by_alias=True, mode="json")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise RelayError(f"Relay request failed: {e}") from e

        if response.status_code != 200:
            raise RelayError(
                f"Relay returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return RelayResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise RelayError(f"Malformed relay response: {e}", status_code=response.status_code) from e


def build_relay_request(
    check_in: CheckIn,
    history: Iterable[CheckIn],
    profile: EngagementProfile,
    *,
    journey_start: Optional[date] = None,
    today: Optional[date] = None,
    sample_size: Optional[int] = None,
) -> RelayRequest:
    limit = sample_size if sample_size is not None else settings.AI_HISTORY_SAMPLE_SIZE
    sample = CheckinService.recent((c for c in history if c.id != check_in.id), limit)

    if journey_start is not None:
        day = journey_day(journey_start, today)
    else:
        day = profile.days_since_install + 1

    return RelayRequest(
        happy_text=check_in.happy_text,
        improve_text=check_in.improve_text,
        energy=check_in.energy,
        sleep=check_in.sleep,
        social=check_in.social,
        highlight=check_in.highlight,
        wellbeing_score=check_in.wellbeing_score,
        user_history_sample=[
            HistoryEntry(
                happy_text=c.happy_text,
                improve_text=c.improve_text,
                date=c.date.isoformat(),
                energy=c.energy,
                sleep=c.sleep,
                social=c.social,
                highlight=c.highlight,
            )
            for c in sample
        ],
        journey_metadata=JourneyMetadata(
            journey_day=day,
            journey_stage=journey_stage(day, profile.current_streak, profile.total_check_ins).value,
            total_check_ins=profile.total_check_ins,
            consecutive_check_in_days=profile.current_streak,
            engagement_tier=profile.level.name.lower(),
        ),
    )


class FallbackResponder:
    """Local stand-in for the relay's follow-up question."""

    STATIC_RESPONSE = (
        "Thank you for checking in today! What's one small thing you're looking forward to tomorrow?"
    )

    @staticmethod
    def smart_question(check_in: CheckIn) -> str:
        templates = [
            f"How did {check_in.improve_text} go yesterday?",
            f"I notice you often mention {extract_keyword(check_in.happy_text)}. What makes it special?",
            "You've been consistent with check-ins! What's motivating you?",
            f"Any progress on {check_in.improve_text} today?",
        ]
        # Same day always gets the same question
        return templates[check_in.date.toordinal() % len(templates)]

    @classmethod
    def respond(cls, check_in: CheckIn, profile: EngagementProfile) -> str:
        if profile.should_get_smart_questions:
            return cls.smart_question(check_in)
        return cls.STATIC_RESPONSE


_RELAY_TYPES = {t.value: t for t in InsightType}


def convert_relay_insights(
    relay_insights: Sequence[RelayInsight],
    *,
    now: Optional[datetime] = None,
) -> List[Insight]:
    current = ensure_aware(now or utcnow())
    converted: List[Insight] = []
    for item in relay_insights:
        title = (item.title or "").strip()[:100]
        if not title:
            logger.debug("Skipping relay insight without a title")
            continue
        confidence = max(0.0, min(1.0, item.confidence))
        converted.append(
            Insight(
                type=_RELAY_TYPES.get(item.type, InsightType.PATTERN),
                title=title,
                description=item.description,
                confidence=confidence,
                data_points=int(confidence * 100),
                created_at=current,
            )
        )
    return converted


@dataclass
class EnrichmentResult:
    check_in: CheckIn
    insights: List[Insight]
    used_fallback: bool
    response: str
    themes: Optional[ThemeAnalysis] = None
    engagement_level: Optional[str] = None
    errors: List[str] = field(default_factory=list)


class AIEnrichmentService:
    def __init__(
        self,
        client: Optional[AIRelayClient] = None,
        *,
        enabled: Optional[bool] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client or AIRelayClient()
        self.enabled = settings.AI_ENRICHMENT_ENABLED if enabled is None else enabled
        self.timeout = timeout or settings.AI_RELAY_TIMEOUT_SECONDS

    async def enrich(
        self,
        check_in: CheckIn,
        history: Iterable[CheckIn],
        *,
        tasks: Iterable[Task] = (),
        goals: Iterable[Goal] = (),
        journey_start: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> EnrichmentResult:
        current = ensure_aware(now or utcnow())
        all_check_ins = CheckinService.upsert(history, check_in)
        profile = EngagementTierCalculator.build_profile(all_check_ins, current)

        local = InsightGenerator.generate(all_check_ins, tasks, goals, now=current, profile=profile)

        if not self.enabled:
            logger.info("AI enrichment disabled, using local analysis only")
            return self._fallback(check_in, local, profile, current, "disabled")

        request = build_relay_request(
            check_in, all_check_ins, profile, journey_start=journey_start, today=current.date()
        )
        try:
            response = await asyncio.wait_for(self.client.process_check_in(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"AI relay timed out after {self.timeout}s, falling back to local response")
            return self._fallback(check_in, local, profile, current, "timeout")
        except RelayError as e:
            logger.warning(f"AI relay failed, falling back to local response: {e}")
            return self._fallback(check_in, local, profile, current, str(e))

        updated = CheckinService.attach_ai_response(check_in, response.ai_response, now=current)
        merged = InsightGenerator.filter_insights(
            local + convert_relay_insights(response.insights, now=current), current
        )
        logger.info(f"AI enrichment succeeded: {len(response.insights)} relay insights, {len(merged)} kept")
        return EnrichmentResult(
            check_in=updated,
            insights=merged,
            used_fallback=False,
            response=response.ai_response,
            themes=response.themes,
            engagement_level=response.engagement_level,
        )

    @staticmethod
    def _fallback(
        check_in: CheckIn,
        local: List[Insight],
        profile: EngagementProfile,
        now: datetime,
        reason: str,
    ) -> EnrichmentResult:
        text = FallbackResponder.respond(check_in, profile)
        updated = check_in
        # Only smart questions become a follow-up on the check-in
        if profile.should_get_smart_questions:
            updated = CheckinService.attach_ai_response(check_in, text, now=now)
        return EnrichmentResult(
            check_in=updated, insights=local, used_fallback=True, response=text, errors=[reason]
        )
