from __future__ import annotations

from typing import Dict, Optional

from flect_analytics.schemas.checkin import CheckIn, CheckInState, MoodLabel
from flect_analytics.utils.lexicon import (
    MOOD_LABEL_SENTIMENT,
    NEGATIVE_WORDS,
    NEUTRAL_SENTIMENT,
    POSITIVE_WORDS,
)
from flect_analytics.utils.text_cleaning import tokenize


class MoodScorer:
    """Turns one check-in into a wellbeing score in [0, 1]."""

    BASELINE = 0.5
    HAPPY_WEIGHT = 0.4
    IMPROVE_WEIGHT = 0.1
    MOOD_LABEL_WEIGHT = 0.3

    COMPLETION_BONUS: Dict[CheckInState, float] = {
        CheckInState.COMPLETED: 0.2,
        CheckInState.FOLLOW_UP_COMPLETED: 0.1,
        CheckInState.PENDING: 0.0,
        CheckInState.FOLLOW_UP_PENDING: 0.0,
    }

    @staticmethod
    def sentiment(text: Optional[str]) -> float:
        """Share of positive words among the sentiment words in ``text``.

        Returns 0.5 when no sentiment word is present, including empty text.
        """
        positive = 0
        negative = 0
        for word in tokenize(text):
            if word in POSITIVE_WORDS:
                positive += 1
            elif word in NEGATIVE_WORDS:
                negative += 1

        total = positive + negative
        if total == 0:
            return NEUTRAL_SENTIMENT
        return positive / total

    @staticmethod
    def mood_label_sentiment(label: Optional[str]) -> float:
        # Exact, case-sensitive match; anything else is neutral.
        try:
            return MOOD_LABEL_SENTIMENT[MoodLabel(label)]
        except ValueError:
            return NEUTRAL_SENTIMENT

    @classmethod
    def score(cls, check_in: CheckIn) -> float:
        score = cls.BASELINE
        score += cls.sentiment(check_in.happy_text) * cls.HAPPY_WEIGHT
        # Negative framing is expected in the "to improve" field, so it is inverted and scaled down
        score += (1.0 - cls.sentiment(check_in.improve_text)) * cls.IMPROVE_WEIGHT
        score += cls.mood_label_sentiment(check_in.mood) * cls.MOOD_LABEL_WEIGHT
        score += cls.COMPLETION_BONUS.get(check_in.completion_state, 0.0)
        return max(0.0, min(1.0, score))

    @classmethod
    def mood_points(cls, check_in: CheckIn) -> float:
        """The mood label on the 1-5 point scale used by pattern descriptions.

        Label bands 0.9/0.7/0.5/0.3/0.1 map onto 5/4/3/2/1.
        """
        return 0.5 + 5.0 * cls.mood_label_sentiment(check_in.mood)
