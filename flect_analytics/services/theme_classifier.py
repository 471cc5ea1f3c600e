from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from flect_analytics.schemas.theme import HappinessTheme, ImprovementTheme
from flect_analytics.utils.lexicon import HAPPINESS_THEME_KEYWORDS, IMPROVEMENT_THEME_KEYWORDS

ThemeT = TypeVar("ThemeT", bound=Enum)


class ThemeClassifier:
    """Keyword bucketing of free text into the two fixed theme taxonomies."""

    @staticmethod
    def _classify(
        texts: Iterable[Optional[str]],
        keywords: Mapping[ThemeT, Sequence[str]],
        other: ThemeT,
    ) -> Dict[ThemeT, int]:
        themes: Dict[ThemeT, int] = {}
        for text in texts:
            if text is None:
                continue
            lowered = text.lower()
            categorized = False
            for theme, words in keywords.items():
                if any(word in lowered for word in words):
                    themes[theme] = themes.get(theme, 0) + 1
                    categorized = True
            if not categorized:
                themes[other] = themes.get(other, 0) + 1
        return themes

    @classmethod
    def classify_happiness(cls, texts: Iterable[Optional[str]]) -> Dict[HappinessTheme, int]:
        return cls._classify(texts, HAPPINESS_THEME_KEYWORDS, HappinessTheme.OTHER)

    @classmethod
    def classify_improvement(cls, texts: Iterable[Optional[str]]) -> Dict[ImprovementTheme, int]:
        return cls._classify(texts, IMPROVEMENT_THEME_KEYWORDS, ImprovementTheme.OTHER)

    @staticmethod
    def dominant(counts: Mapping[ThemeT, int], theme_type: Type[ThemeT]) -> Optional[Tuple[ThemeT, int]]:
        """Highest-count theme; ties go to the earlier enum member."""
        best: Optional[Tuple[ThemeT, int]] = None
        for theme in theme_type:
            count = counts.get(theme, 0)
            if count > 0 and (best is None or count > best[1]):
                best = (theme, count)
        return best
