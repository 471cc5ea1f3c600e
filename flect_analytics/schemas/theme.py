from __future__ import annotations

from enum import Enum


# Member order is the tie-break order when picking a dominant theme.

class HappinessTheme(str, Enum):
    EXERCISE = "exercise"
    SOCIAL = "social"
    ACHIEVEMENT = "achievement"
    NATURE = "nature"
    CREATIVITY = "creativity"
    LEARNING = "learning"
    RELAXATION = "relaxation"
    WORK = "work"
    FOOD = "food"
    OTHER = "other"


class ImprovementTheme(str, Enum):
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    SOCIAL = "social"
    LEARNING = "learning"
    MINDFULNESS = "mindfulness"
    ORGANIZATION = "organization"
    FINANCE = "finance"
    HABITS = "habits"
    OTHER = "other"
