"""Static keyword tables used to score and bucket free-text check-ins."""
from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

from flect_analytics.schemas.checkin import MoodLabel
from flect_analytics.schemas.theme import HappinessTheme, ImprovementTheme


POSITIVE_WORDS: FrozenSet[str] = frozenset({
    "happy", "great", "good", "amazing", "wonderful", "excellent", "fantastic",
    "awesome", "love", "enjoy", "fun", "beautiful", "peaceful", "successful",
    "accomplished", "excited", "grateful", "blessed", "perfect", "delicious",
    "comfortable", "relaxed", "proud", "confident", "energized", "refreshed",
    "satisfied", "content", "joyful", "pleasant",
})

NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    "bad", "terrible", "awful", "horrible", "hate", "stress", "tired",
    "exhausted", "difficult", "hard", "challenging", "frustrating", "annoying",
    "disappointing", "sad", "worried", "anxious", "overwhelmed", "busy",
    "rushed", "sick", "pain", "struggle", "problem", "issue", "conflict",
    "argument",
})

NEUTRAL_SENTIMENT = 0.5

MOOD_LABEL_SENTIMENT: Dict[MoodLabel, float] = {
    MoodLabel.AMAZING: 0.9,
    MoodLabel.AWESOME: 0.9,
    MoodLabel.EXCELLENT: 0.9,
    MoodLabel.FANTASTIC: 0.9,
    MoodLabel.GREAT: 0.9,
    MoodLabel.WONDERFUL: 0.9,
    MoodLabel.JOYFUL: 0.9,
    MoodLabel.EXCITED: 0.9,
    MoodLabel.GRATEFUL: 0.9,
    MoodLabel.PROUD: 0.9,
    MoodLabel.ENERGIZED: 0.9,
    MoodLabel.GOOD: 0.7,
    MoodLabel.CONTENT: 0.7,
    MoodLabel.RELAXED: 0.7,
    MoodLabel.PEACEFUL: 0.7,
    MoodLabel.CONFIDENT: 0.7,
    MoodLabel.SATISFIED: 0.7,
    MoodLabel.REFRESHED: 0.7,
    MoodLabel.OKAY: 0.5,
    MoodLabel.NEUTRAL: 0.5,
    MoodLabel.ROUGH: 0.3,
    MoodLabel.BAD: 0.3,
    MoodLabel.TERRIBLE: 0.3,
    MoodLabel.AWFUL: 0.3,
    MoodLabel.TIRED: 0.3,
    MoodLabel.EXHAUSTED: 0.3,
    MoodLabel.STRESSED: 0.3,
    MoodLabel.FRUSTRATED: 0.3,
    MoodLabel.BUSY: 0.3,
    MoodLabel.SAD: 0.1,
    MoodLabel.WORRIED: 0.1,
    MoodLabel.ANXIOUS: 0.1,
    MoodLabel.OVERWHELMED: 0.1,
    MoodLabel.SICK: 0.1,
}

# Substring keywords; matched against lower-cased text.
HAPPINESS_THEME_KEYWORDS: Dict[HappinessTheme, Tuple[str, ...]] = {
    HappinessTheme.EXERCISE: (
        "workout", "run", "gym", "exercise", "walk", "bike", "swim", "yoga",
        "sport", "active", "movement", "hike",
    ),
    HappinessTheme.SOCIAL: (
        "friend", "family", "dinner", "talk", "call", "visit", "party", "date",
        "together", "social", "people", "community",
    ),
    HappinessTheme.ACHIEVEMENT: (
        "finished", "completed", "accomplished", "achieved", "success", "goal",
        "done", "progress", "win", "milestone", "promotion", "passed",
    ),
    HappinessTheme.NATURE: (
        "outside", "park", "nature", "sun", "beach", "garden", "outdoor",
        "fresh air", "walk", "hike", "weather", "forest",
    ),
    HappinessTheme.CREATIVITY: (
        "art", "music", "write", "create", "design", "paint", "photo",
        "creative", "project", "craft", "build", "draw",
    ),
    HappinessTheme.LEARNING: (
        "learn", "read", "study", "course", "book", "discover", "understand",
        "knowledge", "skill", "research", "class", "lesson",
    ),
    HappinessTheme.RELAXATION: (
        "relax", "rest", "calm", "peace", "quiet", "sleep", "nap", "meditation",
        "bath", "comfort", "chill", "slow morning",
    ),
    HappinessTheme.WORK: (
        "work", "job", "project", "meeting", "career", "colleague", "office",
        "task", "professional", "business", "client", "team",
    ),
    HappinessTheme.FOOD: (
        "food", "cook", "eat", "meal", "restaurant", "coffee", "dinner", "lunch",
        "recipe", "taste", "delicious", "breakfast",
    ),
}

IMPROVEMENT_THEME_KEYWORDS: Dict[ImprovementTheme, Tuple[str, ...]] = {
    ImprovementTheme.HEALTH: (
        "sleep", "exercise", "eat", "health", "diet", "water", "workout",
        "nutrition", "fitness", "wellness", "medical", "doctor",
    ),
    ImprovementTheme.PRODUCTIVITY: (
        "time", "productive", "focus", "efficient", "manage", "plan",
        "schedule", "priority", "work", "task", "procrastinat", "deadline",
    ),
    ImprovementTheme.SOCIAL: (
        "social", "friend", "family", "relationship", "communicate", "connect",
        "people", "partner", "dating", "network", "reach out", "listen",
    ),
    ImprovementTheme.LEARNING: (
        "learn", "study", "read", "skill", "course", "education", "knowledge",
        "practice", "improve", "develop", "class", "language",
    ),
    ImprovementTheme.MINDFULNESS: (
        "meditate", "mindful", "stress", "anxiety", "mental", "calm", "peace",
        "breathe", "present", "gratitude", "therapy", "journal",
    ),
    ImprovementTheme.ORGANIZATION: (
        "clean", "organize", "declutter", "tidy", "sort", "arrange", "space",
        "room", "house", "laundry", "desk", "inbox",
    ),
    ImprovementTheme.FINANCE: (
        "money", "budget", "save", "spend", "financial", "invest", "debt",
        "income", "expense", "cost", "bills", "shopping",
    ),
    ImprovementTheme.HABITS: (
        "habit", "routine", "consistent", "daily", "regular", "practice",
        "discipline", "commitment", "change", "behavior", "screen time", "phone",
    ),
}

# Words skipped when picking a keyword to echo back in a follow-up question.
STOP_WORDS: FrozenSet[str] = frozenset({
    "with", "and", "the", "a", "an", "to", "for", "of", "in", "on", "at",
    "my", "was", "that", "this", "had", "got",
})
