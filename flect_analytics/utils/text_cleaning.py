from __future__ import annotations

import re
from typing import Iterable, Optional

from flect_analytics.utils.lexicon import STOP_WORDS

_WORD_SPLIT_RE = re.compile(r"[\s\W_]+")


def is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def tokenize(text: Optional[str]) -> list[str]:
    """Lower-case whitespace tokens. Punctuation stays attached to its word."""
    if not text:
        return []
    return text.lower().split()


def non_blank(texts: Iterable[Optional[str]]) -> list[str]:
    return [t for t in texts if not is_blank(t)]


def extract_keyword(text: Optional[str], default: str = "that") -> str:
    """First meaningful word (longer than two letters, not a stop word)."""
    if not text:
        return default
    for word in _WORD_SPLIT_RE.split(text.lower()):
        if len(word) > 2 and word not in STOP_WORDS:
            return word
    return default
