"""Field inference helpers.

Small pure functions that turn free text into typed attributes. Both the
pattern extractors and the heuristic classifier call these, so one phrase
always infers the same priority, energy or category whichever strategy
produced the candidate.
"""

import re
from datetime import datetime, timedelta
from functools import lru_cache

from dateutil import parser as dateparser

from intake.services import keywords as kw

DURATION_UNIT = r"(?:minutes?|mins?|m|hours?|hrs?|h)"

_EXPLICIT_DURATION = re.compile(rf"\b(\d+)\s*({DURATION_UNIT})\b", re.IGNORECASE)
_CONTEXT_WORDS = ("at", "with", "for", "on", "using", "via")
_CONTEXT_PATTERNS = [
    re.compile(rf"\b{word}\s+([\w\s]+?)(?=[.,;]|$)", re.IGNORECASE) for word in _CONTEXT_WORDS
]
_DEADLINE_PATTERNS = [
    re.compile(r"\bdue\s+(.+?)(?=[.,;]|$)", re.IGNORECASE),
    re.compile(r"\bdeadline\s*:?\s*(.+?)(?=[.,;]|$)", re.IGNORECASE),
    re.compile(r"\b(?:by|before)\s+(.+?)(?=[.,;]|$)", re.IGNORECASE),
]
_TODAY = re.compile(r"\btoday\b")
_TOMORROW = re.compile(r"\btomorrow\b")
_NEXT_WEEK = re.compile(r"\bnext\s+week\b")
_WORD_LIKE = re.compile(r"\b[a-z]*[aeiouy][a-z]*\b", re.IGNORECASE)


@lru_cache(maxsize=None)
def _keyword_pattern(words: frozenset[str]) -> re.Pattern[str]:
    parts = []
    for word in sorted(words, key=len, reverse=True):
        escaped = re.escape(word)
        if word[0].isalnum():
            # Whole words plus simple inflections ("meetings", "planned"); a
            # leading digit is allowed so "6am" counts for "am"
            parts.append(rf"(?<![a-z]){escaped}(?:s|es|d|ed|ing)?\b")
        else:
            parts.append(escaped)
    return re.compile("|".join(parts), re.IGNORECASE)


def contains_any(text: str, words: frozenset[str]) -> bool:
    return bool(_keyword_pattern(words).search(text))


def _first_label(text: str, table: tuple[tuple[str, frozenset[str]], ...], default: str) -> str:
    for label, words in table:
        if contains_any(text, words):
            return label
    return default


# === Priority, kind, energy ===


def infer_priority(text: str, full_input: str = "") -> str:
    combined = f"{text} {full_input}"
    if contains_any(combined, kw.URGENT_WORDS):
        return "critical"
    if contains_any(combined, kw.IMPORTANT_WORDS):
        return "high"
    if contains_any(combined, kw.TENTATIVE_WORDS):
        return "low"
    return "medium"


def infer_task_kind(text: str) -> str:
    if contains_any(text, kw.CREATIVE_WORDS):
        return "creative"
    if contains_any(text, kw.DEEP_WORDS):
        return "deep"
    if contains_any(text, kw.ADMIN_WORDS):
        return "admin"
    return "shallow"


def infer_energy_level(text: str) -> str:
    if contains_any(text, kw.HIGH_ENERGY_WORDS):
        return "high"
    if contains_any(text, kw.LOW_ENERGY_WORDS):
        return "low"
    return "medium"


def infer_block_type(text: str) -> str:
    return _first_label(text, kw.BLOCK_TYPES, "shallow")


def infer_flexibility(text: str) -> float:
    if contains_any(text, kw.RIGID_WORDS):
        return kw.RIGID_FLEXIBILITY
    if contains_any(text, kw.FLEXIBLE_WORDS):
        return kw.FLEXIBLE_FLEXIBILITY
    return kw.DEFAULT_FLEXIBILITY


# === Goals and habits ===


def infer_goal_category(text: str) -> str:
    return _first_label(text, kw.GOAL_CATEGORIES, "general")


def infer_habit_category(text: str) -> str:
    return _first_label(text, kw.HABIT_CATEGORIES, "general")


def infer_frequency(text: str) -> str:
    if contains_any(text, kw.MONTHLY_WORDS):
        return "monthly"
    if contains_any(text, kw.WEEKLY_WORDS):
        return "weekly"
    return "daily"


def infer_time_of_day(text: str) -> str:
    return _first_label(text, kw.TIMES_OF_DAY, "any")


def is_measurable(text: str) -> bool:
    return contains_any(text, kw.MEASURABLE_WORDS) or bool(re.search(r"\d+", text))


# === Durations ===


def to_minutes(amount: int, unit: str) -> int:
    """Convert an amount with a duration unit (min, hours, h, ...) to minutes."""
    if unit.lower().startswith("h"):
        return amount * 60
    return amount


def estimate_habit_duration(text: str) -> int:
    match = _EXPLICIT_DURATION.search(text)
    if match:
        return to_minutes(int(match.group(1)), match.group(2))

    if contains_any(text, kw.SHORT_HABITS):
        return kw.SHORT_HABIT_MINUTES
    if contains_any(text, kw.LONG_HABITS):
        return kw.LONG_HABIT_MINUTES
    return kw.DEFAULT_HABIT_MINUTES


def estimate_generic_duration(text: str) -> int:
    minutes = kw.DEFAULT_TASK_MINUTES
    if contains_any(text, kw.SIMPLE_TASK_WORDS):
        minutes = kw.SIMPLE_TASK_MINUTES
    if contains_any(text, kw.COMPLEX_TASK_WORDS):
        minutes = kw.COMPLEX_TASK_MINUTES

    if len(text.split()) > 10:
        minutes = int(minutes * 1.5)
    return minutes


# === Context and dates ===


def extract_context(text: str) -> list[str]:
    """Return preposition-led clauses ("with bob", "at the office") in reading order."""
    found: list[tuple[int, str]] = []
    for pattern in _CONTEXT_PATTERNS:
        for match in pattern.finditer(text):
            found.append((match.start(), match.group(0).strip()))
    found.sort(key=lambda entry: entry[0])
    return [clause for _, clause in found]


def resolve_date(text: str, now: datetime) -> datetime | None:
    """Resolve a date phrase relative to ``now``.

    "today", "tomorrow" and "next week" anywhere in the phrase ("tomorrow
    morning") are offsets from ``now``; anything else gets a literal parse.
    Anything unparseable resolves to None.
    """
    phrase = text.lower().strip()
    if not phrase:
        return None

    if _TOMORROW.search(phrase):
        return now + timedelta(days=1)
    if _TODAY.search(phrase):
        return now
    if _NEXT_WEEK.search(phrase):
        return now + timedelta(days=7)

    try:
        return dateparser.parse(phrase, default=now)
    except (ValueError, OverflowError):
        return None


def extract_deadline(text: str, now: datetime) -> datetime | None:
    for pattern in _DEADLINE_PATTERNS:
        match = pattern.search(text)
        if match:
            resolved = resolve_date(match.group(1), now)
            if resolved:
                return resolved
    return None


# === Titles ===


def truncate_title(text: str, limit: int) -> str:
    return text.strip()[:limit]


def has_word_like_token(text: str) -> bool:
    """True if the text holds at least one pronounceable word of 2+ letters."""
    return any(len(token) >= 2 for token in _WORD_LIKE.findall(text))
