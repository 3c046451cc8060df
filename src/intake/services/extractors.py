"""Regex extractors for the four entity families.

Each extractor runs its patterns over the lower-cased input and turns every
match into a ParsedItem, or drops it when the builder rejects the match (title
too short, impossible clock time). ``reconcile`` then settles matches that
cover the same stretch of text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from intake.schemas import ParseRequest, UserPreferences
from intake.services import confidence, inference
from intake.services.inference import DURATION_UNIT
from intake.services.results import (
    ItemType,
    ParsedGoal,
    ParsedHabit,
    ParsedItem,
    ParsedTask,
    ParsedTimeBlock,
)

logger = logging.getLogger(__name__)

# A clause starts at the beginning of the input or after ";" / newline
CLAUSE_START = r"(?:^|(?<=[;\n]))\s*"
END = r"\s*(?=[;\n]|$)"
TITLE = r"[^;\n]+?"
# Bounded so a label that never reaches "from"/"at" cannot scan the whole input
BLOCK_LABEL = r"[^;\n]{1,80}?"

DURATION_TAIL = rf"(?:\s+(?:for|in)\s+(?P<amount>\d+)\s*(?P<unit>{DURATION_UNIT})\b)?"
TASK_DEADLINE_TAIL = r"(?:\s+(?P<deadline_word>by|before|due)\s+(?P<deadline>[^;\n]+?))?"
GOAL_DEADLINE_TAIL = r"(?:\s+by\s+(?P<deadline>[^;\n]+?))?"
RANGE_SEP = r"\s*(?:-|–|to|until|till)\s*"
PERIOD = r"(?:day|morning|evening|night|week|month|(?:mon|tues|wednes|thurs|fri|satur|sun)day)"

DEFAULT_BLOCK_MINUTES = 60


def _clock(prefix: str) -> str:
    return (
        rf"(?P<{prefix}_hour>\d{{1,2}})(?::(?P<{prefix}_minute>\d{{2}}))?"
        rf"\s*(?P<{prefix}_meridiem>am|pm)?"
    )


@dataclass
class Candidate:
    """A built item plus the character span of the match that produced it."""

    item: ParsedItem
    start: int
    end: int

    def overlaps(self, other: Candidate) -> bool:
        return self.start < other.end and other.start < self.end


class PatternExtractor:
    """Base class: subclasses list their patterns and implement ``build``."""

    item_type: ItemType
    patterns: tuple[re.Pattern[str], ...] = ()

    def extract(self, text: str, request: ParseRequest, now: datetime) -> list[Candidate]:
        lowered = text.lower()
        # Titles keep the caller's casing when lower() did not shift offsets
        source = text if len(lowered) == len(text) else lowered

        candidates = []
        for pattern in self.patterns:
            for match in pattern.finditer(lowered):
                item = self.build(match, source, request, now)
                if item is None:
                    logger.debug("%s match rejected: %r", self.item_type.value, match.group(0))
                    continue
                candidates.append(Candidate(item, match.start(), match.end()))
        return candidates

    def build(
        self, match: re.Match[str], source: str, request: ParseRequest, now: datetime
    ) -> ParsedItem | None:
        raise NotImplementedError


def _group(match: re.Match[str], source: str, name: str) -> str | None:
    if match.group(name) is None:
        return None
    return source[match.start(name) : match.end(name)].strip()


def _preferences(request: ParseRequest) -> UserPreferences:
    if request.context is not None:
        return request.context.user_preferences
    return UserPreferences()


class TaskExtractor(PatternExtractor):
    item_type = ItemType.TASK
    patterns = (
        re.compile(
            rf"{CLAUSE_START}(?:task|todo|to-do)\s*:\s*(?P<title>{TITLE})"
            rf"{DURATION_TAIL}{TASK_DEADLINE_TAIL}{END}"
        ),
        re.compile(
            rf"\b(?P<title>(?:finish|complete)\s+{TITLE}){DURATION_TAIL}{TASK_DEADLINE_TAIL}{END}"
        ),
    )

    def build(self, match, source, request, now):
        title = _group(match, source, "title")
        if not title or len(title) < 2:
            return None

        duration = None
        if match.group("amount"):
            duration = inference.to_minutes(int(match.group("amount")), match.group("unit"))

        deadline = None
        deadline_text = _group(match, source, "deadline")
        if deadline_text:
            deadline = inference.resolve_date(deadline_text, now)
            if deadline is None:
                title = f"{title} {match.group('deadline_word')} {deadline_text}"
        if deadline is None:
            deadline = inference.extract_deadline(request.input, now)

        task = ParsedTask(
            title=title,
            estimated_duration=duration,
            priority=inference.infer_priority(title, request.input),
            context=inference.extract_context(request.input),
            energy_required=inference.infer_energy_level(title),
            type=inference.infer_task_kind(title),
            deadline=deadline,
        )
        score = confidence.score_task(
            title, request.input, has_duration=duration is not None, has_deadline=deadline is not None
        )
        return ParsedItem(ItemType.TASK, task, score.total)


class TimeBlockExtractor(PatternExtractor):
    item_type = ItemType.TIMEBLOCK
    patterns = (
        re.compile(
            rf"\b(?:from|at)\s+{_clock('start')}{RANGE_SEP}{_clock('end')}\b"
            rf"(?:\s+(?P<label>{TITLE}))?{END}"
        ),
        re.compile(
            r"\b(?P<start_hour>\d{1,2}):(?P<start_minute>\d{2})\s*(?P<start_meridiem>am|pm)?"
            rf"{RANGE_SEP}"
            r"(?P<end_hour>\d{1,2}):(?P<end_minute>\d{2})\s*(?P<end_meridiem>am|pm)?\b"
            rf"(?:\s+(?P<label>{TITLE}))?{END}"
        ),
        re.compile(
            rf"\bblock\s+(?P<label>{BLOCK_LABEL})\s+(?:from|at)\s+{_clock('start')}"
            rf"(?:{RANGE_SEP}{_clock('end')})?\b{END}"
        ),
    )

    def build(self, match, source, request, now):
        groups = match.groupdict()
        start_meridiem = groups.get("start_meridiem")
        end_meridiem = groups.get("end_meridiem")
        has_end = groups.get("end_hour") is not None

        start_clock = _clock_minutes(groups["start_hour"], groups.get("start_minute"), start_meridiem)
        if start_clock is None:
            return None

        end_clock = None
        if has_end:
            end_clock = _clock_minutes(groups["end_hour"], groups.get("end_minute"), end_meridiem)
            if end_clock is None:
                return None
            if start_meridiem is None and end_meridiem is not None:
                start_clock = _inherit_meridiem(
                    int(groups["start_hour"]), groups.get("start_minute"), end_meridiem, end_clock
                )

        label = (match.group("label") or "").strip()
        lowered = source.lower()
        clause_start = max(lowered.rfind(";", 0, match.start()), lowered.rfind("\n", 0, match.start()))
        description = f"{lowered[clause_start + 1 : match.start()]} {label}".strip()
        block_type = inference.infer_block_type(description)

        start_time = now.replace(
            hour=start_clock // 60, minute=start_clock % 60, second=0, microsecond=0
        )
        if end_clock is not None:
            end_time = now.replace(
                hour=end_clock // 60, minute=end_clock % 60, second=0, microsecond=0
            )
        else:
            end_time = start_time + timedelta(minutes=_default_block_minutes(block_type, request))
        # An end at or before the start runs into the next day
        if end_time <= start_time:
            end_time += timedelta(days=1)

        block = ParsedTimeBlock(
            start_time=start_time,
            end_time=end_time,
            duration=int((end_time - start_time).total_seconds() // 60),
            type=block_type,
            energy_level=inference.infer_energy_level(description),
            flexibility=inference.infer_flexibility(description),
        )
        score = confidence.score_timeblock(has_start=True, has_end=has_end, label=label)
        return ParsedItem(ItemType.TIMEBLOCK, block, score.total)


def _clock_minutes(hour_text: str, minute_text: str | None, meridiem: str | None) -> int | None:
    """Minutes after midnight, or None for an impossible clock time."""
    hour = int(hour_text)
    minute = int(minute_text or 0)
    if minute > 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if meridiem == "pm" else 0)
    elif hour > 23:
        return None
    return hour * 60 + minute


def _inherit_meridiem(hour: int, minute_text: str | None, end_meridiem: str, end_clock: int) -> int:
    # "from 2 to 4pm" means 14:00; "from 11 to 1pm" means 11:00
    as_end = _clock_minutes(str(hour), minute_text, end_meridiem)
    if as_end is not None and as_end <= end_clock:
        return as_end
    other = "am" if end_meridiem == "pm" else "pm"
    flipped = _clock_minutes(str(hour), minute_text, other)
    if flipped is not None:
        return flipped
    return _clock_minutes(str(hour), minute_text, None) or 0


def _default_block_minutes(block_type: str, request: ParseRequest) -> int:
    if block_type == "deep":
        return _preferences(request).deep_work_preferences.max_block_duration
    return DEFAULT_BLOCK_MINUTES


class GoalExtractor(PatternExtractor):
    item_type = ItemType.GOAL
    patterns = (
        re.compile(
            rf"\b(?:goal|objective|target)\s*:\s*(?P<title>{TITLE}){GOAL_DEADLINE_TAIL}{END}"
        ),
        re.compile(
            rf"{CLAUSE_START}(?:goal|objective|target)\s+(?P<title>{TITLE}){GOAL_DEADLINE_TAIL}{END}"
        ),
        re.compile(rf"\bachieve\s+(?P<title>{TITLE}){GOAL_DEADLINE_TAIL}{END}"),
        re.compile(rf"\bwant\s+to\s+(?P<title>{TITLE}){GOAL_DEADLINE_TAIL}{END}"),
    )

    def build(self, match, source, request, now):
        title = _group(match, source, "title")
        if not title or len(title) < 3:
            return None

        deadline = None
        deadline_text = _group(match, source, "deadline")
        if deadline_text:
            deadline = inference.resolve_date(deadline_text, now)
            if deadline is None:
                # "stand by myself" is part of the goal, not a date
                title = f"{title} by {deadline_text}"

        goal = ParsedGoal(
            title=title,
            deadline=deadline,
            category=inference.infer_goal_category(title),
            priority=inference.infer_priority(title, request.input),
            measurable=inference.is_measurable(title),
        )
        score = confidence.score_goal(
            title, request.input, has_deadline=deadline is not None, explicit=True
        )
        return ParsedItem(ItemType.GOAL, goal, score.total)


class HabitExtractor(PatternExtractor):
    item_type = ItemType.HABIT
    patterns = (
        re.compile(rf"\b(?:habit|routine|daily|weekly|monthly)\b\s*:?\s*(?P<title>{TITLE}){END}"),
        re.compile(rf"\bevery\s+{PERIOD}\s+(?P<title>{TITLE}){END}"),
        re.compile(rf"\bconsistently\s+(?P<title>{TITLE}){END}"),
        re.compile(
            rf"{CLAUSE_START}(?P<title>{TITLE})\s+(?:every\s+{PERIOD}|daily|weekly|monthly){END}"
        ),
    )

    def build(self, match, source, request, now):
        title = _group(match, source, "title")
        if not title or len(title) < 2:
            return None

        habit = ParsedHabit(
            title=title,
            frequency=inference.infer_frequency(request.input),
            category=inference.infer_habit_category(title),
            time_of_day=inference.infer_time_of_day(request.input),
            estimated_duration=inference.estimate_habit_duration(title),
        )
        score = confidence.score_habit(request.input)
        return ParsedItem(ItemType.HABIT, habit, score.total)


EXTRACTORS: tuple[PatternExtractor, ...] = (
    TaskExtractor(),
    TimeBlockExtractor(),
    GoalExtractor(),
    HabitExtractor(),
)


def reconcile(candidates: list[Candidate]) -> list[ParsedItem]:
    """Keep the best candidate for each stretch of text.

    Candidates are ranked by confidence, then earlier start, then longer span;
    one that overlaps an already kept candidate is dropped. Survivors come
    back in reading order.
    """
    ranked = sorted(candidates, key=lambda c: (-c.item.confidence, c.start, -(c.end - c.start)))
    kept: list[Candidate] = []
    for candidate in ranked:
        if any(candidate.overlaps(other) for other in kept):
            continue
        kept.append(candidate)
    kept.sort(key=lambda c: c.start)
    return [c.item for c in kept]


def extract_all(
    text: str,
    request: ParseRequest,
    now: datetime,
    extractors: tuple[PatternExtractor, ...] = EXTRACTORS,
) -> list[ParsedItem]:
    candidates: list[Candidate] = []
    for extractor in extractors:
        candidates.extend(extractor.extract(text, request, now))
    return reconcile(candidates)
