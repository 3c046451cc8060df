"""Clarification questions and answers.

The generator inspects accepted candidates and asks about missing fields. The
resolver re-runs the parser for a previous request once the user answered,
always with a complete context, and then applies the answers it understands
to the fresh result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from intake.schemas import ParseRequest, default_context
from intake.services.heuristics import HeuristicClassifier
from intake.services.results import (
    ClarificationRequest,
    ItemType,
    NLParseResult,
    ParsedItem,
    ParsedTask,
    ParsedTimeBlock,
)

if TYPE_CHECKING:
    from intake.services.parser import IntentParser

logger = logging.getLogger(__name__)

DURATION_OPTIONS = ["15 minutes", "30 minutes", "1 hour", "2+ hours"]
TYPE_OPTIONS = ["Task", "Time Block", "Goal", "Habit"]

_DURATION_ANSWER = re.compile(r"(\d+)\s*\+?\s*(minutes?|mins?|m|hours?|hrs?|h)?\b", re.IGNORECASE)
_CLOCK_ANSWER = re.compile(r"^(\d{1,2}):(\d{2})$")
_TYPE_ANSWERS = {
    "task": ItemType.TASK,
    "time block": ItemType.TIMEBLOCK,
    "timeblock": ItemType.TIMEBLOCK,
    "goal": ItemType.GOAL,
    "habit": ItemType.HABIT,
}


class ClarificationGenerator:
    """Emit follow-up questions for fields the candidates are missing."""

    def generate(self, items: list[ParsedItem]) -> list[ClarificationRequest]:
        clarifications = []
        for item in items:
            if isinstance(item.data, ParsedTask) and item.data.estimated_duration is None:
                clarifications.append(
                    ClarificationRequest(
                        field="estimatedDuration",
                        question=f'How long do you estimate "{item.data.title}" will take?',
                        options=list(DURATION_OPTIONS),
                        required=False,
                    )
                )
            if isinstance(item.data, ParsedTimeBlock) and item.data.start_time is None:
                clarifications.append(
                    ClarificationRequest(
                        field="startTime",
                        question="What time should this time block start?",
                        required=True,
                    )
                )
        return clarifications


def type_clarification() -> ClarificationRequest:
    return ClarificationRequest(
        field="type",
        question="What type of item is this?",
        options=list(TYPE_OPTIONS),
        required=True,
    )


def rephrase_clarification() -> ClarificationRequest:
    return ClarificationRequest(
        field="input",
        question="Could you rephrase your request more clearly?",
        required=True,
    )


def parse_duration_answer(value: Any) -> int | None:
    """Turn "30 minutes", "1 hour", "2+ hours" or a plain number into minutes."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value > 0 else None
    if not isinstance(value, str):
        return None

    match = _DURATION_ANSWER.search(value)
    if not match:
        return None
    amount = int(match.group(1))
    unit = (match.group(2) or "minutes").lower()
    minutes = amount * 60 if unit.startswith("h") else amount
    return minutes or None


def parse_start_answer(value: Any, now: datetime) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    clock = _CLOCK_ANSWER.match(text)
    if clock:
        hour, minute = int(clock.group(1)), int(clock.group(2))
        if hour > 23 or minute > 59:
            return None
        return now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class ClarificationResolver:
    """Re-parse a request after the user answered its clarifications.

    The original request is never modified. A rephrased ``input`` answer
    replaces the text to parse; ``estimatedDuration``, ``startTime`` and
    ``type`` answers are applied to the fresh result. Other fields are
    ignored.
    """

    def __init__(self, parser: IntentParser):
        self.parser = parser
        self.generator = parser.clarifier

    async def resolve(self, original: ParseRequest, answers: dict[str, Any]) -> NLParseResult:
        now = self.parser.now_for(original)
        update: dict[str, Any] = {}
        if original.context is None:
            update["context"] = default_context(now)

        rephrased = answers.get("input")
        if isinstance(rephrased, str) and rephrased.strip():
            update["input"] = rephrased

        enhanced = original.model_copy(update=update)
        result = await self.parser.parse(enhanced)
        return self.apply_answers(result, answers, now)

    def apply_answers(
        self, result: NLParseResult, answers: dict[str, Any], now: datetime
    ) -> NLParseResult:
        items = list(result.parsed_items)
        clarifications = list(result.clarification_needed)
        answered: set[str] = set()

        # A type answer rebuilds the items, so it goes before field-level answers
        ordered = sorted(answers.items(), key=lambda entry: entry[0] != "type")
        for field_name, value in ordered:
            if field_name == "input":
                continue
            if field_name == "estimatedDuration":
                minutes = parse_duration_answer(value)
                if minutes is None:
                    logger.info("Unusable duration answer: %r", value)
                    continue
                items = [_with_duration(item, minutes) for item in items]
                answered.add(field_name)
            elif field_name == "startTime":
                start = parse_start_answer(value, now)
                if start is None:
                    logger.info("Unusable start time answer: %r", value)
                    continue
                items = [_with_start(item, start) for item in items]
                answered.add(field_name)
            elif field_name == "type":
                item_type = _TYPE_ANSWERS.get(str(value).strip().lower())
                if item_type is None or not any(c.field == "type" for c in clarifications):
                    logger.info("Ignoring type answer %r", value)
                    continue
                classifier = HeuristicClassifier()
                data = classifier.build_generic(item_type, result.raw_input, now)
                items = [ParsedItem(item_type, data, result.confidence)]
                clarifications = self.generator.generate(items)
                answered.add(field_name)
            else:
                logger.debug("No handler for clarification field %r", field_name)

        if not answered:
            return result

        clarifications = [c for c in clarifications if c.field not in answered]
        return replace(result, parsed_items=items, clarification_needed=clarifications)


def _with_duration(item: ParsedItem, minutes: int) -> ParsedItem:
    if isinstance(item.data, ParsedTask) and item.data.estimated_duration is None:
        return replace(item, data=replace(item.data, estimated_duration=minutes))
    return item


def _with_start(item: ParsedItem, start: datetime) -> ParsedItem:
    if isinstance(item.data, ParsedTimeBlock) and item.data.start_time is None:
        end = start + timedelta(minutes=item.data.duration)
        return replace(item, data=replace(item.data, start_time=start, end_time=end))
    return item
