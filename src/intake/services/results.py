"""Result types produced by the intake parser.

Every structure here is created fresh per parse call. ``to_dict`` renders
the camelCase shape the planner UI consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class ItemType(str, Enum):
    TASK = "task"
    TIMEBLOCK = "timeblock"
    GOAL = "goal"
    HABIT = "habit"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class ParsedTask:
    title: str
    priority: str = "medium"
    context: list[str] = field(default_factory=list)
    energy_required: str = "medium"
    type: str = "shallow"
    estimated_duration: int | None = None  # minutes
    deadline: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "estimatedDuration": self.estimated_duration,
            "priority": self.priority,
            "context": list(self.context),
            "energyRequired": self.energy_required,
            "type": self.type,
            "deadline": _iso(self.deadline),
        }


@dataclass
class ParsedTimeBlock:
    # Builders always set both times; None only reaches the clarification step
    # when a block comes from somewhere that could not resolve a start.
    start_time: datetime | None
    end_time: datetime | None
    duration: int  # minutes
    type: str = "shallow"
    energy_level: str = "medium"
    flexibility: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        return {
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
            "duration": self.duration,
            "type": self.type,
            "energyLevel": self.energy_level,
            "flexibility": self.flexibility,
        }


@dataclass
class ParsedGoal:
    title: str
    category: str = "general"
    priority: str = "medium"
    measurable: bool = False
    deadline: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "deadline": _iso(self.deadline),
            "category": self.category,
            "priority": self.priority,
            "measurable": self.measurable,
        }


@dataclass
class ParsedHabit:
    title: str
    frequency: str = "daily"
    category: str = "general"
    time_of_day: str = "any"
    estimated_duration: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "frequency": self.frequency,
            "category": self.category,
            "timeOfDay": self.time_of_day,
            "estimatedDuration": self.estimated_duration,
        }


ParsedData = Union[ParsedTask, ParsedTimeBlock, ParsedGoal, ParsedHabit]

_DATA_TYPES: dict[ItemType, type] = {
    ItemType.TASK: ParsedTask,
    ItemType.TIMEBLOCK: ParsedTimeBlock,
    ItemType.GOAL: ParsedGoal,
    ItemType.HABIT: ParsedHabit,
}


@dataclass
class ParsedItem:
    """One candidate entity. ``data`` always matches ``type``."""

    type: ItemType
    data: ParsedData
    confidence: float

    def __post_init__(self) -> None:
        expected = _DATA_TYPES[self.type]
        if not isinstance(self.data, expected):
            raise TypeError(
                f"{self.type.value} item needs {expected.__name__}, got {type(self.data).__name__}"
            )
        self.confidence = clamp_confidence(self.confidence)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "data": self.data.to_dict(),
            "confidence": self.confidence,
        }


@dataclass
class ClarificationRequest:
    field: str
    question: str
    required: bool
    options: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "field": self.field,
            "question": self.question,
            "required": self.required,
        }
        if self.options is not None:
            result["options"] = list(self.options)
        return result


@dataclass
class NLParseResult:
    confidence: float
    parsed_items: list[ParsedItem]
    clarification_needed: list[ClarificationRequest]
    raw_input: str  # Verbatim caller text, never normalized

    def __post_init__(self) -> None:
        self.confidence = clamp_confidence(self.confidence)

    @property
    def is_error(self) -> bool:
        return self.confidence == 0 and not self.parsed_items

    def to_dict(self) -> dict[str, Any]:
        return {
            "confidence": self.confidence,
            "parsedItems": [item.to_dict() for item in self.parsed_items],
            "clarificationNeeded": [c.to_dict() for c in self.clarification_needed],
            "rawInput": self.raw_input,
        }


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, float(value)))
