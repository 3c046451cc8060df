"""Keyword-density fallback classifier.

When no pattern matched literally, pick the entity type whose keywords make
up the largest share of the input words and build one generic candidate of
that type from the shared inference helpers.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from intake.config import settings
from intake.services import inference
from intake.services import keywords as kw
from intake.services.results import (
    ItemType,
    ParsedData,
    ParsedGoal,
    ParsedHabit,
    ParsedItem,
    ParsedTask,
    ParsedTimeBlock,
)


@dataclass
class Classification:
    item_type: ItemType
    score: float
    scores: dict[ItemType, float]


class HeuristicClassifier:
    def __init__(self, threshold: float | None = None, title_length: int | None = None):
        self.threshold = settings.heuristic_threshold if threshold is None else threshold
        self.title_length = title_length or settings.fallback_title_length

    def keyword_score(self, words: list[str], keywords: frozenset[str]) -> float:
        matches = [word for word in words if any(keyword in word for keyword in keywords)]
        return len(matches) / max(len(words), 1)

    def classify(self, text: str) -> Classification:
        words = text.lower().split()
        scores = {
            ItemType(label): self.keyword_score(words, table)
            for label, table in kw.CLASSIFIER_KEYWORDS
        }
        # Ties go to the earlier type in the table
        best = max(scores, key=lambda item_type: scores[item_type])
        return Classification(item_type=best, score=scores[best], scores=scores)

    def build(self, text: str, now: datetime) -> tuple[list[ParsedItem], float]:
        """Return the single generic candidate (or none) and the winning score."""
        classification = self.classify(text)
        if classification.score <= self.threshold:
            return [], classification.score

        data = self.build_generic(classification.item_type, text, now)
        return [ParsedItem(classification.item_type, data, classification.score)], classification.score

    def build_generic(self, item_type: ItemType, text: str, now: datetime) -> ParsedData:
        title = inference.truncate_title(text, self.title_length)

        if item_type is ItemType.TASK:
            return ParsedTask(
                title=title,
                priority=inference.infer_priority(text, text),
                context=inference.extract_context(text),
                energy_required=inference.infer_energy_level(text),
                type=inference.infer_task_kind(text),
                estimated_duration=inference.estimate_generic_duration(text),
            )

        if item_type is ItemType.TIMEBLOCK:
            start_time = now.replace(minute=0, second=0, microsecond=0)
            return ParsedTimeBlock(
                start_time=start_time,
                end_time=start_time + timedelta(hours=1),
                duration=60,
                type="shallow",
                energy_level=inference.infer_energy_level(text),
                flexibility=0.5,
            )

        if item_type is ItemType.GOAL:
            return ParsedGoal(
                title=title,
                category=inference.infer_goal_category(text),
                priority=inference.infer_priority(text, text),
                measurable=inference.is_measurable(text),
            )

        return ParsedHabit(
            title=title,
            frequency=inference.infer_frequency(text),
            category=inference.infer_habit_category(text),
            time_of_day=inference.infer_time_of_day(text),
        )
