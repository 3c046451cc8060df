"""Extraction strategies tried by the intent parser, in priority order.

A strategy takes a request and returns a StrategyResult. Raising any
StrategyError means "skip me"; the parser moves on to the next one.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from intake.config import settings
from intake.schemas import ParseRequest
from intake.services import keywords as kw
from intake.services.extractors import EXTRACTORS, PatternExtractor, extract_all
from intake.services.heuristics import HeuristicClassifier
from intake.services.inference import contains_any
from intake.services.results import ParsedItem

logger = logging.getLogger(__name__)

NO_MATCH_CONFIDENCE = 0.1

_TIME_INDICATOR = re.compile(r"\b(\d{1,2}:\d{2}|\d+\s*(am|pm|minutes?|hours?))\b", re.IGNORECASE)


class StrategyError(Exception):
    """A strategy could not produce a result."""


class StrategyTimeout(StrategyError):
    """A strategy ran longer than the configured timeout."""


class LowModelConfidence(StrategyError):
    """The model strategy declined to interpret the input."""


class FallbackUnavailable(Exception):
    """No generic fallback item can be built from the input."""


@dataclass
class StrategyResult:
    confidence: float
    items: list[ParsedItem] = field(default_factory=list)


class Strategy(Protocol):
    name: str

    async def attempt(self, request: ParseRequest, now: datetime) -> StrategyResult: ...


class PatternStrategy:
    """Literal regex matching per entity family."""

    name = "pattern"

    def __init__(self, extractors: tuple[PatternExtractor, ...] = EXTRACTORS):
        self.extractors = extractors

    async def attempt(self, request: ParseRequest, now: datetime) -> StrategyResult:
        items = extract_all(request.input, request, now, self.extractors)
        if not items:
            return StrategyResult(confidence=NO_MATCH_CONFIDENCE)
        mean = sum(item.confidence for item in items) / len(items)
        return StrategyResult(confidence=mean, items=items)


class SimulatedModelStrategy:
    """Stand-in for a hosted language model.

    Scores how plausible the input is as a planner command and, if the score
    is above the minimum, answers with the heuristic classifier. A network-backed
    implementation can replace it as long as it keeps the Strategy shape; the
    parser already bounds every attempt with a timeout.
    """

    name = "model"

    def __init__(
        self,
        classifier: HeuristicClassifier | None = None,
        min_confidence: float | None = None,
    ):
        self.classifier = classifier or HeuristicClassifier()
        self.min_confidence = (
            settings.model_min_confidence if min_confidence is None else min_confidence
        )

    def plausibility(self, text: str) -> float:
        score = 0.3
        if len(text.split()) >= 3:
            score += 0.2
        if contains_any(text, kw.ACTION_VERBS):
            score += 0.3
        if _TIME_INDICATOR.search(text):
            score += 0.2
        return round(min(score, 1.0), 4)

    async def attempt(self, request: ParseRequest, now: datetime) -> StrategyResult:
        plausibility = self.plausibility(request.input)
        # Bare base score means no signal at all, so the default minimum declines it
        if plausibility <= self.min_confidence:
            raise LowModelConfidence(
                f"plausibility {plausibility:.2f} not above {self.min_confidence}"
            )
        items, score = self.classifier.build(request.input, now)
        return StrategyResult(confidence=score, items=items)


class HeuristicStrategy:
    """Keyword-density classification as a last resort."""

    name = "heuristic"

    def __init__(self, classifier: HeuristicClassifier | None = None):
        self.classifier = classifier or HeuristicClassifier()

    async def attempt(self, request: ParseRequest, now: datetime) -> StrategyResult:
        items, score = self.classifier.build(request.input, now)
        return StrategyResult(confidence=score, items=items)


def default_strategies() -> list[Strategy]:
    return [PatternStrategy(), SimulatedModelStrategy(), HeuristicStrategy()]
