"""Intent parser: free text in, ranked planner candidates out.

Strategies are tried in order (pattern matching, model, heuristics) and the
first result whose confidence clears the acceptance threshold wins. Without a
winner the parser returns a low-confidence generic task, and if not even that
can be built, an error result asking the user to rephrase. ``parse`` never
raises.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

import pytz

from intake.config import settings
from intake.schemas import ParseRequest
from intake.sentry import capture_exception
from intake.services.clarification import (
    ClarificationGenerator,
    ClarificationResolver,
    rephrase_clarification,
    type_clarification,
)
from intake.services.inference import has_word_like_token, truncate_title
from intake.services.results import ItemType, NLParseResult, ParsedItem, ParsedTask
from intake.services.strategies import (
    FallbackUnavailable,
    Strategy,
    StrategyError,
    StrategyResult,
    StrategyTimeout,
    default_strategies,
)

logger = logging.getLogger(__name__)


class IntentParser:
    def __init__(
        self,
        strategies: list[Strategy] | None = None,
        *,
        accept_threshold: float | None = None,
        timeout: float | None = None,
        timezone: str | None = None,
        clarifier: ClarificationGenerator | None = None,
    ):
        self.strategies = strategies if strategies is not None else default_strategies()
        self.accept_threshold = (
            settings.accept_threshold if accept_threshold is None else accept_threshold
        )
        self.timeout = settings.strategy_timeout_seconds if timeout is None else timeout
        self.timezone = pytz.timezone(timezone or settings.user_timezone)
        self.clarifier = clarifier or ClarificationGenerator()

    def now_for(self, request: ParseRequest) -> datetime:
        """The reference time for a request: its context date, else the wall clock."""
        if request.context is not None:
            return request.context.current_date
        return datetime.now(self.timezone)

    async def parse(self, request: ParseRequest | str) -> NLParseResult:
        raw_input = request if isinstance(request, str) else getattr(request, "input", "")
        try:
            if isinstance(request, str):
                request = ParseRequest(input=request)
            logger.debug("Parsing input: %r", request.input)
            now = self.now_for(request)

            for strategy in self.strategies:
                result = await self._attempt(strategy, request, now)
                if result is not None and result.confidence > self.accept_threshold:
                    logger.info(
                        "Strategy %s accepted with confidence %.2f",
                        strategy.name,
                        result.confidence,
                    )
                    return NLParseResult(
                        confidence=result.confidence,
                        parsed_items=result.items,
                        clarification_needed=self.clarifier.generate(result.items),
                        raw_input=request.input,
                    )

            return self._fallback_result(request)
        except FallbackUnavailable as e:
            logger.info("No usable fallback for input: %s", e)
            return self._error_result(raw_input)
        except Exception as e:
            logger.exception(f"Intent parsing failed: {e}")
            capture_exception(e)
            return self._error_result(raw_input)

    async def process_clarification(
        self, original: ParseRequest, answers: dict[str, Any]
    ) -> NLParseResult:
        raw_input = getattr(original, "input", "")
        try:
            resolver = ClarificationResolver(self)
            return await resolver.resolve(original, answers or {})
        except Exception as e:
            logger.exception(f"Clarification processing failed: {e}")
            capture_exception(e)
            return self._error_result(raw_input)

    async def _run(self, strategy: Strategy, request: ParseRequest, now: datetime) -> StrategyResult:
        """Run one strategy under the timeout.

        The timeout can only interrupt a strategy at an ``await``. The built-in
        strategies are synchronous regex and keyword work, so it guards the
        model slot once a network-backed strategy sits there.
        """
        try:
            return await asyncio.wait_for(strategy.attempt(request, now), self.timeout)
        except TimeoutError as e:
            raise StrategyTimeout(f"{strategy.name} exceeded {self.timeout}s") from e

    async def _attempt(
        self, strategy: Strategy, request: ParseRequest, now: datetime
    ) -> StrategyResult | None:
        try:
            return await self._run(strategy, request, now)
        except StrategyTimeout as e:
            logger.warning("Strategy timed out, trying next: %s", e)
        except StrategyError as e:
            logger.warning("Strategy %s failed, trying next: %s", strategy.name, e)
        except Exception as e:
            logger.warning("Strategy %s crashed, trying next: %s", strategy.name, e)
            capture_exception(e)
        return None

    def _fallback_result(self, request: ParseRequest) -> NLParseResult:
        if not has_word_like_token(request.input):
            raise FallbackUnavailable("input has no word-like text")

        task = ParsedTask(
            title=truncate_title(request.input, settings.fallback_title_length),
            priority="medium",
            context=[],
            energy_required="medium",
            type="shallow",
        )
        return NLParseResult(
            confidence=settings.fallback_confidence,
            parsed_items=[ParsedItem(ItemType.TASK, task, settings.fallback_confidence)],
            clarification_needed=[type_clarification()],
            raw_input=request.input,
        )

    def _error_result(self, raw_input: Any) -> NLParseResult:
        return NLParseResult(
            confidence=0.0,
            parsed_items=[],
            clarification_needed=[rephrase_clarification()],
            raw_input=raw_input if isinstance(raw_input, str) else "",
        )


_parser: IntentParser | None = None


def get_intent_parser() -> IntentParser:
    global _parser
    if _parser is None:
        _parser = IntentParser()
    return _parser


async def parse(request: ParseRequest | str) -> NLParseResult:
    """Parse with the shared default parser."""
    return await get_intent_parser().parse(request)


async def process_clarification(original: ParseRequest, answers: dict[str, Any]) -> NLParseResult:
    """Re-parse a request with the user's clarification answers."""
    return await get_intent_parser().process_clarification(original, answers)
