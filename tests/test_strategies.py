"""Tests for the individual extraction strategies."""

from datetime import datetime

import pytest

from intake.schemas import ParseContext, ParseRequest
from intake.services.heuristics import HeuristicClassifier
from intake.services.results import ItemType
from intake.services.strategies import (
    NO_MATCH_CONFIDENCE,
    HeuristicStrategy,
    LowModelConfidence,
    PatternStrategy,
    SimulatedModelStrategy,
    StrategyError,
    StrategyTimeout,
    default_strategies,
)

NOW = datetime(2026, 3, 10, 14, 30)


def make_request(text):
    return ParseRequest(input=text, context=ParseContext(current_date=NOW))


class TestPatternStrategy:
    def setup_method(self):
        self.strategy = PatternStrategy()

    @pytest.mark.asyncio
    async def test_no_match_reports_low_confidence(self):
        result = await self.strategy.attempt(make_request("xq9 zzrp"), NOW)

        assert result.confidence == NO_MATCH_CONFIDENCE
        assert result.items == []

    @pytest.mark.asyncio
    async def test_confidence_is_mean_of_items(self):
        result = await self.strategy.attempt(make_request("task: email bob; achieve inbox zero"), NOW)

        # task 0.8, goal 0.85
        assert len(result.items) == 2
        assert result.confidence == pytest.approx(0.825)

    @pytest.mark.asyncio
    async def test_single_match(self):
        result = await self.strategy.attempt(make_request("daily: drink water"), NOW)

        assert result.confidence == pytest.approx(0.8)
        assert result.items[0].type is ItemType.HABIT


class TestSimulatedModelStrategy:
    def setup_method(self):
        self.strategy = SimulatedModelStrategy(min_confidence=0.3)

    def test_plausibility_signals(self):
        assert self.strategy.plausibility("hi") == pytest.approx(0.3)
        assert self.strategy.plausibility("go to the store") == pytest.approx(0.5)
        assert self.strategy.plausibility("finish the report at 9:00 today") == pytest.approx(1.0)
        assert self.strategy.plausibility("gym 30 minutes") == pytest.approx(0.7)

    @pytest.mark.asyncio
    async def test_declines_below_minimum(self):
        strategy = SimulatedModelStrategy(min_confidence=0.5)

        with pytest.raises(LowModelConfidence):
            await strategy.attempt(make_request("hi"), NOW)

    @pytest.mark.asyncio
    async def test_declines_at_minimum(self):
        strategy = SimulatedModelStrategy(min_confidence=0.5)

        with pytest.raises(LowModelConfidence):
            await strategy.attempt(make_request("go to the store"), NOW)

    @pytest.mark.asyncio
    async def test_default_settings_decline_signal_free_input(self):
        strategy = SimulatedModelStrategy()

        with pytest.raises(LowModelConfidence):
            await strategy.attempt(make_request("milk"), NOW)

    @pytest.mark.asyncio
    async def test_answers_with_classifier(self):
        result = await self.strategy.attempt(make_request("work on the build"), NOW)

        assert result.confidence == pytest.approx(0.5)
        assert result.items[0].type is ItemType.TASK

    @pytest.mark.asyncio
    async def test_uses_given_classifier(self):
        strategy = SimulatedModelStrategy(
            classifier=HeuristicClassifier(threshold=0.9), min_confidence=0.3
        )
        result = await strategy.attempt(make_request("work on the build"), NOW)

        assert result.items == []


class TestHeuristicStrategy:
    @pytest.mark.asyncio
    async def test_scores_input(self):
        strategy = HeuristicStrategy(HeuristicClassifier(threshold=0.3))
        result = await strategy.attempt(make_request("daily routine"), NOW)

        assert result.confidence == pytest.approx(1.0)
        assert result.items[0].type is ItemType.HABIT
        assert result.items[0].data.title == "daily routine"


class TestDefaults:
    def test_order(self):
        names = [strategy.name for strategy in default_strategies()]
        assert names == ["pattern", "model", "heuristic"]

    def test_error_hierarchy(self):
        assert issubclass(StrategyTimeout, StrategyError)
        assert issubclass(LowModelConfidence, StrategyError)
