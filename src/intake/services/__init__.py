"""Intake parser services.

Public names are resolved lazily so importing the package stays cheap.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS: dict[str, tuple[str, str]] = {
    # Parser
    "IntentParser": ("intake.services.parser", "IntentParser"),
    "get_intent_parser": ("intake.services.parser", "get_intent_parser"),
    "parse": ("intake.services.parser", "parse"),
    "process_clarification": ("intake.services.parser", "process_clarification"),
    # Results
    "ClarificationRequest": ("intake.services.results", "ClarificationRequest"),
    "ItemType": ("intake.services.results", "ItemType"),
    "NLParseResult": ("intake.services.results", "NLParseResult"),
    "ParsedGoal": ("intake.services.results", "ParsedGoal"),
    "ParsedHabit": ("intake.services.results", "ParsedHabit"),
    "ParsedItem": ("intake.services.results", "ParsedItem"),
    "ParsedTask": ("intake.services.results", "ParsedTask"),
    "ParsedTimeBlock": ("intake.services.results", "ParsedTimeBlock"),
    # Strategies
    "HeuristicStrategy": ("intake.services.strategies", "HeuristicStrategy"),
    "PatternStrategy": ("intake.services.strategies", "PatternStrategy"),
    "SimulatedModelStrategy": ("intake.services.strategies", "SimulatedModelStrategy"),
    "Strategy": ("intake.services.strategies", "Strategy"),
    "StrategyError": ("intake.services.strategies", "StrategyError"),
    "StrategyResult": ("intake.services.strategies", "StrategyResult"),
    "StrategyTimeout": ("intake.services.strategies", "StrategyTimeout"),
    # Heuristics
    "HeuristicClassifier": ("intake.services.heuristics", "HeuristicClassifier"),
    # Clarification
    "ClarificationGenerator": ("intake.services.clarification", "ClarificationGenerator"),
    "ClarificationResolver": ("intake.services.clarification", "ClarificationResolver"),
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = _EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))
