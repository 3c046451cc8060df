"""Per-entity confidence scoring for pattern matches.

Each entity type has a base score plus additive bonuses for auxiliary signals
found around the match. Scores are 0-1 and capped at 1.0.
"""

from dataclasses import dataclass, field

TASK_BASE = 0.6
TIMEBLOCK_BASE = 0.7
GOAL_BASE = 0.5
HABIT_BASE = 0.6

# An explicit goal lead-in ("goal:", "want to", "achieve") on its own clears
# the parser's acceptance threshold
GOAL_MARKER_BONUS = 0.25
RECURRENCE_MARKERS = (
    "daily",
    "weekly",
    "monthly",
    "every",
    "habit",
    "routine",
    "consistently",
    "regularly",
)


@dataclass
class ConfidenceBreakdown:
    """Detailed breakdown of a confidence score."""

    base_score: float
    bonuses: dict[str, float] = field(default_factory=dict)

    def add(self, reason: str, amount: float) -> None:
        self.bonuses[reason] = amount

    @property
    def total(self) -> float:
        raw = self.base_score + sum(self.bonuses.values())
        return round(max(0.0, min(1.0, raw)), 4)

    def to_dict(self) -> dict:
        return {"base_score": self.base_score, **self.bonuses, "total": self.total}


def score_task(
    title: str,
    full_input: str,
    has_duration: bool,
    has_deadline: bool,
) -> ConfidenceBreakdown:
    breakdown = ConfidenceBreakdown(TASK_BASE)
    if len(title) > 5:
        breakdown.add("title_bonus", 0.2)
    if has_duration:
        breakdown.add("duration_bonus", 0.1)
    if has_deadline:
        breakdown.add("deadline_bonus", 0.1)
    lowered = full_input.lower()
    if "priority" in lowered or "important" in lowered:
        breakdown.add("priority_bonus", 0.1)
    return breakdown


def score_timeblock(has_start: bool, has_end: bool, label: str) -> ConfidenceBreakdown:
    breakdown = ConfidenceBreakdown(TIMEBLOCK_BASE)
    if has_start and has_end:
        breakdown.add("range_bonus", 0.2)
    if len(label.strip()) > 3:
        breakdown.add("label_bonus", 0.1)
    return breakdown


def score_goal(
    title: str,
    full_input: str,
    has_deadline: bool,
    explicit: bool = False,
) -> ConfidenceBreakdown:
    breakdown = ConfidenceBreakdown(GOAL_BASE)
    if explicit:
        breakdown.add("marker_bonus", GOAL_MARKER_BONUS)
    if len(title) > 10:
        breakdown.add("title_bonus", 0.2)
    if has_deadline:
        breakdown.add("deadline_bonus", 0.2)
    lowered = full_input.lower()
    if "achieve" in lowered or "reach" in lowered:
        breakdown.add("achievement_bonus", 0.1)
    return breakdown


def score_habit(full_input: str) -> ConfidenceBreakdown:
    breakdown = ConfidenceBreakdown(HABIT_BASE)
    lowered = full_input.lower()
    if any(marker in lowered for marker in RECURRENCE_MARKERS):
        breakdown.add("recurrence_bonus", 0.2)
    if "routine" in lowered:
        breakdown.add("routine_bonus", 0.1)
    return breakdown
