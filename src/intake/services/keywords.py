"""Keyword tables behind field inference and the heuristic classifier.

Ordered tables (tuples of ``(label, keywords)``) are checked top to bottom and
the first hit wins, so their order is part of the behaviour.
"""

# === Priority ===

URGENT_WORDS = frozenset(
    ["urgent", "asap", "immediately", "critical", "emergency", "now", "right away"]
)
IMPORTANT_WORDS = frozenset(["important", "priority", "must", "need", "deadline", "crucial"])
TENTATIVE_WORDS = frozenset(
    ["maybe", "when", "if", "consider", "think about", "someday", "eventually"]
)

# === Task kind ===

CREATIVE_WORDS = frozenset(["create", "design", "brainstorm", "ideate", "sketch", "prototype"])
DEEP_WORDS = frozenset(
    ["analyze", "research", "design", "develop", "write", "study", "plan", "strategy"]
)
ADMIN_WORDS = frozenset(
    ["paperwork", "form", "document", "file", "organize", "schedule", "book", "invoice"]
)

# === Energy ===

HIGH_ENERGY_WORDS = frozenset(
    ["workout", "exercise", "meeting", "presentation", "creative", "brainstorm"]
)
LOW_ENERGY_WORDS = frozenset(["email", "organize", "file", "admin", "paperwork", "break"])

# === Time blocks ===

BLOCK_TYPES: tuple[tuple[str, frozenset[str]], ...] = (
    ("meeting", frozenset(["meeting", "call", "discussion", "sync", "standup"])),
    ("break", frozenset(["break", "lunch", "rest", "pause"])),
    ("admin", frozenset(["admin", "paperwork", "email", "organize"])),
    ("deep", frozenset(["focus", "deep", "think", "analyze", "create"])),
)

RIGID_WORDS = frozenset(["meeting", "appointment", "deadline", "fixed"])
FLEXIBLE_WORDS = frozenset(["whenever", "flexible", "anytime", "maybe"])

RIGID_FLEXIBILITY = 0.2
FLEXIBLE_FLEXIBILITY = 0.9
DEFAULT_FLEXIBILITY = 0.5

# === Goals ===

GOAL_CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("work", frozenset(["work", "career", "job", "professional", "business", "promotion"])),
    (
        "health",
        frozenset(
            ["health", "fitness", "workout", "diet", "exercise", "wellness", "marathon", "weight"]
        ),
    ),
    ("learning", frozenset(["learn", "study", "read", "course", "skill", "education"])),
    ("personal", frozenset(["personal", "life", "relationship", "family", "hobby"])),
)

MEASURABLE_WORDS = frozenset(
    [
        "%",
        "percent",
        "number",
        "count",
        "times",
        "hours",
        "minutes",
        "days",
        "kg",
        "lbs",
        "miles",
        "km",
    ]
)

# === Habits ===

HABIT_CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("health", frozenset(["exercise", "workout", "run", "gym", "diet", "water", "sleep"])),
    ("productivity", frozenset(["plan", "organize", "review", "journal", "schedule"])),
    ("learning", frozenset(["read", "study", "practice", "learn", "course"])),
    ("mindfulness", frozenset(["meditate", "breathe", "mindful", "gratitude", "reflect"])),
)

MONTHLY_WORDS = frozenset(["monthly", "every month", "once a month", "each month"])
WEEKLY_WORDS = frozenset(["weekly", "every week", "once a week", "each week"])

TIMES_OF_DAY: tuple[tuple[str, frozenset[str]], ...] = (
    ("morning", frozenset(["morning", "am", "early", "wake up", "breakfast"])),
    ("afternoon", frozenset(["afternoon", "lunch", "midday", "noon"])),
    ("evening", frozenset(["evening", "night", "pm", "dinner", "before bed"])),
)

SHORT_HABITS = frozenset(["water", "vitamin", "stretch", "breathe"])
LONG_HABITS = frozenset(["workout", "exercise", "study", "read"])

# === Duration estimates (minutes) ===

DEFAULT_HABIT_MINUTES = 15
SHORT_HABIT_MINUTES = 5
LONG_HABIT_MINUTES = 30

DEFAULT_TASK_MINUTES = 30
SIMPLE_TASK_MINUTES = 15
COMPLEX_TASK_MINUTES = 60
SIMPLE_TASK_WORDS = frozenset(["check", "email", "call", "update", "quick"])
COMPLEX_TASK_WORDS = frozenset(["research", "analyze", "create", "develop", "design"])

# === Heuristic classifier ===
# Matched as substrings of each input word, so "finishing" counts for "finish".

CLASSIFIER_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    (
        "task",
        frozenset(["do", "complete", "finish", "work", "task", "todo", "make", "create", "build"]),
    ),
    ("timeblock", frozenset(["at", "from", "until", "to", "block", "schedule", "time"])),
    ("goal", frozenset(["goal", "achieve", "want", "objective", "target", "aim"])),
    ("habit", frozenset(["daily", "every", "routine", "habit", "consistently", "regularly"])),
)

# === Simulated model plausibility ===

ACTION_VERBS = frozenset(
    ["do", "make", "create", "complete", "finish", "start", "begin", "work", "write", "read"]
)
