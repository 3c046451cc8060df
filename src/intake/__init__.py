"""Natural-language intake for the planner: tasks, time blocks, goals and habits."""

__version__ = "0.1.0"
