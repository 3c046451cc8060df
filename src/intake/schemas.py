"""Request-side models for the intake parser.

Goal, Task and UserPreferences mirror the records owned by the planner's
storage layer. The parser only reads them.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class GoalStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    TODO = "todo"
    DOING = "doing"
    DONE = "done"


class TimeSlot(BaseModel):
    start: str  # "09:00"
    end: str  # "11:00"
    days: list[str] = Field(default_factory=list)


class WorkingHours(BaseModel):
    start: str = "09:00"
    end: str = "17:00"


class DeepWorkPreferences(BaseModel):
    preferred_times: list[TimeSlot] = Field(default_factory=list)
    max_block_duration: int = 120  # minutes
    breaks_between: int = 15  # minutes


class EnergyManagement(BaseModel):
    high_energy_times: list[TimeSlot] = Field(default_factory=list)
    low_energy_times: list[TimeSlot] = Field(default_factory=list)


class ContextSwitching(BaseModel):
    minimum_block_duration: int = 30
    max_tasks_per_block: int = 3


class BreakPreferences(BaseModel):
    short_break_duration: int = 15
    long_break_duration: int = 30
    break_frequency: int = 90  # minutes between breaks


class UserPreferences(BaseModel):
    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    deep_work_preferences: DeepWorkPreferences = Field(default_factory=DeepWorkPreferences)
    energy_management: EnergyManagement = Field(default_factory=EnergyManagement)
    context_switching: ContextSwitching = Field(default_factory=ContextSwitching)
    break_preferences: BreakPreferences = Field(default_factory=BreakPreferences)


class Goal(BaseModel):
    id: str
    title: str
    category: str = "general"
    status: GoalStatus = GoalStatus.ACTIVE
    deadline: datetime | None = None


class Task(BaseModel):
    id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    goal_id: str | None = None
    estimated_duration: int | None = None
    deadline: datetime | None = None


class ParseContext(BaseModel):
    current_date: datetime
    active_goals: list[Goal] = Field(default_factory=list)
    existing_tasks: list[Task] = Field(default_factory=list)
    user_preferences: UserPreferences = Field(default_factory=UserPreferences)


class ParseRequest(BaseModel):
    input: str
    context: ParseContext | None = None


def default_context(now: datetime) -> ParseContext:
    """Build the complete context used when a caller supplied none."""
    from intake.config import settings

    return ParseContext(
        current_date=now,
        active_goals=[],
        existing_tasks=[],
        user_preferences=UserPreferences(
            working_hours=WorkingHours(
                start=settings.default_work_start,
                end=settings.default_work_end,
            ),
        ),
    )
