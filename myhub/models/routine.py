"""
Routine Planner Models

Covers the weekly schedule (items partitioned by day and program), named
programs, goals, free-form routine blocks and habit-style routines.

Times are "HH:MM" strings on the 24-hour clock. Format and ordering are
checked by the schedule validator, not by these models, so a malformed
time is reported as a ValidationError naming the field.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from myhub.models.base import BaseEntity, CamelModel, PatchModel, UtcDatetime

DEFAULT_PROGRAM_ID = "default"


class DayOfWeek(str, Enum):
    """Weekday keys, Monday first."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class RoutineCategory(str, Enum):
    HEALTH = "health"
    WORK = "work"
    LEARNING = "learning"
    EXERCISE = "exercise"
    PERSONAL = "personal"
    SOCIAL = "social"
    CREATIVE = "creative"
    OTHER = "other"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class GoalType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


# =============================================================================
# WEEKLY SCHEDULE
# =============================================================================

class RoutineScheduleItem(BaseEntity):
    """
    One slot in a day's schedule.

    An item belongs to exactly one (day, program) partition for its
    lifetime; moving it means deleting and recreating it.
    """

    start_time: str
    end_time: str
    what_to_do: str
    where_to_do: Optional[str] = None
    day: DayOfWeek
    program_id: str = DEFAULT_PROGRAM_ID


class CreateScheduleItemRequest(CamelModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    what_to_do: Optional[str] = None
    where_to_do: Optional[str] = None


class UpdateScheduleItemRequest(PatchModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    what_to_do: Optional[str] = None
    where_to_do: Optional[str] = None


class RoutineProgram(BaseEntity):
    """A named schedule for one weekday."""

    name: str
    day: DayOfWeek


# =============================================================================
# GOALS AND BLOCKS
# =============================================================================

class Goal(BaseEntity):
    text: str
    completed: bool = False
    type: GoalType = GoalType.DAILY
    custom_date: Optional[str] = Field(
        default=None,
        description="Target date, only meaningful for custom goals"
    )


class UpdateGoalRequest(PatchModel):
    text: Optional[str] = None
    completed: Optional[bool] = None
    type: Optional[GoalType] = None
    custom_date: Optional[str] = None


class RoutineBlock(BaseEntity):
    """A simple time + title + description record."""

    time: str
    title: str
    description: str = ""


class UpdateRoutineBlockRequest(PatchModel):
    time: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


# =============================================================================
# HABIT ROUTINES
# =============================================================================

class Routine(BaseEntity):
    """A recurring habit with a completion streak."""

    title: str
    description: Optional[str] = None
    category: RoutineCategory = RoutineCategory.OTHER
    priority: Priority = Priority.MEDIUM
    estimated_duration: int = Field(
        default=0,
        ge=0,
        description="Estimated duration in minutes"
    )
    is_active: bool = True
    days_of_week: list[DayOfWeek] = Field(default_factory=list)
    time_of_day: Optional[str] = None
    streak_count: int = Field(default=0, ge=0)
    last_completed: Optional[UtcDatetime] = None


class CreateRoutineRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: RoutineCategory = RoutineCategory.OTHER
    priority: Priority = Priority.MEDIUM
    estimated_duration: int = Field(default=0, ge=0)
    is_active: bool = True
    days_of_week: list[DayOfWeek] = Field(default_factory=list)
    time_of_day: Optional[str] = None


class UpdateRoutineRequest(PatchModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[RoutineCategory] = None
    priority: Optional[Priority] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    days_of_week: Optional[list[DayOfWeek]] = None
    time_of_day: Optional[str] = None


RoutineSortField = Literal["title", "priority", "created_at", "streak_count"]


class SearchRoutineRequest(CamelModel):
    query: Optional[str] = None
    category: Optional[RoutineCategory] = None
    priority: Optional[Priority] = None
    is_active: Optional[bool] = None
    day_of_week: Optional[DayOfWeek] = None
    sort_by: Optional[RoutineSortField] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
