"""
Routine Planner Services

RoutineScheduleService owns the weekly schedule. Items are stored per
(day, program) partition; every day has an implicit "default" program and
any number of named ones, plus a pointer to the program currently
selected for that day.

RoutinePlannerService owns the smaller collections around the schedule:
goals, free-form time blocks and habit routines with completion streaks.

DESIGN DECISION: Stored order is the user's order. ``reorder`` persists
exactly the sequence it is given; sorting by start time is a view concern
(see ``sorted_by_start_time``).
"""

from datetime import datetime, timedelta
from typing import List, Optional

from myhub.errors import NotFoundError, ValidationError
from myhub.logger import get_logger
from myhub.models import (
    DEFAULT_PROGRAM_ID,
    CreateRoutineRequest,
    CreateScheduleItemRequest,
    DayOfWeek,
    Goal,
    GoalType,
    Page,
    Routine,
    RoutineBlock,
    RoutineProgram,
    RoutineScheduleItem,
    SearchRoutineRequest,
    UpdateGoalRequest,
    UpdateRoutineBlockRequest,
    UpdateRoutineRequest,
    UpdateScheduleItemRequest,
    as_utc,
    utcnow,
)
from myhub.queries import DEFAULT_PAGE_LIMIT, query_routines
from myhub.repositories import (
    GoalRepository,
    ProgramRepository,
    RoutineBlockRepository,
    RoutineRepository,
    ScheduleRepository,
)
from myhub.services.base import apply_patch
from myhub.validation import ScheduleValidator, parse_day, time_to_minutes

logger = get_logger(__name__)

DEFAULT_PROGRAM_NAME = "Default"


def default_program(day: DayOfWeek, program_id: str = DEFAULT_PROGRAM_ID) -> RoutineProgram:
    """The implicit program every day has. It is never stored."""
    return RoutineProgram(id=program_id, name=DEFAULT_PROGRAM_NAME, day=day)


def sorted_by_start_time(items: List[RoutineScheduleItem]) -> List[RoutineScheduleItem]:
    """Items ordered by start time, for display."""
    return sorted(items, key=lambda item: time_to_minutes(item.start_time))


class RoutineScheduleService:
    """Weekly schedule items and the named programs that group them."""

    def __init__(
        self,
        schedule: ScheduleRepository,
        programs: ProgramRepository,
        default_program_id: str = DEFAULT_PROGRAM_ID,
    ):
        self._schedule = schedule
        self._programs = programs
        self._default_program_id = default_program_id
        self._validator = ScheduleValidator()

    # =========================================================================
    # SCHEDULE ITEMS
    # =========================================================================

    def create_item(
        self,
        request: CreateScheduleItemRequest,
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> RoutineScheduleItem:
        """
        Append an item to a day's program.

        Raises:
            ValidationError: Missing field, malformed time, or an end time
                that is not after the start time
        """
        self._validator.validate_item(request)
        day = parse_day(day)
        program_id = program_id or self._default_program_id

        item = RoutineScheduleItem(
            **request.model_dump(),
            day=day,
            program_id=program_id,
        )
        items = self._schedule.get_items(day, program_id)
        items.append(item)
        self._schedule.save_items(items, day, program_id)

        logger.info(
            "schedule_item_created",
            item_id=item.id,
            day=day.value,
            program_id=program_id,
        )
        return item

    def get_items(
        self,
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> List[RoutineScheduleItem]:
        return self._schedule.get_items(parse_day(day), program_id or self._default_program_id)

    def get_item(
        self,
        item_id: str,
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> Optional[RoutineScheduleItem]:
        for item in self.get_items(day, program_id):
            if item.id == item_id:
                return item
        return None

    def update_item(
        self,
        patch: UpdateScheduleItemRequest,
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> Optional[RoutineScheduleItem]:
        """
        Apply a partial update. The merged item is validated as a whole.

        Returns None if the item is not in this partition.
        """
        day = parse_day(day)
        program_id = program_id or self._default_program_id
        items = self._schedule.get_items(day, program_id)

        for index, existing in enumerate(items):
            if existing.id != patch.id:
                continue

            updated = apply_patch(existing, patch)
            self._validator.validate_item(CreateScheduleItemRequest(
                start_time=updated.start_time,
                end_time=updated.end_time,
                what_to_do=updated.what_to_do,
                where_to_do=updated.where_to_do,
            ))
            updated.updated_at = utcnow()
            items[index] = updated
            self._schedule.save_items(items, day, program_id)

            logger.info("schedule_item_updated", item_id=updated.id)
            return updated

        return None

    def delete_item(
        self,
        item_id: str,
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> bool:
        day = parse_day(day)
        program_id = program_id or self._default_program_id
        items = self._schedule.get_items(day, program_id)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False

        self._schedule.save_items(remaining, day, program_id)
        logger.info("schedule_item_deleted", item_id=item_id)
        return True

    def reorder(
        self,
        items: List[RoutineScheduleItem],
        day: DayOfWeek,
        program_id: Optional[str] = None,
    ) -> None:
        """Replace a partition with exactly these items, in this order."""
        day = parse_day(day)
        program_id = program_id or self._default_program_id
        for item in items:
            item.day = day
            item.program_id = program_id
        self._schedule.save_items(items, day, program_id)

    def get_week(
        self,
        program_id: Optional[str] = None,
    ) -> dict[DayOfWeek, List[RoutineScheduleItem]]:
        """
        Items for all seven days.

        Without a program id each day shows its selected program.
        """
        return {
            day: self._schedule.get_items(day, program_id or self.selected_program(day))
            for day in DayOfWeek
        }

    # =========================================================================
    # PROGRAMS
    # =========================================================================

    def create_program(self, day: DayOfWeek, name: Optional[str]) -> RoutineProgram:
        self._validator.validate_program(name)
        day = parse_day(day)

        program = RoutineProgram(name=name.strip(), day=day)
        programs = self._programs.get_programs(day)
        programs.append(program)
        self._programs.save_programs(day, programs)

        logger.info("program_created", program_id=program.id, day=day.value)
        return program

    def list_programs(self, day: DayOfWeek) -> List[RoutineProgram]:
        """Every program for the day, starting with the implicit default."""
        day = parse_day(day)
        return [
            default_program(day, self._default_program_id),
            *self._programs.get_programs(day),
        ]

    def rename_program(
        self,
        day: DayOfWeek,
        program_id: str,
        name: Optional[str],
    ) -> Optional[RoutineProgram]:
        """Rename a stored program. The default program has a fixed name."""
        self._validator.validate_program(name)
        day = parse_day(day)
        programs = self._programs.get_programs(day)
        for program in programs:
            if program.id == program_id:
                program.name = name.strip()
                program.updated_at = utcnow()
                self._programs.save_programs(day, programs)
                return program
        return None

    def delete_program(self, day: DayOfWeek, program_id: str) -> bool:
        """
        Delete a program together with its schedule items.

        If it was the selected program, the day falls back to the default.

        Raises:
            ValidationError: For the default program, which always exists
        """
        if program_id == self._default_program_id:
            raise ValidationError("program_id", "The default program cannot be deleted")

        day = parse_day(day)
        programs = self._programs.get_programs(day)
        remaining = [p for p in programs if p.id != program_id]
        if len(remaining) == len(programs):
            return False

        self._programs.save_programs(day, remaining)
        self._schedule.delete_partition(day, program_id)
        if self._programs.get_selected(day) == program_id:
            self._programs.clear_selected(day)

        logger.info("program_deleted", program_id=program_id, day=day.value)
        return True

    def select_program(self, day: DayOfWeek, program_id: str) -> None:
        """
        Raises:
            NotFoundError: If the day has no such program
        """
        if not any(p.id == program_id for p in self.list_programs(day)):
            raise NotFoundError(f"Program {program_id} not found")
        self._programs.set_selected(day, program_id)

    def selected_program(self, day: DayOfWeek) -> str:
        """The selected program id, or the default if none is set."""
        day = parse_day(day)
        selected = self._programs.get_selected(day)
        if selected and any(p.id == selected for p in self.list_programs(day)):
            return selected
        return self._default_program_id


class RoutinePlannerService:
    """Goals, time blocks and habit routines."""

    def __init__(
        self,
        goals: GoalRepository,
        blocks: RoutineBlockRepository,
        routines: RoutineRepository,
        page_limit: int = DEFAULT_PAGE_LIMIT,
    ):
        self._goals = goals
        self._blocks = blocks
        self._routines = routines
        self._page_limit = page_limit
        self._validator = ScheduleValidator()

    # =========================================================================
    # GOALS
    # =========================================================================

    def add_goal(
        self,
        text: Optional[str],
        goal_type: GoalType = GoalType.DAILY,
        custom_date: Optional[str] = None,
    ) -> Goal:
        """
        Raises:
            ValidationError: Blank text, or a custom goal without a date
        """
        self._validator.validate_goal(text, goal_type, custom_date)

        goal = Goal(text=text.strip(), type=goal_type, custom_date=custom_date)
        self._goals.add(goal)

        logger.info("goal_created", goal_id=goal.id, type=goal.type.value)
        return goal

    def list_goals(self, goal_type: Optional[GoalType] = None) -> List[Goal]:
        goals = self._goals.get_all()
        if goal_type is None:
            return goals
        return [g for g in goals if g.type == goal_type]

    def toggle_goal(self, goal_id: str) -> Optional[Goal]:
        goal = self._goals.get_by_id(goal_id)
        if goal is None:
            return None

        goal.completed = not goal.completed
        self._goals.update(goal)
        return goal

    def update_goal(self, patch: UpdateGoalRequest) -> Optional[Goal]:
        existing = self._goals.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._validator.validate_goal(updated.text, updated.type, updated.custom_date)
        self._goals.update(updated)
        return updated

    def delete_goal(self, goal_id: str) -> bool:
        return self._goals.delete(goal_id)

    # =========================================================================
    # TIME BLOCKS
    # =========================================================================

    def add_block(
        self,
        time: Optional[str],
        title: Optional[str],
        description: str = "",
    ) -> RoutineBlock:
        """
        Raises:
            ValidationError: Malformed time or blank title
        """
        self._validator.validate_block(time, title)

        block = RoutineBlock(time=time, title=title.strip(), description=description or "")
        self._blocks.add(block)

        logger.info("routine_block_created", block_id=block.id)
        return block

    def list_blocks(self) -> List[RoutineBlock]:
        """All blocks, earliest first."""
        return sorted(self._blocks.get_all(), key=lambda b: time_to_minutes(b.time))

    def update_block(self, patch: UpdateRoutineBlockRequest) -> Optional[RoutineBlock]:
        existing = self._blocks.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._validator.validate_block(updated.time, updated.title)
        self._blocks.update(updated)
        return updated

    def delete_block(self, block_id: str) -> bool:
        return self._blocks.delete(block_id)

    # =========================================================================
    # HABIT ROUTINES
    # =========================================================================

    def create_routine(self, request: CreateRoutineRequest) -> Routine:
        """
        Raises:
            ValidationError: Blank title or malformed time of day
        """
        self._validator.validate_routine(request.title, request.time_of_day)

        routine = Routine(**request.model_dump())
        self._routines.add(routine)

        logger.info("routine_created", routine_id=routine.id)
        return routine

    def get_routine(self, routine_id: str) -> Optional[Routine]:
        return self._routines.get_by_id(routine_id)

    def list_routines(self) -> List[Routine]:
        return self._routines.get_all()

    def search_routines(self, request: Optional[SearchRoutineRequest] = None) -> Page[Routine]:
        return query_routines(self._routines.get_all(), request, self._page_limit)

    def update_routine(self, patch: UpdateRoutineRequest) -> Optional[Routine]:
        existing = self._routines.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._validator.validate_routine(updated.title, updated.time_of_day)
        self._routines.update(updated)
        return updated

    def delete_routine(self, routine_id: str) -> bool:
        deleted = self._routines.delete(routine_id)
        if deleted:
            logger.info("routine_deleted", routine_id=routine_id)
        return deleted

    def complete_routine(
        self,
        routine_id: str,
        at: Optional[datetime] = None,
    ) -> Optional[Routine]:
        """
        Record a completion and update the streak.

        Calendar days are compared in UTC. Completing again on the same
        day changes nothing; completing on the following day extends the
        streak; any longer gap restarts it at 1.
        """
        routine = self._routines.get_by_id(routine_id)
        if routine is None:
            return None

        at = as_utc(at) if at is not None else utcnow()
        today = at.date()

        if routine.last_completed is not None:
            last_day = routine.last_completed.date()
            if last_day == today:
                return routine
            if last_day == today - timedelta(days=1):
                routine.streak_count += 1
            else:
                routine.streak_count = 1
        else:
            routine.streak_count = 1

        routine.last_completed = at
        self._routines.update(routine)

        logger.info(
            "routine_completed",
            routine_id=routine.id,
            streak_count=routine.streak_count,
        )
        return routine
