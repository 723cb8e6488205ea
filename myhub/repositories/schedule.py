"""
Partitioned Schedule Storage

Schedule items are stored per (day, program) partition, each under its own
key. Programs are stored per day, together with a pointer to the program
the user last selected for that day.

    routine_schedule_<day>_<programId>      -> RoutineScheduleItem[]
    routine_programs_<day>                  -> RoutineProgram[]
    routine_selected_program_<day>          -> program id string
"""

from typing import Optional

from myhub.models import DayOfWeek, RoutineProgram, RoutineScheduleItem
from myhub.repositories.base import EntityRepository
from myhub.storage.adapter import StorageAdapter


def _day_key(day: DayOfWeek | str) -> str:
    return DayOfWeek(day).value


def schedule_key(day: DayOfWeek | str, program_id: str) -> str:
    return f"routine_schedule_{_day_key(day)}_{program_id}"


def programs_key(day: DayOfWeek | str) -> str:
    return f"routine_programs_{_day_key(day)}"


def selected_program_key(day: DayOfWeek | str) -> str:
    return f"routine_selected_program_{_day_key(day)}"


class ScheduleRepository:
    """Schedule items, one independent collection per (day, program)."""

    def __init__(self, adapter: StorageAdapter):
        self._adapter = adapter

    def _partition(self, day: DayOfWeek | str, program_id: str) -> EntityRepository[RoutineScheduleItem]:
        return EntityRepository(
            self._adapter,
            schedule_key(day, program_id),
            RoutineScheduleItem,
        )

    def get_items(self, day: DayOfWeek | str, program_id: str) -> list[RoutineScheduleItem]:
        return self._partition(day, program_id).get_all()

    def save_items(
        self,
        items: list[RoutineScheduleItem],
        day: DayOfWeek | str,
        program_id: str,
    ) -> None:
        self._partition(day, program_id).save_all(items)

    def delete_partition(self, day: DayOfWeek | str, program_id: str) -> None:
        self._partition(day, program_id).clear()


class ProgramRepository:
    """Named programs per weekday and the selected-program pointer."""

    def __init__(self, adapter: StorageAdapter):
        self._adapter = adapter

    def _programs(self, day: DayOfWeek | str) -> EntityRepository[RoutineProgram]:
        return EntityRepository(self._adapter, programs_key(day), RoutineProgram)

    def get_programs(self, day: DayOfWeek | str) -> list[RoutineProgram]:
        return self._programs(day).get_all()

    def save_programs(self, day: DayOfWeek | str, programs: list[RoutineProgram]) -> None:
        self._programs(day).save_all(programs)

    def get_selected(self, day: DayOfWeek | str) -> Optional[str]:
        value = self._adapter.get(selected_program_key(day))
        return value if isinstance(value, str) else None

    def set_selected(self, day: DayOfWeek | str, program_id: str) -> None:
        self._adapter.set(selected_program_key(day), program_id)

    def clear_selected(self, day: DayOfWeek | str) -> None:
        self._adapter.remove(selected_program_key(day))
