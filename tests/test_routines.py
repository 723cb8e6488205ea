"""
Tests for the weekly schedule, programs, goals, blocks and habit routines.
"""

from datetime import datetime, timedelta, timezone

import pytest

from myhub.errors import NotFoundError, ValidationError
from myhub.models import (
    CreateRoutineRequest,
    CreateScheduleItemRequest,
    DayOfWeek,
    GoalType,
    Priority,
    SearchRoutineRequest,
    UpdateGoalRequest,
    UpdateRoutineBlockRequest,
    UpdateRoutineRequest,
    UpdateScheduleItemRequest,
)
from myhub.services import sorted_by_start_time


def item_request(start="09:00", end="10:00", what="Read", where=None):
    return CreateScheduleItemRequest(
        start_time=start, end_time=end, what_to_do=what, where_to_do=where,
    )


class TestScheduleItems:
    """Tests for schedule item CRUD and validation."""

    def test_create_appends_to_default_program(self, services):
        """Test items land in the day's default program in insertion order."""
        schedule = services.schedule
        first = schedule.create_item(item_request("11:00", "12:00"), DayOfWeek.MONDAY)
        second = schedule.create_item(item_request("08:00", "09:00"), DayOfWeek.MONDAY)

        items = schedule.get_items(DayOfWeek.MONDAY)
        assert [i.id for i in items] == [first.id, second.id]
        assert first.program_id == "default"
        assert first.day == DayOfWeek.MONDAY
        assert schedule.get_items(DayOfWeek.TUESDAY) == []

    @pytest.mark.parametrize("start,end", [
        ("10:00", "09:00"),
        ("10:00", "10:00"),
    ])
    def test_end_must_follow_start(self, services, start, end):
        """Test end times at or before the start are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            services.schedule.create_item(item_request(start, end), DayOfWeek.MONDAY)
        assert exc_info.value.field == "end_time"
        assert services.schedule.get_items(DayOfWeek.MONDAY) == []

    @pytest.mark.parametrize("start,end,field", [
        ("9:00", "10:00", "start_time"),
        ("24:00", "23:00", "start_time"),
        ("09:00", "10:60", "end_time"),
        ("", "10:00", "start_time"),
    ])
    def test_time_format(self, services, start, end, field):
        """Test times must be zero-padded HH:MM on the 24-hour clock."""
        with pytest.raises(ValidationError) as exc_info:
            services.schedule.create_item(item_request(start, end), DayOfWeek.MONDAY)
        assert exc_info.value.field == field

    @pytest.mark.parametrize("call", [
        lambda s: s.create_item(item_request(), "funday"),
        lambda s: s.get_items("funday"),
        lambda s: s.delete_item("x", "funday"),
        lambda s: s.create_program("funday", "Gym"),
        lambda s: s.reorder([], "funday"),
        lambda s: s.select_program("funday", "default"),
    ])
    def test_unknown_day_rejected(self, services, call):
        """Test an unknown weekday is reported as a validation error on the day."""
        with pytest.raises(ValidationError) as exc_info:
            call(services.schedule)
        assert exc_info.value.field == "day"

    def test_day_accepts_plain_strings(self, services):
        """Test weekday keys work as well as DayOfWeek members."""
        item = services.schedule.create_item(item_request(), "monday")
        assert item.day == DayOfWeek.MONDAY
        assert services.schedule.get_items(DayOfWeek.MONDAY)[0].id == item.id

    def test_what_to_do_required(self, services):
        """Test the activity text is required."""
        with pytest.raises(ValidationError) as exc_info:
            services.schedule.create_item(item_request(what="  "), DayOfWeek.MONDAY)
        assert exc_info.value.field == "what_to_do"

    def test_update_validates_merged_item(self, services):
        """Test a patch moving the start past the end is rejected."""
        item = services.schedule.create_item(item_request(), DayOfWeek.FRIDAY)

        with pytest.raises(ValidationError):
            services.schedule.update_item(
                UpdateScheduleItemRequest(id=item.id, start_time="11:00"), DayOfWeek.FRIDAY,
            )

        updated = services.schedule.update_item(
            UpdateScheduleItemRequest(id=item.id, start_time="09:30", where_to_do="Library"),
            DayOfWeek.FRIDAY,
        )
        assert updated.start_time == "09:30"
        assert updated.end_time == "10:00"
        assert services.schedule.get_item(item.id, DayOfWeek.FRIDAY).where_to_do == "Library"

    def test_update_and_delete_missing(self, services):
        """Test unknown items are reported without raising."""
        patch = UpdateScheduleItemRequest(id="nope", what_to_do="x")
        assert services.schedule.update_item(patch, DayOfWeek.MONDAY) is None
        assert services.schedule.delete_item("nope", DayOfWeek.MONDAY) is False

    def test_delete_item(self, services):
        """Test removing one item keeps the rest."""
        keep = services.schedule.create_item(item_request(), DayOfWeek.MONDAY)
        drop = services.schedule.create_item(item_request("12:00", "13:00"), DayOfWeek.MONDAY)

        assert services.schedule.delete_item(drop.id, DayOfWeek.MONDAY) is True
        assert [i.id for i in services.schedule.get_items(DayOfWeek.MONDAY)] == [keep.id]

    def test_reorder_persists_given_order(self, services):
        """Test reorder stores exactly the supplied sequence."""
        schedule = services.schedule
        a = schedule.create_item(item_request("08:00", "09:00", "A"), DayOfWeek.MONDAY)
        b = schedule.create_item(item_request("09:00", "10:00", "B"), DayOfWeek.MONDAY)
        c = schedule.create_item(item_request("10:00", "11:00", "C"), DayOfWeek.MONDAY)

        schedule.reorder([c, a, b], DayOfWeek.MONDAY)

        stored = schedule.get_items(DayOfWeek.MONDAY)
        assert [i.what_to_do for i in stored] == ["C", "A", "B"]
        assert [i.what_to_do for i in sorted_by_start_time(stored)] == ["A", "B", "C"]


class TestPrograms:
    """Tests for per-day programs and the selection pointer."""

    def test_default_program_always_listed(self, services):
        """Test every day lists the implicit default first."""
        gym = services.schedule.create_program(DayOfWeek.MONDAY, " Gym day ")

        programs = services.schedule.list_programs(DayOfWeek.MONDAY)
        assert [p.id for p in programs] == ["default", gym.id]
        assert programs[0].name == "Default"
        assert programs[1].name == "Gym day"
        assert [p.id for p in services.schedule.list_programs(DayOfWeek.TUESDAY)] == ["default"]

    def test_program_name_required(self, services):
        """Test blank program names are rejected."""
        with pytest.raises(ValidationError):
            services.schedule.create_program(DayOfWeek.MONDAY, "   ")

    def test_programs_have_separate_items(self, services):
        """Test each program keeps its own schedule for the day."""
        gym = services.schedule.create_program(DayOfWeek.MONDAY, "Gym")
        services.schedule.create_item(item_request(what="Lift"), DayOfWeek.MONDAY, gym.id)
        services.schedule.create_item(item_request(what="Read"), DayOfWeek.MONDAY)

        assert [i.what_to_do for i in services.schedule.get_items(DayOfWeek.MONDAY, gym.id)] == ["Lift"]
        assert [i.what_to_do for i in services.schedule.get_items(DayOfWeek.MONDAY)] == ["Read"]

    def test_rename_program(self, services):
        """Test renaming stored programs only."""
        gym = services.schedule.create_program(DayOfWeek.MONDAY, "Gym")
        renamed = services.schedule.rename_program(DayOfWeek.MONDAY, gym.id, "Pool")
        assert renamed.name == "Pool"
        assert services.schedule.rename_program(DayOfWeek.MONDAY, "default", "X") is None

    def test_delete_program_cascades(self, services):
        """Test deleting a program drops its items and clears the selection."""
        schedule = services.schedule
        gym = schedule.create_program(DayOfWeek.MONDAY, "Gym")
        schedule.create_item(item_request(what="Lift"), DayOfWeek.MONDAY, gym.id)
        schedule.select_program(DayOfWeek.MONDAY, gym.id)
        assert schedule.selected_program(DayOfWeek.MONDAY) == gym.id

        assert schedule.delete_program(DayOfWeek.MONDAY, gym.id) is True

        assert schedule.get_items(DayOfWeek.MONDAY, gym.id) == []
        assert schedule.selected_program(DayOfWeek.MONDAY) == "default"
        assert [p.id for p in schedule.list_programs(DayOfWeek.MONDAY)] == ["default"]
        assert schedule.delete_program(DayOfWeek.MONDAY, gym.id) is False

    def test_default_program_cannot_be_deleted(self, services):
        """Test the implicit default is permanent."""
        with pytest.raises(ValidationError):
            services.schedule.delete_program(DayOfWeek.MONDAY, "default")

    def test_select_unknown_program(self, services):
        """Test selecting a program the day does not have."""
        with pytest.raises(NotFoundError):
            services.schedule.select_program(DayOfWeek.MONDAY, "missing")
        assert services.schedule.selected_program(DayOfWeek.MONDAY) == "default"

    def test_week_uses_selected_programs(self, services):
        """Test get_week shows each day's selected program."""
        schedule = services.schedule
        gym = schedule.create_program(DayOfWeek.MONDAY, "Gym")
        schedule.create_item(item_request(what="Lift"), DayOfWeek.MONDAY, gym.id)
        schedule.create_item(item_request(what="Read"), DayOfWeek.MONDAY)
        schedule.create_item(item_request(what="Walk"), DayOfWeek.SUNDAY)
        schedule.select_program(DayOfWeek.MONDAY, gym.id)

        week = schedule.get_week()

        assert list(week) == list(DayOfWeek)
        assert [i.what_to_do for i in week[DayOfWeek.MONDAY]] == ["Lift"]
        assert [i.what_to_do for i in week[DayOfWeek.SUNDAY]] == ["Walk"]
        assert week[DayOfWeek.WEDNESDAY] == []

        default_week = schedule.get_week("default")
        assert [i.what_to_do for i in default_week[DayOfWeek.MONDAY]] == ["Read"]


class TestGoalsAndBlocks:
    """Tests for goals and time blocks."""

    def test_goal_lifecycle(self, services):
        """Test add, toggle, filter and delete."""
        planner = services.planner
        daily = planner.add_goal(" Drink water ")
        weekly = planner.add_goal("Call mom", GoalType.WEEKLY)

        assert daily.text == "Drink water"
        assert daily.completed is False
        assert planner.toggle_goal(daily.id).completed is True
        assert planner.toggle_goal(daily.id).completed is False
        assert [g.id for g in planner.list_goals(GoalType.WEEKLY)] == [weekly.id]
        assert len(planner.list_goals()) == 2
        assert planner.delete_goal(weekly.id) is True
        assert planner.toggle_goal(weekly.id) is None

    def test_custom_goal_needs_date(self, services):
        """Test custom goals require a target date."""
        with pytest.raises(ValidationError) as exc_info:
            services.planner.add_goal("Run a marathon", GoalType.CUSTOM)
        assert exc_info.value.field == "custom_date"

        goal = services.planner.add_goal("Run a marathon", GoalType.CUSTOM, "2025-04-01")
        assert goal.custom_date == "2025-04-01"

    def test_update_goal_validates_result(self, services):
        """Test switching to CUSTOM without a date is rejected."""
        goal = services.planner.add_goal("Stretch")
        with pytest.raises(ValidationError):
            services.planner.update_goal(UpdateGoalRequest(id=goal.id, type=GoalType.CUSTOM))

    def test_blocks_sorted_by_time(self, services):
        """Test blocks list earliest first."""
        planner = services.planner
        planner.add_block("18:30", "Gym")
        planner.add_block("07:00", "Breakfast", "Oats")
        planner.add_block("12:15", "Lunch")

        assert [b.title for b in planner.list_blocks()] == ["Breakfast", "Lunch", "Gym"]

    def test_block_validation(self, services):
        """Test block time and title rules."""
        with pytest.raises(ValidationError) as exc_info:
            services.planner.add_block("7am", "Breakfast")
        assert exc_info.value.field == "time"

        block = services.planner.add_block("07:00", "Breakfast")
        with pytest.raises(ValidationError):
            services.planner.update_block(UpdateRoutineBlockRequest(id=block.id, title=""))
        updated = services.planner.update_block(UpdateRoutineBlockRequest(id=block.id, time="07:30"))
        assert updated.time == "07:30"


class TestHabitRoutines:
    """Tests for habit routines and streaks."""

    def test_create_and_update(self, services):
        """Test routine CRUD."""
        routine = services.planner.create_routine(CreateRoutineRequest(
            title="Meditate", time_of_day="06:30", days_of_week=[DayOfWeek.MONDAY],
        ))
        assert routine.streak_count == 0
        assert routine.last_completed is None

        updated = services.planner.update_routine(
            UpdateRoutineRequest(id=routine.id, priority=Priority.HIGH)
        )
        assert updated.priority == Priority.HIGH
        assert updated.title == "Meditate"

        with pytest.raises(ValidationError):
            services.planner.update_routine(UpdateRoutineRequest(id=routine.id, time_of_day="6:30"))

        assert services.planner.delete_routine(routine.id) is True
        assert services.planner.get_routine(routine.id) is None

    def test_title_required(self, services):
        """Test routines need a title."""
        with pytest.raises(ValidationError):
            services.planner.create_routine(CreateRoutineRequest(title=" "))

    def test_streak_rules(self, services):
        """Test same-day, next-day and gap completions."""
        planner = services.planner
        routine = planner.create_routine(CreateRoutineRequest(title="Read"))
        day_one = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)

        assert planner.complete_routine(routine.id, day_one).streak_count == 1
        assert planner.complete_routine(routine.id, day_one + timedelta(hours=10)).streak_count == 1
        assert planner.complete_routine(routine.id, day_one + timedelta(days=1)).streak_count == 2
        assert planner.complete_routine(routine.id, day_one + timedelta(days=2)).streak_count == 3

        restarted = planner.complete_routine(routine.id, day_one + timedelta(days=5))
        assert restarted.streak_count == 1
        assert restarted.last_completed == day_one + timedelta(days=5)

    def test_streak_uses_utc_days(self, services):
        """Test completions are bucketed by UTC calendar day."""
        planner = services.planner
        routine = planner.create_routine(CreateRoutineRequest(title="Read"))
        plus_three = timezone(timedelta(hours=3))

        planner.complete_routine(routine.id, datetime(2024, 3, 1, 22, 0, tzinfo=timezone.utc))
        # 01:00 at +03:00 is still 22:00 UTC on the same day
        same_day = planner.complete_routine(
            routine.id, datetime(2024, 3, 2, 1, 0, tzinfo=plus_three)
        )
        assert same_day.streak_count == 1

    def test_complete_missing_routine(self, services):
        """Test completing an unknown routine."""
        assert services.planner.complete_routine("nope") is None

    def test_search_routines(self, services):
        """Test routine filters and priority ordering."""
        planner = services.planner
        for title, priority, days in [
            ("Morning run", Priority.HIGH, [DayOfWeek.MONDAY]),
            ("Evening read", Priority.LOW, [DayOfWeek.MONDAY, DayOfWeek.TUESDAY]),
            ("Tax review", Priority.CRITICAL, []),
        ]:
            planner.create_routine(CreateRoutineRequest(
                title=title, priority=priority, days_of_week=days,
            ))

        by_priority = planner.search_routines(
            SearchRoutineRequest(sort_by="priority", sort_direction="desc")
        )
        assert [r.title for r in by_priority.items] == ["Tax review", "Morning run", "Evening read"]

        tuesday = planner.search_routines(SearchRoutineRequest(day_of_week=DayOfWeek.TUESDAY))
        assert [r.title for r in tuesday.items] == ["Evening read"]

        text = planner.search_routines(SearchRoutineRequest(query="RUN"))
        assert text.total == 1
