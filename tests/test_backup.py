"""
Tests for whole-store export, import and clearing.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from myhub.errors import ImportFormatError
from myhub.models import (
    CreateBudgetRequest,
    CreatePasswordRequest,
    CreateRoutineRequest,
    CreateScheduleItemRequest,
    DayOfWeek,
)

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def populated(services, run):
    run(services.passwords.create(CreatePasswordRequest(
        app_name="GitHub", username="octo", password="Gh!token99",
    )))
    services.budget.create_budget(CreateBudgetRequest(
        name="Food", amount=Decimal("300"), start_date=JAN_1,
    ))
    services.planner.create_routine(CreateRoutineRequest(title="Read"))
    services.categories.create("Crypto", "#F59E0B")
    return services


class TestBackupExport:
    """Tests for export_data."""

    def test_export_shape(self, populated):
        """Test every collection and the metadata are present."""
        data = populated.backup.export_data()

        assert set(data) == {
            "passwords",
            "routines",
            "budgets",
            "transactions",
            "customCategories",
            "recurringTemplates",
            "exportDate",
            "version",
        }
        assert data["version"] == "1.0.0"
        assert isinstance(data["exportDate"], datetime)
        assert data["passwords"][0]["appName"] == "GitHub"
        assert data["budgets"][0]["startDate"] == JAN_1
        assert data["transactions"] == []


class TestBackupImport:
    """Tests for import_data."""

    def test_import_replaces_collections(self, populated, services):
        """Test a backup overwrites what it contains and leaves the rest."""
        data = populated.backup.export_data()
        services.categories.create("Bills", "#EF4444")

        counts = services.backup.import_data({"customCategories": data["customCategories"]})

        assert counts == {"customCategories": 1}
        assert [c.name for c in services.categories.list()] == ["Crypto"]
        assert len(services.budget.list_budgets()) == 1

    def test_restore_after_clear(self, populated, services, run):
        """Test clear followed by import restores every record."""
        data = populated.backup.export_data()
        password_id = data["passwords"][0]["id"]

        services.backup.clear_all()
        assert services.budget.list_budgets() == []

        counts = services.backup.import_data(data)

        assert counts["passwords"] == 1
        assert counts["budgets"] == 1
        restored = run(services.passwords.get_by_id(password_id))
        assert restored.app_name == "GitHub"
        assert services.budget.list_budgets()[0].amount == Decimal("300")

    def test_invalid_record_writes_nothing(self, populated, services):
        """Test one bad record rejects the whole backup."""
        data = populated.backup.export_data()
        data["routines"] = [{"id": "x"}]
        data["budgets"] = []

        with pytest.raises(ImportFormatError):
            services.backup.import_data(data)

        assert len(services.budget.list_budgets()) == 1
        assert len(services.planner.list_routines()) == 1

    def test_non_object_rejected(self, services):
        """Test a backup must be a mapping."""
        with pytest.raises(ImportFormatError):
            services.backup.import_data([])

    def test_non_list_fields_ignored(self, populated, services):
        """Test fields that are not lists leave storage alone."""
        assert services.backup.import_data({"budgets": "nope"}) == {}
        assert len(services.budget.list_budgets()) == 1


class TestClearAndUsage:
    """Tests for clear_all and storage_info."""

    def test_clear_all(self, populated, services):
        """Test every flat collection is emptied."""
        services.planner.add_goal("Stretch")
        services.planner.add_block("07:00", "Breakfast")

        services.backup.clear_all()

        assert services.categories.list() == []
        assert services.planner.list_routines() == []
        assert services.planner.list_goals() == []
        assert services.planner.list_blocks() == []

    def test_clear_leaves_schedule(self, services):
        """Test schedule partitions are not part of clear_all."""
        services.schedule.create_item(
            CreateScheduleItemRequest(start_time="09:00", end_time="10:00", what_to_do="Read"),
            DayOfWeek.MONDAY,
        )
        services.backup.clear_all()
        assert len(services.schedule.get_items(DayOfWeek.MONDAY)) == 1

    def test_storage_info(self, populated, store):
        """Test usage reflects stored data."""
        usage = populated.backup.storage_info()
        assert usage.used > 0
        assert usage.used == sum(len(k) + len(store.get_item(k)) for k in store.keys())
