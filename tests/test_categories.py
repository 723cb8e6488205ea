"""
Tests for custom categories, including the Crypto scenario end to end.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from myhub.errors import ConflictError, ValidationError
from myhub.models import (
    BudgetCategory,
    CreatePasswordRequest,
    CreateRecurringTemplateRequest,
    CreateTransactionRequest,
    PasswordCategory,
    PasswordEntry,
    Transaction,
    TransactionType,
    UpdateCustomCategoryRequest,
)
from myhub.repositories import PasswordRepository, TransactionRepository


class TestCustomCategoryService:
    """Tests for category CRUD and uniqueness."""

    def test_create_trims_values(self, services):
        """Test values are stored trimmed."""
        category = services.categories.create("  Crypto ", " #F59E0B ", icon=" 💰 ")

        assert category.name == "Crypto"
        assert category.color == "#F59E0B"
        assert category.icon == "💰"
        assert category.is_active is True
        assert services.categories.get_by_id(category.id) == category

    @pytest.mark.parametrize("name,color,field", [
        ("", "#fff", "name"),
        ("   ", "#fff", "name"),
        ("Crypto", "", "color"),
        (None, "#fff", "name"),
    ])
    def test_blank_name_or_color_rejected(self, services, name, color, field):
        """Test name and color are required."""
        with pytest.raises(ValidationError) as exc_info:
            services.categories.create(name, color)
        assert exc_info.value.field == field
        assert services.categories.list() == []

    def test_duplicate_name_ignores_case(self, services):
        """Test 'crypto' conflicts with 'Crypto'."""
        services.categories.create("Crypto", "#F59E0B")
        with pytest.raises(ConflictError):
            services.categories.create("crypto", "#3B82F6")
        assert len(services.categories.list()) == 1

    def test_rename_checks_other_categories(self, services):
        """Test renames conflict with others but not with themselves."""
        crypto = services.categories.create("Crypto", "#F59E0B")
        services.categories.create("Bills", "#EF4444")

        with pytest.raises(ConflictError):
            services.categories.update(crypto.id, UpdateCustomCategoryRequest(id=crypto.id, name="BILLS"))

        renamed = services.categories.update(
            crypto.id, UpdateCustomCategoryRequest(id=crypto.id, name="CRYPTO")
        )
        assert renamed.name == "CRYPTO"

    def test_update_rejects_blank_color(self, services):
        """Test a patch cannot blank the color."""
        crypto = services.categories.create("Crypto", "#F59E0B")
        with pytest.raises(ValidationError):
            services.categories.update(crypto.id, UpdateCustomCategoryRequest(id=crypto.id, color=" "))

    def test_update_and_delete_missing(self, services):
        """Test unknown ids are reported without raising."""
        assert services.categories.update("nope", UpdateCustomCategoryRequest(id="nope", name="X")) is None
        assert services.categories.delete("nope") is False

    def test_predefined_palettes(self, services):
        """Test the predefined colors and icons."""
        colors = services.categories.predefined_colors()
        icons = services.categories.predefined_icons()

        assert len(colors) == 12
        assert colors[0] == "#3B82F6"
        assert len(icons) == 30
        assert icons[0] == "🏠"

        colors.append("#000000")
        assert len(services.categories.predefined_colors()) == 12


class TestCategoryCascade:
    """Tests for reference clearing on delete."""

    def test_crypto_end_to_end(self, services, run):
        """Test a category used by a password can be deleted cleanly."""
        crypto = services.categories.create("Crypto", "#F59E0B", icon="💰")
        password = run(services.passwords.create(CreatePasswordRequest(
            app_name="Binance",
            username="trader",
            password="Tr4der!pass",
            category=PasswordCategory.OTHER,
            custom_category_id=crypto.id,
        )))
        assert password.custom_category_id == crypto.id

        assert services.categories.delete(crypto.id) is True

        assert services.categories.list() == []
        reloaded = run(services.passwords.get_by_id(password.id))
        assert reloaded.custom_category_id is None
        assert reloaded.app_name == "Binance"
        assert reloaded.created_at == password.created_at

    def test_delete_clears_transactions_and_templates(self, services):
        """Test every referencing collection is cleaned up."""
        bills = services.categories.create("Bills", "#EF4444", category_type="expense")
        other = services.categories.create("Other", "#3B82F6")
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)

        tx = services.budget.create_transaction(CreateTransactionRequest(
            amount=Decimal("40"),
            description="Electricity",
            category=BudgetCategory.UTILITIES,
            type=TransactionType.EXPENSE,
            date=when,
            custom_category_id=bills.id,
        ))
        untouched = services.budget.create_transaction(CreateTransactionRequest(
            amount=Decimal("5"),
            description="Snack",
            category=BudgetCategory.FOOD,
            type=TransactionType.EXPENSE,
            date=when,
            custom_category_id=other.id,
        ))
        template = services.recurring.create_template(CreateRecurringTemplateRequest(
            description="Internet",
            amount=Decimal("30"),
            custom_category_id=bills.id,
            next_run_at=when,
        ))

        services.categories.delete(bills.id)

        assert services.budget.get_transaction(tx.id).custom_category_id is None
        assert services.budget.get_transaction(untouched.id).custom_category_id == other.id
        assert services.recurring.get_template(template.id).custom_category_id is None

    def test_cleared_records_get_fresh_updated_at(self, services, adapter):
        """Test clearing a reference counts as an update of the record."""
        old = datetime(2020, 1, 1, tzinfo=timezone.utc)
        crypto = services.categories.create("Crypto", "#F59E0B")
        passwords = PasswordRepository(adapter)
        transactions = TransactionRepository(adapter)
        entry = passwords.add(PasswordEntry(
            app_name="Binance",
            username="trader",
            password="Tr4der!pass",
            custom_category_id=crypto.id,
            created_at=old,
            updated_at=old,
        ))
        tx = transactions.add(Transaction(
            amount=Decimal("10"),
            description="Coin",
            category=BudgetCategory.INVESTMENT,
            type=TransactionType.EXPENSE,
            date=old,
            custom_category_id=crypto.id,
            created_at=old,
            updated_at=old,
        ))

        services.categories.delete(crypto.id)

        cleared_entry = passwords.get_by_id(entry.id)
        assert cleared_entry.updated_at > old
        assert cleared_entry.created_at == old
        assert transactions.get_by_id(tx.id).updated_at > old
