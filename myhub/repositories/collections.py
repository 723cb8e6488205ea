"""Repositories for the flat (unpartitioned) collections."""

from myhub.models import (
    Budget,
    CustomCategory,
    Goal,
    PasswordEntry,
    RecurringTransactionTemplate,
    Routine,
    RoutineBlock,
    Transaction,
)
from myhub.repositories.base import EntityRepository
from myhub.storage.adapter import StorageAdapter

# Logical storage keys; the adapter adds the configured prefix
PASSWORDS_KEY = "passwords"
ROUTINES_KEY = "routines"
BUDGETS_KEY = "budgets"
TRANSACTIONS_KEY = "transactions"
CUSTOM_CATEGORIES_KEY = "custom_categories"
RECURRING_TEMPLATES_KEY = "recurring_templates"
GOALS_KEY = "goals"
ROUTINE_BLOCKS_KEY = "routine_blocks"


class PasswordRepository(EntityRepository[PasswordEntry]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, PASSWORDS_KEY, PasswordEntry)


class RoutineRepository(EntityRepository[Routine]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, ROUTINES_KEY, Routine)


class BudgetRepository(EntityRepository[Budget]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, BUDGETS_KEY, Budget)


class TransactionRepository(EntityRepository[Transaction]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, TRANSACTIONS_KEY, Transaction)


class CustomCategoryRepository(EntityRepository[CustomCategory]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, CUSTOM_CATEGORIES_KEY, CustomCategory)


class RecurringTemplateRepository(EntityRepository[RecurringTransactionTemplate]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, RECURRING_TEMPLATES_KEY, RecurringTransactionTemplate)


class GoalRepository(EntityRepository[Goal]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, GOALS_KEY, Goal)


class RoutineBlockRepository(EntityRepository[RoutineBlock]):
    def __init__(self, adapter: StorageAdapter):
        super().__init__(adapter, ROUTINE_BLOCKS_KEY, RoutineBlock)
