"""Entity repositories over the key-value store adapter."""

from myhub.repositories.base import EntityRepository
from myhub.repositories.collections import (
    BudgetRepository,
    CustomCategoryRepository,
    GoalRepository,
    PasswordRepository,
    RecurringTemplateRepository,
    RoutineBlockRepository,
    RoutineRepository,
    TransactionRepository,
)
from myhub.repositories.schedule import ProgramRepository, ScheduleRepository

__all__ = [
    "BudgetRepository",
    "CustomCategoryRepository",
    "EntityRepository",
    "GoalRepository",
    "PasswordRepository",
    "ProgramRepository",
    "RecurringTemplateRepository",
    "RoutineBlockRepository",
    "RoutineRepository",
    "ScheduleRepository",
    "TransactionRepository",
]
