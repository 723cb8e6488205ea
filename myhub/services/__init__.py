"""
Domain Services

Business rules for each area of the organizer. Services validate input,
talk to repositories and return pydantic models; they never touch the
key-value store directly.
"""

from myhub.services.backup import BackupService
from myhub.services.budget import BudgetService
from myhub.services.categories import CustomCategoryService
from myhub.services.passwords import PasswordService, calculate_password_strength
from myhub.services.recurring import RecurringTransactionService
from myhub.services.routines import (
    RoutinePlannerService,
    RoutineScheduleService,
    sorted_by_start_time,
)

__all__ = [
    "BackupService",
    "BudgetService",
    "CustomCategoryService",
    "PasswordService",
    "RecurringTransactionService",
    "RoutinePlannerService",
    "RoutineScheduleService",
    "calculate_password_strength",
    "sorted_by_start_time",
]
