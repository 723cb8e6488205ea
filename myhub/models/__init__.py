"""
Data Models Package

Pydantic models for every entity the organizer stores, plus the request
and response models the services exchange with callers.
"""

from myhub.models.base import (
    BaseEntity,
    CamelModel,
    Page,
    PatchModel,
    UtcDatetime,
    as_utc,
    generate_id,
    utcnow,
)
from myhub.models.budget import (
    RECURRING_TAG,
    Budget,
    BudgetCategory,
    BudgetPeriod,
    BudgetSummary,
    BudgetType,
    CreateBudgetRequest,
    CreateIncomeRequest,
    CreateRecurringTemplateRequest,
    CreateTransactionRequest,
    Currency,
    RecurrenceInterval,
    RecurringTransactionTemplate,
    SearchBudgetRequest,
    SearchTransactionRequest,
    Transaction,
    TransactionType,
    UpdateBudgetRequest,
    UpdateRecurringTemplateRequest,
    UpdateTransactionRequest,
)
from myhub.models.category import CustomCategory, UpdateCustomCategoryRequest
from myhub.models.password import (
    CreatePasswordRequest,
    ImportResult,
    PasswordCategory,
    PasswordEntry,
    PasswordExport,
    PasswordResponse,
    PasswordStats,
    PasswordStrength,
    SearchPasswordRequest,
    UpdatePasswordRequest,
)
from myhub.models.routine import (
    DEFAULT_PROGRAM_ID,
    CreateRoutineRequest,
    CreateScheduleItemRequest,
    DayOfWeek,
    Goal,
    GoalType,
    Priority,
    Routine,
    RoutineBlock,
    RoutineCategory,
    RoutineProgram,
    RoutineScheduleItem,
    SearchRoutineRequest,
    UpdateGoalRequest,
    UpdateRoutineBlockRequest,
    UpdateRoutineRequest,
    UpdateScheduleItemRequest,
)

__all__ = [
    # Base
    "BaseEntity",
    "CamelModel",
    "Page",
    "PatchModel",
    "UtcDatetime",
    "as_utc",
    "generate_id",
    "utcnow",
    # Budget models
    "RECURRING_TAG",
    "Budget",
    "BudgetCategory",
    "BudgetPeriod",
    "BudgetSummary",
    "BudgetType",
    "CreateBudgetRequest",
    "CreateIncomeRequest",
    "CreateRecurringTemplateRequest",
    "CreateTransactionRequest",
    "Currency",
    "RecurrenceInterval",
    "RecurringTransactionTemplate",
    "SearchBudgetRequest",
    "SearchTransactionRequest",
    "Transaction",
    "TransactionType",
    "UpdateBudgetRequest",
    "UpdateRecurringTemplateRequest",
    "UpdateTransactionRequest",
    # Category models
    "CustomCategory",
    "UpdateCustomCategoryRequest",
    # Password models
    "CreatePasswordRequest",
    "ImportResult",
    "PasswordCategory",
    "PasswordEntry",
    "PasswordExport",
    "PasswordResponse",
    "PasswordStats",
    "PasswordStrength",
    "SearchPasswordRequest",
    "UpdatePasswordRequest",
    # Routine models
    "DEFAULT_PROGRAM_ID",
    "CreateRoutineRequest",
    "CreateScheduleItemRequest",
    "DayOfWeek",
    "Goal",
    "GoalType",
    "Priority",
    "Routine",
    "RoutineBlock",
    "RoutineCategory",
    "RoutineProgram",
    "RoutineScheduleItem",
    "SearchRoutineRequest",
    "UpdateGoalRequest",
    "UpdateRoutineBlockRequest",
    "UpdateRoutineRequest",
    "UpdateScheduleItemRequest",
]
