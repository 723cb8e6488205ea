"""
Budget Tracker Models

DESIGN DECISION: Money is held as Decimal in memory. Amounts are written
to storage as JSON numbers, which is exact for the two-decimal values a
personal budget deals with.

A transaction references its budget and optional custom category by id
only; nothing enforces that the referenced record exists.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from myhub.models.base import BaseEntity, CamelModel, PatchModel, UtcDatetime


# =============================================================================
# ENUMS
# =============================================================================

class BudgetCategory(str, Enum):
    INCOME = "income"
    FOOD = "food"
    TRANSPORTATION = "transportation"
    ENTERTAINMENT = "entertainment"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    OTHER = "other"


class BudgetType(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"
    YEARLY = "yearly"
    ONE_TIME = "one_time"


class Currency(str, Enum):
    TRY = "TRY"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class BudgetPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class RecurrenceInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Tag stamped on every transaction materialized from a template
RECURRING_TAG = "recurring"


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseEntity):
    name: str
    description: Optional[str] = None
    category: BudgetCategory
    type: BudgetType
    amount: Decimal
    currency: Currency = Currency.TRY
    period: BudgetPeriod = BudgetPeriod.MONTH
    start_date: UtcDatetime
    end_date: Optional[UtcDatetime] = None
    is_active: bool = True
    target_amount: Optional[Decimal] = None


class CreateBudgetRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: BudgetCategory = BudgetCategory.OTHER
    type: BudgetType = BudgetType.MONTHLY
    amount: Optional[Decimal] = None
    currency: Currency = Currency.TRY
    period: BudgetPeriod = BudgetPeriod.MONTH
    start_date: UtcDatetime
    end_date: Optional[UtcDatetime] = None
    is_active: bool = True
    target_amount: Optional[Decimal] = None


class UpdateBudgetRequest(PatchModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[BudgetCategory] = None
    type: Optional[BudgetType] = None
    amount: Optional[Decimal] = None
    currency: Optional[Currency] = None
    period: Optional[BudgetPeriod] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    is_active: Optional[bool] = None
    target_amount: Optional[Decimal] = None


BudgetSortField = Literal["name", "amount", "created_at", "start_date"]


class SearchBudgetRequest(CamelModel):
    query: Optional[str] = None
    category: Optional[BudgetCategory] = None
    type: Optional[BudgetType] = None
    currency: Optional[Currency] = None
    is_active: Optional[bool] = None
    date_from: Optional[UtcDatetime] = None
    date_to: Optional[UtcDatetime] = None
    sort_by: Optional[BudgetSortField] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseEntity):
    budget_id: str = Field(
        default="",
        description="Owning budget, empty for unassigned income"
    )
    amount: Decimal
    description: str
    category: BudgetCategory
    type: TransactionType
    date: UtcDatetime
    tags: list[str] = Field(default_factory=list)
    receipt: Optional[str] = None
    custom_category_id: Optional[str] = None
    account_target: Optional[str] = Field(
        default=None,
        description="Wallet or bank account the money goes to"
    )


class CreateTransactionRequest(CamelModel):
    budget_id: str = ""
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[BudgetCategory] = None
    type: Optional[TransactionType] = None
    date: UtcDatetime
    tags: list[str] = Field(default_factory=list)
    receipt: Optional[str] = None
    custom_category_id: Optional[str] = None
    account_target: Optional[str] = None


class CreateIncomeRequest(CamelModel):
    amount: Optional[Decimal] = None
    source: Optional[str] = None
    account_target: Optional[str] = None
    date: UtcDatetime
    description: Optional[str] = None
    tags: Optional[list[str]] = None


class UpdateTransactionRequest(PatchModel):
    budget_id: Optional[str] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[BudgetCategory] = None
    type: Optional[TransactionType] = None
    date: Optional[UtcDatetime] = None
    tags: Optional[list[str]] = None
    receipt: Optional[str] = None
    custom_category_id: Optional[str] = None
    account_target: Optional[str] = None


TransactionSortField = Literal["date", "amount", "description", "created_at"]


class SearchTransactionRequest(CamelModel):
    query: Optional[str] = None
    budget_id: Optional[str] = None
    category: Optional[BudgetCategory] = None
    type: Optional[TransactionType] = None
    date_from: Optional[UtcDatetime] = None
    date_to: Optional[UtcDatetime] = None
    amount_min: Optional[Decimal] = None
    amount_max: Optional[Decimal] = None
    tags: Optional[list[str]] = None
    sort_by: Optional[TransactionSortField] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class BudgetSummary(CamelModel):
    """Aggregates computed from the live collections."""

    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    active_budgets: int


# =============================================================================
# RECURRING TEMPLATES
# =============================================================================

class RecurringTransactionTemplate(BaseEntity):
    """
    Blueprint for a transaction that repeats on a calendar interval.

    ``next_run_at`` advances by exactly one interval step per materialization.
    """

    description: str
    amount: Decimal
    category: Optional[BudgetCategory] = None
    custom_category_id: Optional[str] = None
    type: TransactionType
    next_run_at: UtcDatetime
    interval: RecurrenceInterval
    is_active: bool = True
    budget_id: Optional[str] = None
    end_date: Optional[UtcDatetime] = None


class CreateRecurringTemplateRequest(CamelModel):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[BudgetCategory] = None
    custom_category_id: Optional[str] = None
    type: TransactionType = TransactionType.EXPENSE
    next_run_at: UtcDatetime
    interval: RecurrenceInterval = RecurrenceInterval.MONTHLY
    is_active: bool = True
    budget_id: Optional[str] = None
    end_date: Optional[UtcDatetime] = None


class UpdateRecurringTemplateRequest(PatchModel):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[BudgetCategory] = None
    custom_category_id: Optional[str] = None
    type: Optional[TransactionType] = None
    next_run_at: Optional[UtcDatetime] = None
    interval: Optional[RecurrenceInterval] = None
    is_active: Optional[bool] = None
    budget_id: Optional[str] = None
    end_date: Optional[UtcDatetime] = None
