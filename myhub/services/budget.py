"""
Budget & Transaction Service

Budgets and transactions live in separate collections and reference each
other by id only. Aggregates (totals, net balance, active budgets) are
computed on demand from the stored collections; nothing is cached.

Income is a transaction with type INCOME, category INCOME and no budget.
"""

from decimal import Decimal
from typing import List, Optional

from myhub.logger import get_logger
from myhub.models import (
    Budget,
    BudgetCategory,
    BudgetSummary,
    CreateBudgetRequest,
    CreateIncomeRequest,
    CreateTransactionRequest,
    Page,
    SearchBudgetRequest,
    SearchTransactionRequest,
    Transaction,
    TransactionType,
    UpdateBudgetRequest,
    UpdateTransactionRequest,
)
from myhub.queries import DEFAULT_PAGE_LIMIT, query_budgets, query_transactions, sum_amounts
from myhub.repositories import BudgetRepository, TransactionRepository
from myhub.services.base import apply_patch
from myhub.validation import BudgetValidator

logger = get_logger(__name__)


class BudgetService:
    """Budgets, transactions and the aggregates derived from them."""

    def __init__(
        self,
        budgets: BudgetRepository,
        transactions: TransactionRepository,
        page_limit: int = DEFAULT_PAGE_LIMIT,
    ):
        self._budgets = budgets
        self._transactions = transactions
        self._page_limit = page_limit
        self._validator = BudgetValidator()

    # =========================================================================
    # BUDGETS
    # =========================================================================

    def create_budget(self, request: CreateBudgetRequest) -> Budget:
        """
        Create a budget.

        Raises:
            ValidationError: If the name is blank or the amount is missing or zero
        """
        self._validator.validate_budget(request.name, request.amount)

        budget = Budget(**request.model_dump())
        self._budgets.add(budget)

        logger.info("budget_created", budget_id=budget.id, category=budget.category.value)
        return budget

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return self._budgets.get_by_id(budget_id)

    def list_budgets(self) -> List[Budget]:
        return self._budgets.get_all()

    def update_budget(self, patch: UpdateBudgetRequest) -> Optional[Budget]:
        """Apply a partial update. Returns None if the id is unknown."""
        existing = self._budgets.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._validator.validate_budget(updated.name, updated.amount)
        self._budgets.update(updated)

        logger.info("budget_updated", budget_id=updated.id)
        return updated

    def delete_budget(self, budget_id: str) -> bool:
        deleted = self._budgets.delete(budget_id)
        if deleted:
            logger.info("budget_deleted", budget_id=budget_id)
        return deleted

    def search_budgets(self, request: Optional[SearchBudgetRequest] = None) -> Page[Budget]:
        return query_budgets(self._budgets.get_all(), request, self._page_limit)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def create_transaction(self, request: CreateTransactionRequest) -> Transaction:
        """
        Record a transaction.

        Raises:
            ValidationError: If amount, description, category or type is missing
        """
        self._validator.validate_transaction(request)

        transaction = Transaction(**request.model_dump())
        self._transactions.add(transaction)

        logger.info(
            "transaction_created",
            transaction_id=transaction.id,
            type=transaction.type.value,
            budget_id=transaction.budget_id,
        )
        return transaction

    def create_income(self, request: CreateIncomeRequest) -> Transaction:
        """
        Record income that is not tied to a budget.

        The description defaults to the source and the tags default to
        ``["source:<source>"]``.

        Raises:
            ValidationError: If amount, source or account target is missing
        """
        self._validator.validate_income(request)

        transaction = Transaction(
            budget_id="",
            amount=request.amount,
            description=request.description or request.source,
            category=BudgetCategory.INCOME,
            type=TransactionType.INCOME,
            date=request.date,
            account_target=request.account_target,
            tags=request.tags if request.tags is not None else [f"source:{request.source}"],
        )
        self._transactions.add(transaction)

        logger.info("income_created", transaction_id=transaction.id)
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get_by_id(transaction_id)

    def list_transactions(self) -> List[Transaction]:
        return self._transactions.get_all()

    def transactions_by_type(self, transaction_type: TransactionType) -> List[Transaction]:
        return [t for t in self._transactions.get_all() if t.type == transaction_type]

    def incomes(self) -> List[Transaction]:
        return self.transactions_by_type(TransactionType.INCOME)

    def expenses(self) -> List[Transaction]:
        return self.transactions_by_type(TransactionType.EXPENSE)

    def update_transaction(self, patch: UpdateTransactionRequest) -> Optional[Transaction]:
        """Apply a partial update. Returns None if the id is unknown."""
        existing = self._transactions.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._transactions.update(updated)

        logger.info("transaction_updated", transaction_id=updated.id)
        return updated

    def delete_transaction(self, transaction_id: str) -> bool:
        deleted = self._transactions.delete(transaction_id)
        if deleted:
            logger.info("transaction_deleted", transaction_id=transaction_id)
        return deleted

    def search_transactions(
        self,
        request: Optional[SearchTransactionRequest] = None,
    ) -> Page[Transaction]:
        return query_transactions(self._transactions.get_all(), request, self._page_limit)

    # =========================================================================
    # AGGREGATES
    # =========================================================================

    def total_income(self) -> Decimal:
        return sum_amounts(self.incomes())

    def total_expenses(self) -> Decimal:
        return sum_amounts(self.expenses())

    def net_balance(self) -> Decimal:
        return self.total_income() - self.total_expenses()

    def active_budget_count(self) -> int:
        return sum(1 for b in self._budgets.get_all() if b.is_active)

    def summary(self) -> BudgetSummary:
        """All four aggregates from a single read of each collection."""
        transactions = self._transactions.get_all()
        income = sum_amounts(t for t in transactions if t.type == TransactionType.INCOME)
        expenses = sum_amounts(t for t in transactions if t.type == TransactionType.EXPENSE)
        return BudgetSummary(
            total_income=income,
            total_expenses=expenses,
            net_balance=income - expenses,
            active_budgets=self.active_budget_count(),
        )
