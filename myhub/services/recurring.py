"""
Recurring Transaction Engine

DESIGN DECISION: One materialization per template per run.
A template that is several intervals behind produces ONE transaction and
moves forward by ONE step. Repeated runs catch it up gradually, so a
forgotten template never floods the ledger in a single call.

Calendar steps use dateutil's relativedelta: a monthly template due on
Jan 31 next runs on Feb 28 (or 29), never in March.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from myhub.logger import get_logger
from myhub.models import (
    RECURRING_TAG,
    BudgetCategory,
    CreateRecurringTemplateRequest,
    RecurrenceInterval,
    RecurringTransactionTemplate,
    Transaction,
    UpdateRecurringTemplateRequest,
    as_utc,
    utcnow,
)
from myhub.repositories import RecurringTemplateRepository, TransactionRepository
from myhub.services.base import apply_patch
from myhub.validation import BudgetValidator

logger = get_logger(__name__)

_STEPS = {
    RecurrenceInterval.DAILY: timedelta(days=1),
    RecurrenceInterval.WEEKLY: timedelta(days=7),
    RecurrenceInterval.MONTHLY: relativedelta(months=1),
    RecurrenceInterval.YEARLY: relativedelta(years=1),
}


def next_run(previous: datetime, interval: RecurrenceInterval) -> datetime:
    """Advance a run date by exactly one interval step."""
    return previous + _STEPS[interval]


def transaction_category(template: RecurringTransactionTemplate) -> BudgetCategory:
    """
    Built-in category for a generated transaction.

    A custom category wins: the transaction is filed under OTHER and
    carries the custom category id.
    """
    if template.custom_category_id:
        return BudgetCategory.OTHER
    return template.category or BudgetCategory.OTHER


class RecurringTransactionService:
    """Template CRUD plus the due-date runner."""

    def __init__(
        self,
        templates: RecurringTemplateRepository,
        transactions: TransactionRepository,
    ):
        self._templates = templates
        self._transactions = transactions
        self._validator = BudgetValidator()

    def create_template(self, request: CreateRecurringTemplateRequest) -> RecurringTransactionTemplate:
        """
        Create a template.

        Raises:
            ValidationError: If the description is blank or the amount is missing
        """
        self._validator.validate_template(request)

        template = RecurringTransactionTemplate(**request.model_dump())
        self._templates.add(template)

        logger.info(
            "recurring_template_created",
            template_id=template.id,
            interval=template.interval.value,
        )
        return template

    def get_template(self, template_id: str) -> Optional[RecurringTransactionTemplate]:
        return self._templates.get_by_id(template_id)

    def list_templates(self) -> List[RecurringTransactionTemplate]:
        return self._templates.get_all()

    def update_template(
        self,
        patch: UpdateRecurringTemplateRequest,
    ) -> Optional[RecurringTransactionTemplate]:
        existing = self._templates.get_by_id(patch.id)
        if existing is None:
            return None

        updated = apply_patch(existing, patch)
        self._templates.update(updated)

        logger.info("recurring_template_updated", template_id=updated.id)
        return updated

    def delete_template(self, template_id: str) -> bool:
        deleted = self._templates.delete(template_id)
        if deleted:
            logger.info("recurring_template_deleted", template_id=template_id)
        return deleted

    def run_due(self, now: Optional[datetime] = None) -> int:
        """
        Materialize every due template once.

        Inactive templates and templates whose end date has passed are
        skipped. Each generated transaction is written immediately; the
        advanced templates are written together at the end.

        Returns:
            Number of transactions created
        """
        now = as_utc(now) if now is not None else utcnow()
        templates = self._templates.get_all()
        created = 0

        for template in templates:
            if not template.is_active:
                continue
            if template.end_date is not None and template.end_date < now:
                continue
            if template.next_run_at > now:
                continue

            transaction = Transaction(
                budget_id=template.budget_id or "",
                amount=template.amount,
                description=template.description,
                category=transaction_category(template),
                type=template.type,
                date=now,
                created_at=now,
                updated_at=now,
                tags=[RECURRING_TAG],
                custom_category_id=template.custom_category_id,
            )
            self._transactions.add(transaction)
            created += 1

            template.next_run_at = next_run(template.next_run_at, template.interval)
            template.updated_at = utcnow()

        self._templates.save_all(templates)

        if created:
            logger.info("recurring_transactions_created", count=created)
        return created
