"""
Whole-Store Backup

Exports, restores and wipes the top-level collections in one go. Unlike
the password import this REPLACES data: each collection present in the
backup overwrites the stored one.

Every record is validated before anything is written, so a backup with a
bad record is rejected as a whole.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from myhub.errors import ImportFormatError
from myhub.logger import get_logger
from myhub.models import BaseEntity, utcnow
from myhub.repositories import (
    BudgetRepository,
    CustomCategoryRepository,
    EntityRepository,
    GoalRepository,
    PasswordRepository,
    RecurringTemplateRepository,
    RoutineBlockRepository,
    RoutineRepository,
    TransactionRepository,
)
from myhub.storage import StorageAdapter, StorageUsage

logger = get_logger(__name__)


class BackupService:
    """Export, import and clear every top-level collection."""

    def __init__(
        self,
        adapter: StorageAdapter,
        passwords: PasswordRepository,
        routines: RoutineRepository,
        budgets: BudgetRepository,
        transactions: TransactionRepository,
        categories: CustomCategoryRepository,
        templates: RecurringTemplateRepository,
        goals: GoalRepository,
        blocks: RoutineBlockRepository,
        backup_version: str = "1.0.0",
    ):
        self._adapter = adapter
        self._backup_version = backup_version

        # Backup document field -> repository, in export order
        self._exported: dict[str, EntityRepository] = {
            "passwords": passwords,
            "routines": routines,
            "budgets": budgets,
            "transactions": transactions,
            "customCategories": categories,
            "recurringTemplates": templates,
        }
        self._cleared: list[EntityRepository] = [
            *self._exported.values(),
            goals,
            blocks,
        ]

    def export_data(self) -> dict[str, Any]:
        """
        Snapshot the top-level collections.

        Records are in their stored (camelCase) shape with real datetimes.
        """
        data: dict[str, Any] = {
            field: [entity.to_storage() for entity in repository.get_all()]
            for field, repository in self._exported.items()
        }
        data["exportDate"] = utcnow()
        data["version"] = self._backup_version

        logger.info(
            "backup_exported",
            counts={field: len(data[field]) for field in self._exported},
        )
        return data

    def import_data(self, data: dict[str, Any]) -> dict[str, int]:
        """
        Replace each collection that is present in ``data`` as a list.

        Missing or non-list fields leave the stored collection untouched.

        Returns:
            Number of records written per collection field

        Raises:
            ImportFormatError: If any record fails validation; nothing is
                written in that case
        """
        if not isinstance(data, dict):
            raise ImportFormatError("Backup must be a JSON object")

        staged: dict[str, list[BaseEntity]] = {}
        for field, repository in self._exported.items():
            records = data.get(field)
            if not isinstance(records, list):
                continue
            model = repository.model
            try:
                staged[field] = [model.model_validate(record) for record in records]
            except PydanticValidationError as e:
                raise ImportFormatError(f"Invalid record in {field}: {e}") from e

        for field, entities in staged.items():
            self._exported[field].save_all(entities)

        counts = {field: len(entities) for field, entities in staged.items()}
        logger.info("backup_imported", counts=counts)
        return counts

    def clear_all(self) -> None:
        """Remove every top-level collection."""
        for repository in self._cleared:
            repository.clear()
        logger.warning("storage_cleared")

    def storage_info(self) -> StorageUsage:
        return self._adapter.usage()
