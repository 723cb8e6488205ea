"""
Custom Category Service

DESIGN DECISION: Deleting a category cascades. Every password, transaction
and recurring template that points at the category has its
``custom_category_id`` cleared, so no record is left referencing an id
that no longer exists.

Names are unique case-insensitively.
"""

from typing import List, Optional

from myhub.errors import ConflictError
from myhub.logger import get_logger
from myhub.models import CustomCategory, UpdateCustomCategoryRequest, utcnow
from myhub.models.category import CategoryType
from myhub.repositories import (
    CustomCategoryRepository,
    PasswordRepository,
    RecurringTemplateRepository,
    TransactionRepository,
)
from myhub.repositories.base import EntityRepository
from myhub.services.base import apply_patch
from myhub.validation import CategoryValidator

logger = get_logger(__name__)

PREDEFINED_COLORS = [
    "#3B82F6",  # Blue
    "#10B981",  # Emerald
    "#F59E0B",  # Amber
    "#EF4444",  # Red
    "#8B5CF6",  # Violet
    "#EC4899",  # Pink
    "#06B6D4",  # Cyan
    "#84CC16",  # Lime
    "#F97316",  # Orange
    "#6366F1",  # Indigo
    "#14B8A6",  # Teal
    "#DC2626",  # Red-600
]

PREDEFINED_ICONS = [
    "🏠", "💼", "🎮", "🎵", "📱", "💻", "📚", "🏥", "✈️", "🛒",
    "💰", "🔒", "⭐", "🎯", "📊", "🔧", "🎨", "🏃", "🍔", "☕",
    "🌐", "📧", "📞", "📺", "🎬", "📷", "🎪", "🏆", "🎁", "💡",
]

DUPLICATE_NAME_MESSAGE = "A category with this name already exists"


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


class CustomCategoryService:
    """User-defined categories shared by the vault and the budget tracker."""

    def __init__(
        self,
        categories: CustomCategoryRepository,
        passwords: PasswordRepository,
        transactions: TransactionRepository,
        templates: RecurringTemplateRepository,
    ):
        self._categories = categories
        self._referencing: list[EntityRepository] = [passwords, transactions, templates]
        self._validator = CategoryValidator()

    def list(self) -> List[CustomCategory]:
        return self._categories.get_all()

    def get_by_id(self, category_id: str) -> Optional[CustomCategory]:
        return self._categories.get_by_id(category_id)

    def create(
        self,
        name: Optional[str],
        color: Optional[str],
        icon: Optional[str] = None,
        description: Optional[str] = None,
        category_type: Optional[CategoryType] = None,
    ) -> CustomCategory:
        """
        Create a category.

        Raises:
            ValidationError: If name or color is blank
            ConflictError: If the name is taken (ignoring case)
        """
        self._validator.validate(name, color)
        self._ensure_unique(name)

        category = CustomCategory(
            name=name.strip(),
            color=color.strip(),
            icon=_strip(icon),
            description=_strip(description),
            category_type=category_type,
        )
        self._categories.add(category)

        logger.info("category_created", category_id=category.id, name=category.name)
        return category

    def update(
        self,
        category_id: str,
        patch: UpdateCustomCategoryRequest,
    ) -> Optional[CustomCategory]:
        """
        Apply a partial update. Returns None if the id is unknown.

        Raises:
            ValidationError: If the patch blanks the name or color
            ConflictError: If a rename collides with another category
        """
        existing = self._categories.get_by_id(category_id)
        if existing is None:
            return None

        if patch.is_set("name") or patch.is_set("color"):
            self._validator.validate(
                patch.name if patch.is_set("name") else existing.name,
                patch.color if patch.is_set("color") else existing.color,
            )
        if patch.is_set("name") and patch.name.strip().lower() != existing.name.lower():
            self._ensure_unique(patch.name, exclude_id=category_id)

        updated = apply_patch(existing, patch)
        updated.name = updated.name.strip()
        updated.color = updated.color.strip()
        self._categories.update(updated)

        logger.info("category_updated", category_id=category_id)
        return updated

    def delete(self, category_id: str) -> bool:
        """
        Delete a category and clear every reference to it.

        Returns False if the id is unknown.
        """
        if not self._categories.delete(category_id):
            return False

        cleared = 0
        for repository in self._referencing:
            cleared += self._clear_references(repository, category_id)

        logger.info("category_deleted", category_id=category_id, references_cleared=cleared)
        return True

    def predefined_colors(self) -> List[str]:
        return list(PREDEFINED_COLORS)

    def predefined_icons(self) -> List[str]:
        return list(PREDEFINED_ICONS)

    def _ensure_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        wanted = name.strip().lower()
        for category in self._categories.get_all():
            if category.id != exclude_id and category.name.lower() == wanted:
                raise ConflictError("name", DUPLICATE_NAME_MESSAGE)

    @staticmethod
    def _clear_references(repository: EntityRepository, category_id: str) -> int:
        records = repository.get_all()
        cleared = 0
        for record in records:
            if record.custom_category_id == category_id:
                record.custom_category_id = None
                record.updated_at = utcnow()
                cleared += 1
        if cleared:
            repository.save_all(records)
        return cleared
