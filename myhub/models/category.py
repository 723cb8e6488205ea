"""
Custom Category Models

Custom categories are user-defined labels shared by the password vault and
the budget tracker. Names are unique case-insensitively; that rule is
enforced by the category service, not by the model.
"""

from typing import Literal, Optional

from myhub.models.base import BaseEntity, PatchModel

CategoryType = Literal["income", "expense"]


class CustomCategory(BaseEntity):
    """A user-defined category."""

    name: str
    color: str
    icon: Optional[str] = None
    description: Optional[str] = None
    category_type: Optional[CategoryType] = None
    is_active: bool = True


class UpdateCustomCategoryRequest(PatchModel):
    """Partial update of a custom category."""

    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    category_type: Optional[CategoryType] = None
    is_active: Optional[bool] = None
