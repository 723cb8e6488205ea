"""Helpers shared by the domain services."""

from typing import Any, TypeVar, get_args

from myhub.models import BaseEntity, PatchModel

EntityT = TypeVar("EntityT", bound=BaseEntity)


def _is_nullable(entity: BaseEntity, name: str) -> bool:
    field = type(entity).model_fields[name]
    return type(None) in get_args(field.annotation)


def patch_changes(entity: BaseEntity, patch: PatchModel) -> dict[str, Any]:
    """
    Fields the patch will change on this entity.

    An explicit None clears a nullable field. On a non-nullable field it
    is ignored, since there is nothing to clear it to.
    """
    return {
        name: value
        for name, value in patch.changes().items()
        if name in type(entity).model_fields
        and (value is not None or _is_nullable(entity, name))
    }


def apply_patch(entity: EntityT, patch: PatchModel) -> EntityT:
    """Return a copy of the entity with the patch applied."""
    return entity.model_copy(update=patch_changes(entity, patch))
