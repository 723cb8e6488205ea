"""
Shared Model Building Blocks

Every persisted entity carries an id and two timestamps. Field names are
snake_case in Python and camelCase on disk (``appName``, ``createdAt``),
so the stored layout stays compatible with the browser app that first
wrote it.
"""

import random
import string
import time
from datetime import datetime, timezone
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_BASE36 = string.digits + string.ascii_lowercase


def _to_millis(value: datetime) -> datetime:
    # Stored timestamps carry milliseconds only
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime, at millisecond precision."""
    return _to_millis(datetime.now(timezone.utc))


def as_utc(value: datetime) -> datetime:
    """
    Normalise to aware UTC at millisecond precision.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        return _to_millis(value.replace(tzinfo=timezone.utc))
    return _to_millis(value.astimezone(timezone.utc))


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generate an entity id: base-36 millisecond timestamp + random suffix.

    Uniqueness is probabilistic, not guaranteed.
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=11))
    return timestamp + suffix


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage(self) -> dict[str, Any]:
        """Dump with aliases, keeping datetimes as datetime objects."""
        return self.model_dump(by_alias=True, mode="python")


class BaseEntity(CamelModel):
    """Identity and timestamps shared by every stored entity."""

    id: str = Field(
        default_factory=generate_id,
        description="Unique entity identifier"
    )
    created_at: UtcDatetime = Field(
        default_factory=utcnow,
        description="When the entity was created (immutable)"
    )
    updated_at: UtcDatetime = Field(
        default_factory=utcnow,
        description="Last update timestamp"
    )


class PatchModel(CamelModel):
    """
    Partial update request.

    DESIGN DECISION: Only fields the caller explicitly set are applied.
    An explicit ``None`` clears an optional field; an absent field is left
    unchanged. Pydantic tracks this in ``model_fields_set``.
    """

    id: str

    def changes(self) -> dict[str, Any]:
        """Return the explicitly-set fields, excluding the id."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name != "id"
        }

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set


ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """One page of a filtered, sorted collection."""

    items: list[ItemT] = Field(default_factory=list)
    total: int = Field(ge=0, description="Matches before pagination")
    page: int = Field(ge=1, description="1-based page number")
    limit: int = Field(ge=0, description="Page size")
    total_pages: int = Field(ge=0)
