"""
Generic Entity Repository

Each entity family is stored as one array under one key. Every operation
is a whole-collection read-modify-write; there are no partial writes and
no batching.
"""

from typing import Generic, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from myhub.logger import get_logger
from myhub.models.base import BaseEntity, utcnow
from myhub.storage.adapter import StorageAdapter

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseEntity)


class EntityRepository(Generic[EntityT]):
    """
    CRUD over one stored collection.

    Records that no longer validate against the model are skipped on
    read (and logged) rather than failing the whole collection.
    """

    def __init__(
        self,
        adapter: StorageAdapter,
        key: str,
        model: type[EntityT],
    ):
        self._adapter = adapter
        self._key = key
        self._model = model

    @property
    def key(self) -> str:
        return self._key

    @property
    def model(self) -> type[EntityT]:
        return self._model

    def _load(self, key: str) -> list[EntityT]:
        raw = self._adapter.get(key)
        if not isinstance(raw, list):
            return []

        entities = []
        for record in raw:
            try:
                entities.append(self._model.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(
                    "record_skipped",
                    key=key,
                    record_id=record.get("id") if isinstance(record, dict) else None,
                    error_count=e.error_count(),
                )
        return entities

    def _store(self, key: str, entities: list[EntityT]) -> None:
        self._adapter.set(key, [entity.to_storage() for entity in entities])

    def get_all(self) -> list[EntityT]:
        return self._load(self._key)

    def save_all(self, entities: list[EntityT]) -> None:
        self._store(self._key, entities)

    def get_by_id(self, entity_id: str) -> Optional[EntityT]:
        for entity in self.get_all():
            if entity.id == entity_id:
                return entity
        return None

    def add(self, entity: EntityT) -> EntityT:
        entities = self.get_all()
        entities.append(entity)
        self.save_all(entities)
        return entity

    def update(self, entity: EntityT) -> bool:
        """
        Replace the stored record with the same id.

        Refreshes ``updated_at``. Returns False (and writes nothing) if
        the id is not stored.
        """
        entities = self.get_all()
        for index, existing in enumerate(entities):
            if existing.id == entity.id:
                entity.updated_at = utcnow()
                entities[index] = entity
                self.save_all(entities)
                return True
        return False

    def delete(self, entity_id: str) -> bool:
        """Remove by id. Idempotent; returns whether anything was removed."""
        entities = self.get_all()
        remaining = [e for e in entities if e.id != entity_id]
        if len(remaining) == len(entities):
            return False
        self.save_all(remaining)
        return True

    def clear(self) -> None:
        self._adapter.remove(self._key)
