"""In-memory key-value store, used by tests and throwaway sessions."""

from typing import Optional

from myhub.storage.interface import (
    KeyValueStore,
    StorageQuotaExceededError,
    StorageUsage,
    measure,
)


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dict-backed store.

    A quota of 0 means unlimited; any other value makes writes that would
    exceed it fail, mimicking a full browser storage area.
    """

    def __init__(self, quota_bytes: int = 0):
        self._items: dict[str, str] = {}
        self._quota = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota:
            projected = dict(self._items)
            projected[key] = value
            if measure(projected) > self._quota:
                raise StorageQuotaExceededError(
                    f"Writing '{key}' would exceed the {self._quota} byte quota"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    def usage(self) -> StorageUsage:
        return StorageUsage.for_quota(measure(self._items), self._quota)
