"""
Abstract Key-Value Store Interface

DESIGN DECISION: The organizer persists everything as string values under
string keys, the same contract a browser's local storage offers. Defining
it as an abstract interface allows us to:
1. Use an in-memory store for tests
2. Use a JSON file on disk for the real application
3. Keep repositories unaware of where bytes end up

The interface is intentionally tiny - get, set, remove, list keys.
Serialization is NOT the store's concern; see the codec and adapter.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from myhub.errors import MyHubError


class StorageUsage(BaseModel):
    """
    Bytes used by stored values against the configured quota.

    Without a quota the store is unlimited: ``available`` and ``total``
    are None rather than 0, so an unlimited store never reads as "full".
    """

    used: int = Field(ge=0)
    available: Optional[int] = Field(default=None, ge=0)
    total: Optional[int] = Field(default=None, ge=0)

    @property
    def unlimited(self) -> bool:
        return self.total is None

    @classmethod
    def for_quota(cls, used: int, quota_bytes: int) -> "StorageUsage":
        """Usage against a quota, where 0 means no quota."""
        if not quota_bytes:
            return cls(used=used)
        return cls(used=used, available=max(quota_bytes - used, 0), total=quota_bytes)


class KeyValueStore(ABC):
    """
    Abstract persistent string store.

    Any backend (in-memory, file, ...) must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key does not exist
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageQuotaExceededError: If the write would exceed the quota
            StorageError: If the write fails for any other reason
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete a key. Removing a missing key is not an error."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every stored key."""
        pass

    @abstractmethod
    def usage(self) -> StorageUsage:
        """Report how much of the quota is in use."""
        pass


def measure(items: dict[str, str]) -> int:
    """Size of a key/value mapping, counting characters like local storage."""
    return sum(len(key) + len(value) for key, value in items.items())


class StorageError(MyHubError):
    """Base exception for storage operations."""
    pass


class StorageQuotaExceededError(StorageError):
    """A write would push the store past its quota."""
    pass
