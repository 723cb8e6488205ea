"""
Key-Value Store Adapter

Sits between the repositories and a KeyValueStore backend:
- prefixes every logical key (``passwords`` -> ``myhub_passwords``)
- runs values through the date-tagged codec
- turns read failures into "absent" and write failures into StorageError

DESIGN DECISION: Reads degrade, writes fail loudly.
A corrupt value must not crash every screen that lists data, but a lost
write must never look like a success. Both cases are logged.

There is no cache - every call round-trips through serialization.
"""

from typing import Any, Optional

from myhub.logger import get_logger
from myhub.storage.codec import CodecError, DateTaggedCodec
from myhub.storage.interface import KeyValueStore, StorageError, StorageUsage

logger = get_logger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save data to local storage"


class StorageAdapter:
    """Typed get/set/remove over a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = "myhub_",
        codec: Optional[DateTaggedCodec] = None,
    ):
        self._store = store
        self._prefix = key_prefix
        self._codec = codec or DateTaggedCodec()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        """
        Read and decode the value under a key.

        Returns None if the key is absent or the value cannot be decoded.
        """
        full_key = self.full_key(key)
        try:
            text = self._store.get_item(full_key)
            if text is None:
                return None
            return self._codec.loads(text)
        except (CodecError, StorageError) as e:
            logger.error("storage_read_failed", key=full_key, error=str(e))
            return None

    def set(self, key: str, value: Any) -> None:
        """
        Encode and write a value.

        Raises:
            StorageError: If the backend rejects the write
        """
        full_key = self.full_key(key)
        try:
            text = self._codec.dumps(value)
            self._store.set_item(full_key, text)
        except (StorageError, TypeError, ValueError) as e:
            logger.error("storage_write_failed", key=full_key, error=str(e))
            raise StorageError(SAVE_FAILED_MESSAGE) from e

    def remove(self, key: str) -> None:
        """Delete a key unconditionally."""
        full_key = self.full_key(key)
        try:
            self._store.remove_item(full_key)
        except StorageError as e:
            logger.error("storage_remove_failed", key=full_key, error=str(e))

    def keys(self) -> list[str]:
        """Logical keys (prefix stripped) owned by this adapter."""
        return [
            key[len(self._prefix):]
            for key in self._store.keys()
            if key.startswith(self._prefix)
        ]

    def usage(self) -> StorageUsage:
        return self._store.usage()
