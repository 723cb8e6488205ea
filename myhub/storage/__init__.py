"""
Storage Package

Provides the abstract key-value store interface, its in-memory and JSON-file
implementations, the date-tagged codec and the adapter repositories use.
"""

from myhub.storage.adapter import StorageAdapter
from myhub.storage.codec import CodecError, DateTaggedCodec
from myhub.storage.file_store import JsonFileKeyValueStore
from myhub.storage.interface import (
    KeyValueStore,
    StorageError,
    StorageQuotaExceededError,
    StorageUsage,
)
from myhub.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    "StorageUsage",
    # Exceptions
    "CodecError",
    "StorageError",
    "StorageQuotaExceededError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Serialization
    "DateTaggedCodec",
    "StorageAdapter",
]
