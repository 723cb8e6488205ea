"""
Shared fixtures.

Every test gets its own in-memory store, so tests never touch the disk
(except the file-store tests, which use tmp_path) and never share state.
"""

import asyncio

import pytest

from myhub.config import AppSettings, LoggingSettings, Settings, StorageSettings
from myhub.container import build_services
from myhub.storage import InMemoryKeyValueStore, StorageAdapter


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage=StorageSettings(backend="memory", quota_bytes=0),
        logging=LoggingSettings(level="WARNING", json_output=False),
        app=AppSettings(),
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def adapter(store) -> StorageAdapter:
    return StorageAdapter(store)


@pytest.fixture
def services(settings, store):
    return build_services(settings, store=store)


@pytest.fixture
def run():
    """Drive an async service call to completion."""
    return asyncio.run
