"""
JSON File Key-Value Store

DESIGN DECISION: The whole store is one JSON object on disk mapping keys
to serialized values. This is the local-first equivalent of a browser's
local storage:
1. No database setup required
2. The user can inspect or back up a single file
3. Easy to migrate later

TRADEOFFS:
- Every write rewrites the whole file (fine for personal data volumes)
- No locking: two processes writing at once means last writer wins

Writes go through a temporary file and an atomic replace, so a crash
mid-write never leaves a truncated store behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from myhub.logger import get_logger
from myhub.storage.interface import (
    KeyValueStore,
    StorageError,
    StorageQuotaExceededError,
    StorageUsage,
    measure,
)

logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """File-backed store holding every key in one JSON document."""

    def __init__(self, path: Path, quota_bytes: int = 0):
        self._path = Path(path)
        self._quota = quota_bytes

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the document; a missing or corrupt file reads as empty."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(
                "storage_file_unreadable",
                path=str(self._path),
                error=str(e),
            )
            return {}
        if not isinstance(data, dict):
            logger.error("storage_file_malformed", path=str(self._path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _dump(self, items: dict[str, str]) -> None:
        """Write the document atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _write(self, items: dict[str, str]) -> None:
        try:
            self._dump(items)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        if self._quota and measure(items) > self._quota:
            raise StorageQuotaExceededError(
                f"Writing '{key}' would exceed the {self._quota} byte quota"
            )
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._write(items)

    def keys(self) -> list[str]:
        return list(self._load())

    def usage(self) -> StorageUsage:
        return StorageUsage.for_quota(measure(self._load()), self._quota)
