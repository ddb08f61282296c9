"""Asynchronous key-value stores holding persisted todo snapshots.

PersistenceSync only depends on the ``KeyValueStore`` protocol. Two
implementations are provided: an in-memory dict for tests and embedding,
and a single JSON file on disk for the CLI.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from .exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Async string store addressed by key."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store. Records every write in ``writes``."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))


class JsonFileKeyValueStore:
    """Store backed by one JSON object file mapping keys to string values.

    Every ``set`` rewrites the whole file atomically (temp file + rename).
    File access runs in a worker thread; an asyncio lock keeps reads and
    writes in issue order.
    """

    def __init__(self, path: Path) -> None:
        """Initialize file store.

        Args:
            path: JSON file to read and write (created on first write)
        """
        self.path = path
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> str | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self.path} is not a string")
        return value

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write_key, key, value)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as err:
            raise StorageError(f"Failed to read {self.path}: {err}") from err
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")
        return data

    def _write_key(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError as err:
            # A corrupt file is replaced rather than blocking every future save.
            logger.warning(f"Discarding unreadable store file: {err}")
            data = {}
        data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as err:
            raise StorageError(f"Failed to prepare write to {self.path}: {err}") from err

        temp_path = Path(temp_path_str)
        try:
            with open(temp_fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except OSError as err:
            temp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self.path}: {err}") from err
