"""Synchronization between TodoStore and an external key-value store.

This module handles hydrating the store once at startup and writing the
snapshot back after every mutation. Load and save failures are logged and
never propagate: a failed load starts a fresh list, a failed save leaves
memory untouched until the next mutation writes again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .exceptions import LoadFailure, SaveFailure
from .kv_store import KeyValueStore
from .models import STORAGE_KEY, Snapshot, decode_snapshot, encode_snapshot
from .store import TodoStore

logger = logging.getLogger(__name__)


class PersistenceSync:
    """Keeps the persisted snapshot in step with a TodoStore."""

    def __init__(self, store: TodoStore, kv_store: KeyValueStore, key: str = STORAGE_KEY):
        """Initialize persistence sync.

        Args:
            store: The todo store to hydrate and observe
            kv_store: Async key-value store holding the serialized snapshot
            key: Key under which the snapshot is stored
        """
        self.store = store
        self.kv_store = kv_store
        self.key = key
        self._unsubscribe: Callable[[], None] | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self._sequence = 0

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    @property
    def pending(self) -> int:
        """Number of writes still in flight."""
        return len(self._pending)

    async def start(self) -> bool:
        """Load persisted state, then begin saving on every mutation.

        Saves are not issued until the load has finished, so the empty
        startup collection never overwrites stored todos.

        Returns:
            True if a stored snapshot was loaded
        """
        loaded = await self.load()
        self.attach()
        return loaded

    async def load(self) -> bool:
        """Read the stored snapshot and hydrate the store.

        Returns:
            True if the store was hydrated, False if nothing usable was stored
        """
        try:
            raw = await self.kv_store.get(self.key)
        except asyncio.CancelledError:
            raise
        except Exception as err:
            logger.warning(
                f"Failed to read stored todos, starting empty: {err}",
                extra={"extra_context": {"key": self.key, "error": str(err)}},
            )
            return False

        if raw is None:
            logger.info(
                f"No stored todos under {self.key!r}",
                extra={"extra_context": {"key": self.key}},
            )
            return False

        try:
            items = decode_snapshot(raw)
        except LoadFailure as err:
            logger.warning(
                f"Corrupted stored todos, starting empty: {err}",
                extra={"extra_context": {"key": self.key, "error": str(err)}},
            )
            return False

        self.store.hydrate(items)
        return True

    def attach(self) -> None:
        """Subscribe to store mutations."""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.on_commit)

    def detach(self) -> None:
        """Stop saving on store mutations."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_commit(self, snapshot: Snapshot) -> None:
        """Store observer hook: schedule a save of the committed snapshot."""
        self.save(snapshot)

    def save(self, snapshot: Snapshot) -> asyncio.Task[None]:
        """Schedule a write of the given snapshot.

        The snapshot is serialized immediately, so each write carries the
        state at call time regardless of when it completes.

        Returns:
            The task performing the write
        """
        self._sequence += 1
        payload = encode_snapshot(snapshot)
        task = asyncio.get_running_loop().create_task(self._write(self._sequence, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug(
            f"Save #{self._sequence} issued ({len(snapshot)} todo(s))",
            extra={"extra_context": {"sequence": self._sequence, "todos": len(snapshot)}},
        )
        return task

    async def flush(self) -> None:
        """Wait for every in-flight write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        """Detach, write the final snapshot and wait for all writes."""
        self.detach()
        self.save(self.store.snapshot())
        await self.flush()

    async def _write(self, sequence: int, payload: str) -> None:
        try:
            await self._commit(sequence, payload)
        except SaveFailure as err:
            logger.error(
                f"{err}; in-memory todos are unchanged",
                extra={"extra_context": {"sequence": sequence, "key": self.key}},
                exc_info=True,
            )
            return
        logger.debug(
            f"Save #{sequence} committed",
            extra={"extra_context": {"sequence": sequence, "key": self.key}},
        )

    async def _commit(self, sequence: int, payload: str) -> None:
        try:
            await self.kv_store.set(self.key, payload)
        except asyncio.CancelledError:
            raise
        except Exception as err:
            raise SaveFailure(f"Save #{sequence} to {self.key!r} failed: {err}") from err
