"""In-memory todo collection with observer notification.

TodoStore owns the ordered list of items. Every successful mutation emits
exactly one snapshot to each subscribed observer before the call returns.
Invalid input (blank text, unknown id) is a silent no-op and emits nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from .models import IdGenerator, Snapshot, TodoItem

logger = logging.getLogger(__name__)

Observer = Callable[[Snapshot], None]


class TodoStore:
    """Ordered collection of todo items."""

    def __init__(self, id_generator: Callable[[], str] | None = None) -> None:
        """Initialize an empty store.

        Args:
            id_generator: Callable returning a fresh id; defaults to a
                millisecond-clock IdGenerator
        """
        self._items: list[TodoItem] = []
        self._observers: list[Observer] = []
        self._next_id = id_generator if id_generator is not None else IdGenerator()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TodoItem]:
        return iter(self.snapshot())

    def snapshot(self) -> Snapshot:
        """Return the current items as an immutable tuple."""
        return tuple(self._items)

    def get(self, item_id: str) -> TodoItem | None:
        """Return the item with the given id, or None."""
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer and return a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # Mutations

    def add(self, text: str) -> TodoItem | None:
        """Append a new item.

        The item keeps the text exactly as given; trimming is only used to
        reject blank input.

        Returns:
            The created item, or None if text is blank
        """
        if not text.strip():
            logger.debug("Ignoring blank todo text")
            return None

        item = TodoItem(id=self._next_id(), text=text, completed=False)
        self._items.append(item)
        logger.debug(f"Added todo {item.id}")
        self._emit()
        return item

    def toggle_completed(self, item_id: str) -> bool:
        """Invert the completed flag of an item. Returns False if not found."""
        index = self._index_of(item_id)
        if index is None:
            return False

        current = self._items[index]
        self._items[index] = current.with_completed(not current.completed)
        logger.debug(f"Toggled todo {item_id} -> completed={not current.completed}")
        self._emit()
        return True

    def set_text(self, item_id: str, new_text: str) -> bool:
        """Replace an item's text as given. Returns False if not found."""
        # Unlike add(), edits are not trimmed or checked for blank text.
        index = self._index_of(item_id)
        if index is None:
            return False

        self._items[index] = self._items[index].with_text(new_text)
        logger.debug(f"Edited todo {item_id}")
        self._emit()
        return True

    def remove(self, item_id: str) -> bool:
        """Delete an item, keeping the order of the rest. Returns False if not found."""
        index = self._index_of(item_id)
        if index is None:
            return False

        del self._items[index]
        logger.debug(f"Removed todo {item_id}")
        self._emit()
        return True

    def hydrate(self, items: Iterable[TodoItem]) -> None:
        """Replace the whole collection with previously persisted items.

        No trimming or id validation is applied.
        """
        self._items = list(items)
        observe = getattr(self._next_id, "observe", None)
        if observe is not None:
            observe(item.id for item in self._items)
        logger.info(f"Hydrated {len(self._items)} todo(s)")
        self._emit()

    def _index_of(self, item_id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as err:
                logger.error(f"Todo observer {observer!r} failed: {err}", exc_info=True)
