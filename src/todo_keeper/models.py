"""Todo data models and the persisted snapshot codec.

A ``TodoItem`` is immutable: toggling or editing produces a new item that
replaces the old one in the collection. A ``Snapshot`` is a tuple of items,
so consumers cannot mutate what the store hands them.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from .exceptions import LoadFailure

STORAGE_KEY = "@todos"


@dataclass(frozen=True)
class TodoItem:
    """A single entry in the todo list."""

    id: str
    text: str
    completed: bool = False

    def with_completed(self, completed: bool) -> TodoItem:
        return replace(self, completed=completed)

    def with_text(self, text: str) -> TodoItem:
        return replace(self, text=text)

    def to_dict(self) -> dict:
        """Serialize to the persisted ``{id, text, completed}`` shape."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TodoItem:
        """Deserialize from a persisted entry.

        Raises:
            KeyError: If a required field is missing
            TypeError: If the entry or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(f"todo entry must be an object, got {type(data).__name__}")

        item_id = data["id"]
        text = data["text"]
        completed = data["completed"]

        if not isinstance(item_id, str):
            raise TypeError(f"todo id must be a string, got {type(item_id).__name__}")
        if not isinstance(text, str):
            raise TypeError(f"todo text must be a string, got {type(text).__name__}")
        if not isinstance(completed, bool):
            raise TypeError(
                f"todo completed flag must be a boolean, got {type(completed).__name__}"
            )

        return cls(id=item_id, text=text, completed=completed)

    def __repr__(self) -> str:
        mark = "x" if self.completed else " "
        return f"TodoItem(id={self.id!r}, [{mark}] {self.text!r})"


Snapshot = tuple[TodoItem, ...]


class IdGenerator:
    """Issues ids derived from the current time in milliseconds.

    Ids are strictly increasing within a process: when the clock has not
    advanced past the last issued value, the next id is ``last + 1``.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        now_ms = int(self._clock() * 1000)
        if now_ms <= self._last:
            now_ms = self._last + 1
        self._last = now_ms
        return str(now_ms)

    def observe(self, ids: Iterable[str]) -> None:
        """Advance past any numeric ids already in use.

        Ids are opaque strings; anything that does not parse as a plain
        decimal integer is ignored.
        """
        for item_id in ids:
            if not item_id.isdecimal():
                continue
            try:
                value = int(item_id)
            except ValueError:
                # Longer than the interpreter's int conversion limit.
                continue
            self._last = max(self._last, value)


def encode_snapshot(items: Iterable[TodoItem]) -> str:
    """Serialize items, in order, to the persisted JSON array."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def decode_snapshot(raw: str) -> list[TodoItem]:
    """Parse a persisted JSON array back into items.

    The payload is accepted or rejected as a whole.

    Raises:
        LoadFailure: If the payload is not valid JSON, not an array, or
            contains a malformed entry
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as err:
        raise LoadFailure(f"Stored todos are not valid JSON: {err}") from err

    if not isinstance(data, list):
        raise LoadFailure(f"Stored todos must be a JSON array, got {type(data).__name__}")

    items: list[TodoItem] = []
    for index, entry in enumerate(data):
        try:
            items.append(TodoItem.from_dict(entry))
        except (KeyError, TypeError, ValueError) as err:
            raise LoadFailure(f"Invalid todo entry at position {index}: {err}") from err
    return items
