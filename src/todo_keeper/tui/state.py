"""Transient presentation state for the interactive todo app."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import Snapshot, TodoItem


@dataclass
class AppState:
    """What the interactive app is currently showing.

    ``items`` is the latest snapshot received from the store. ``editing_id``
    holds the id captured when an edit session starts; only one session can
    be open at a time.
    """

    items: Snapshot = ()
    editing_id: str | None = None
    show_completed: bool = True
    help_visible: bool = False
    current_error: str | None = None
    status_message: str | None = None
    should_quit: bool = False

    def on_snapshot(self, snapshot: Snapshot) -> None:
        """Store observer hook: keep the rendered list current."""
        self.items = snapshot

    @property
    def remaining(self) -> int:
        return sum(1 for item in self.items if not item.completed)

    @property
    def editing(self) -> TodoItem | None:
        if self.editing_id is None:
            return None
        for item in self.items:
            if item.id == self.editing_id:
                return item
        return None

    def selected(self, position: int) -> TodoItem | None:
        """Return the item at a 1-based position, or None if out of range."""
        if 1 <= position <= len(self.items):
            return self.items[position - 1]
        return None
