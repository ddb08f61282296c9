"""Unit tests for AppState."""

from __future__ import annotations

from todo_keeper.models import TodoItem
from todo_keeper.tui.state import AppState

ITEMS = (
    TodoItem(id="1", text="Buy milk", completed=True),
    TodoItem(id="2", text="Walk dog"),
    TodoItem(id="3", text="Call mom"),
)


class TestAppState:
    """Tests for AppState derived properties."""

    def test_defaults(self):
        """Fresh state is empty, not editing, not quitting."""
        state = AppState()

        assert state.items == ()
        assert state.editing_id is None
        assert state.editing is None
        assert state.show_completed is True
        assert state.help_visible is False
        assert state.should_quit is False

    def test_on_snapshot_replaces_items(self):
        """The store observer hook swaps in the new snapshot."""
        state = AppState()

        state.on_snapshot(ITEMS)

        assert state.items is ITEMS

    def test_remaining(self):
        assert AppState(items=ITEMS).remaining == 2

    def test_selected(self):
        """Positions are 1-based; out of range yields None."""
        state = AppState(items=ITEMS)

        assert state.selected(1).id == "1"
        assert state.selected(3).id == "3"
        assert state.selected(0) is None
        assert state.selected(4) is None

    def test_editing_resolves_captured_id(self):
        """The editing item is looked up by id in the current snapshot."""
        state = AppState(items=ITEMS, editing_id="2")

        assert state.editing.text == "Walk dog"

        state.on_snapshot(ITEMS[:1])
        assert state.editing is None
