"""Command input handling for the interactive todo app.

This module maps typed command lines to TodoStore operations and view
toggles. Positions typed by the user are 1-based indexes into the full list;
they are resolved to item ids before calling the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..store import TodoStore
    from .state import AppState

logger = logging.getLogger(__name__)

CANCEL_EDIT = ":cancel"


class CommandHandler:
    """Handles command lines and dispatches actions with validation."""

    def __init__(self, app_state: AppState, store: TodoStore) -> None:
        """Initialize command handler.

        Args:
            app_state: Presentation state (snapshot, edit session, toggles)
            store: Todo store receiving the mutations
        """
        self.app_state = app_state
        self.store = store

    def handle(self, line: str) -> tuple[bool, str | None]:
        """Process one input line and execute the corresponding action.

        Args:
            line: Raw line typed by the user

        Returns:
            Tuple of (handled, message):
                - handled: True if the line was recognized and handled
                - message: Optional feedback for the user; "quit" asks the
                  app to exit, messages starting with "Error:" are errors
        """
        # While editing, the whole line is the replacement text.
        if self.app_state.editing_id is not None:
            return self._handle_edit_input(line)

        command, _, argument = line.strip().partition(" ")
        argument = argument.strip()
        logger.debug(f"Dispatching command {command!r}")

        if command == "":
            return False, None
        if command in ("a", "add"):
            return self._handle_add(argument)
        if command in ("t", "toggle"):
            return self._handle_toggle(argument)
        if command in ("e", "edit"):
            return self._handle_start_edit(argument)
        if command in ("d", "delete"):
            return self._handle_delete(argument)
        if command == CANCEL_EDIT:
            return True, "Not editing"

        if command in ("h", "hide"):
            return self._handle_toggle_completed_visibility()
        if command == "?":
            return self._handle_help()
        if command in ("q", "quit"):
            return self._handle_quit()

        return True, f"Unknown command {command!r} (type ? for help)"

    # Todo handlers

    def _handle_add(self, text: str) -> tuple[bool, str | None]:
        item = self.store.add(text)
        if item is None:
            return True, "Nothing to add"
        return True, f"Added #{len(self.store)}"

    def _handle_toggle(self, argument: str) -> tuple[bool, str | None]:
        position, error = self._resolve_position(argument)
        if error:
            return True, error

        item = self.app_state.selected(position)
        self.store.toggle_completed(item.id)
        state = "incomplete" if item.completed else "complete"
        return True, f"Marked #{position} {state}"

    def _handle_start_edit(self, argument: str) -> tuple[bool, str | None]:
        position, error = self._resolve_position(argument)
        if error:
            return True, error

        item = self.app_state.selected(position)
        self.app_state.editing_id = item.id
        logger.debug(f"Edit session opened for todo {item.id}")
        return True, f"Editing #{position}: {item.text}"

    def _handle_edit_input(self, line: str) -> tuple[bool, str | None]:
        item_id = self.app_state.editing_id
        self.app_state.editing_id = None

        if line.strip() == CANCEL_EDIT:
            return True, "Edit cancelled"

        if not self.store.set_text(item_id, line):
            return True, "Error: Todo was deleted before the edit was saved"
        return True, "Todo updated"

    def _handle_delete(self, argument: str) -> tuple[bool, str | None]:
        position, error = self._resolve_position(argument)
        if error:
            return True, error

        item = self.app_state.selected(position)
        self.store.remove(item.id)
        return True, f"Deleted #{position}"

    # View handlers

    def _handle_toggle_completed_visibility(self) -> tuple[bool, str | None]:
        self.app_state.show_completed = not self.app_state.show_completed
        if self.app_state.show_completed:
            return True, "Showing completed todos"
        return True, "Hiding completed todos"

    def _handle_help(self) -> tuple[bool, str | None]:
        self.app_state.help_visible = not self.app_state.help_visible
        status = "visible" if self.app_state.help_visible else "hidden"
        return True, f"Help panel {status}"

    def _handle_quit(self) -> tuple[bool, str | None]:
        return True, "quit"

    def _resolve_position(self, argument: str) -> tuple[int, str | None]:
        """Parse a 1-based position and check it against the current list."""
        if not argument:
            return 0, "Error: Missing todo number"
        try:
            position = int(argument)
        except ValueError:
            return 0, f"Error: {argument!r} is not a todo number"
        if self.app_state.selected(position) is None:
            return 0, f"Error: No todo #{position}"
        return position, None
