"""Main interactive todo application loop.

This module wires the single TodoStore instance to PersistenceSync and the
presentation state, then runs a read-dispatch-render loop on one asyncio
event loop. Saves run in the background while the user keeps typing.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from rich.console import Console
from rich.text import Text

from ..kv_store import JsonFileKeyValueStore, KeyValueStore
from ..persistence import PersistenceSync
from ..store import TodoStore
from ..utils import Config
from .commands import CommandHandler
from .state import AppState
from .tui_utils import get_terminal_size
from .views.footer_bar import render_footer_bar
from .views.help_panel import render_help_panel
from .views.todo_list_panel import render_todo_list_panel

logger = logging.getLogger(__name__)


class TodoApp:
    """Interactive todo application orchestrating store, sync and views."""

    def __init__(
        self,
        config: Config,
        kv_store: KeyValueStore | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize todo application.

        Args:
            config: Runtime configuration
            kv_store: Key-value store to persist to; defaults to the JSON
                file named by config.data_file
            console: Rich console used for rendering and input
        """
        self.config = config
        self.console = console or Console()

        self.store = TodoStore()
        self.app_state = AppState(show_completed=config.show_completed)
        self.store.subscribe(self.app_state.on_snapshot)

        if kv_store is None:
            kv_store = JsonFileKeyValueStore(config.data_file)
        self.kv_store = kv_store
        self.sync = PersistenceSync(self.store, self.kv_store, key=config.storage_key)
        self.command_handler = CommandHandler(self.app_state, self.store)

    def render(self) -> None:
        """Render the list, optional help and the footer."""
        terminal_width, _ = get_terminal_size()
        self.console.clear()
        self.console.print(
            render_todo_list_panel(
                self.app_state.items,
                show_completed=self.app_state.show_completed,
                editing_id=self.app_state.editing_id,
                max_text_width=self.config.max_text_width,
            )
        )
        if self.app_state.help_visible:
            self.console.print(render_help_panel())
        editing = self.app_state.editing
        if editing is not None:
            self.console.print(Text(f"Current text: {editing.text}", style="magenta"))
        elif self.app_state.status_message:
            self.console.print(Text(self.app_state.status_message, style="dim"))
        self.console.print(
            render_footer_bar(
                total=len(self.app_state.items),
                remaining=self.app_state.remaining,
                error_message=self.app_state.current_error,
                editing=self.app_state.editing_id is not None,
                terminal_width=terminal_width,
            )
        )

    def apply_message(self, message: str | None) -> None:
        """Route a command handler message to the state."""
        if message is None:
            return
        if message == "quit":
            self.app_state.should_quit = True
        elif message.startswith("Error:"):
            self.app_state.current_error = message
            self.app_state.status_message = None
        else:
            self.app_state.current_error = None
            self.app_state.status_message = message

    async def _read_line(self) -> str:
        """Read one line without tying up the event loop's executor.

        The blocking read runs on a daemon thread so a cancelled read
        (Ctrl+C under asyncio.run) does not hold up interpreter shutdown.
        """
        prompt = "edit> " if self.app_state.editing_id is not None else "> "
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def deliver(line: str | None, error: Exception | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(line)

        def read() -> None:
            try:
                line = self.console.input(prompt)
            except Exception as err:
                result = (None, err)
            else:
                result = (line, None)
            try:
                loop.call_soon_threadsafe(deliver, *result)
            except RuntimeError:
                logger.debug("Input arrived after the event loop closed; dropped")

        threading.Thread(target=read, daemon=True, name="TodoInput").start()
        return await future

    async def run(self) -> int:
        """Run the interactive loop.

        Ctrl+C under asyncio.run cancels this coroutine; the final snapshot
        is still flushed before the cancellation propagates.

        Returns:
            Exit code (0 for success)
        """
        try:
            # The list renders empty while the stored todos load.
            self.render()
            loaded = await self.sync.start()
            logger.info(f"Todo app started ({len(self.store)} todo(s), loaded={loaded})")

            while not self.app_state.should_quit:
                self.render()
                try:
                    line = await self._read_line()
                except EOFError:
                    break
                _, message = self.command_handler.handle(line)
                self.apply_message(message)

        except asyncio.CancelledError:
            logger.info("Todo app interrupted by user")
            raise

        finally:
            await self.sync.close()
            logger.info("Todo app closed, final snapshot flushed")

        return 0
