"""CLI entry point for todo-keeper.

This module handles command-line argument parsing, logging setup,
one-shot list commands, and launching the interactive app.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.handlers
import sys
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console

from ..exceptions import ConfigError
from ..kv_store import JsonFileKeyValueStore
from ..persistence import PersistenceSync
from ..store import TodoStore
from ..utils import Config, load_config
from .app import TodoApp
from .views.todo_list_panel import render_todo_list_panel

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "context": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_context"):
            log_data["context"].update(record.extra_context)

        return json.dumps(log_data)


def _setup_logging(log_file: Path, debug: bool) -> None:
    """Setup structured JSON logging to file.

    Args:
        log_file: Path to log file
        debug: Enable debug level logging
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create rotating file handler (10MB max, 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    root_logger.addHandler(file_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="todo-keeper",
        description="Personal todo list that persists across restarts",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.json (default: ~/.config/todo-keeper/config.json if present)",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Override the file todos are stored in",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("list", help="Show todos")

    s_add = sub.add_parser("add", help="Append a new todo")
    s_add.add_argument("text", help="Todo text, quoted if it has spaces")

    s_toggle = sub.add_parser("toggle", help="Mark a todo complete/incomplete")
    s_toggle.add_argument("index", type=int, help="Todo number from `list`")

    s_edit = sub.add_parser("edit", help="Replace a todo's text")
    s_edit.add_argument("index", type=int, help="Todo number from `list`")
    s_edit.add_argument("text", help="New text")

    s_delete = sub.add_parser("delete", help="Remove a todo")
    s_delete.add_argument("index", type=int, help="Todo number from `list`")

    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return _build_parser().parse_args(argv)


async def _run_command(args: argparse.Namespace, config: Config, console: Console) -> int:
    """Run one list command through the full load, mutate, flush lifecycle.

    Returns:
        Exit code (0=success, 1=error)
    """
    store = TodoStore()
    sync = PersistenceSync(store, JsonFileKeyValueStore(config.data_file), key=config.storage_key)
    await sync.start()
    try:
        items = store.snapshot()
        if args.cmd == "add":
            if store.add(args.text) is None:
                console.print("[yellow]Nothing to add[/yellow]")
            else:
                console.print(f"[green]Added #{len(store)}[/green]")
            return 0

        if args.cmd in ("toggle", "edit", "delete"):
            if not 1 <= args.index <= len(items):
                console.print(f"[red]Error: No todo #{args.index}[/red]")
                return 1
            item = items[args.index - 1]
            if args.cmd == "toggle":
                store.toggle_completed(item.id)
                console.print(f"[green]Toggled #{args.index}[/green]")
            elif args.cmd == "edit":
                store.set_text(item.id, args.text)
                console.print(f"[green]Edited #{args.index}[/green]")
            else:
                store.remove(item.id)
                console.print(f"[green]Deleted #{args.index}[/green]")
            return 0

        console.print(
            render_todo_list_panel(
                items,
                show_completed=config.show_completed,
                max_text_width=config.max_text_width,
            )
        )
        return 0

    finally:
        await sync.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0=success, 1=error, 130=SIGINT)
    """
    args = _parse_args(argv)
    console = Console()

    try:
        config = load_config(args.config.resolve() if args.config else None)
    except ConfigError as err:
        console.print(f"[red]Error loading config: {err}[/red]")
        return 1

    if args.data_file is not None:
        config = replace(config, data_file=args.data_file.resolve())

    _setup_logging(config.log_file, args.debug)
    logger.info(
        "todo-keeper starting",
        extra={
            "extra_context": {
                "command": args.cmd or "interactive",
                "data_file": str(config.data_file),
            }
        },
    )

    try:
        if args.cmd is None:
            exit_code = asyncio.run(TodoApp(config, console=console).run())
        else:
            exit_code = asyncio.run(_run_command(args, config, console))

    except KeyboardInterrupt:
        logger.info("todo-keeper interrupted by user (KeyboardInterrupt)")
        return 130

    except Exception as err:
        logger.error(
            "todo-keeper crashed with unhandled exception",
            extra={"extra_context": {"error": str(err)}},
            exc_info=True,
        )
        console.print(f"[red]Fatal error: {err}[/red]")
        console.print(f"[dim]Check logs at: {config.log_file}[/dim]")
        return 1

    logger.info("todo-keeper exited", extra={"extra_context": {"exit_code": exit_code}})
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
