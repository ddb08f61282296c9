"""Todo list panel renderer.

This module provides the render_todo_list_panel function that displays
the current snapshot as a numbered table.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...models import TodoItem
from ..tui_utils import get_completion_badge, truncate_text


def render_todo_list_panel(
    items: Sequence[TodoItem],
    show_completed: bool = True,
    editing_id: str | None = None,
    max_text_width: int = 60,
) -> Panel:
    """Build Rich Panel displaying the todo list.

    Args:
        items: Current snapshot, in list order
        show_completed: Whether completed items are listed
        editing_id: Id of the item being edited, highlighted if present
        max_text_width: Truncation width for item text

    Returns:
        Rich Panel component with the todo table
    """
    table = Table(
        show_header=True,
        header_style="bold cyan",
        border_style="blue",
        padding=(0, 1),
        expand=True,
    )

    table.add_column("#", style="yellow", no_wrap=True, width=4, justify="right")
    table.add_column("Done", no_wrap=True, width=4)
    table.add_column("Todo", style="white")

    shown = 0
    for position, item in enumerate(items, start=1):
        if item.completed and not show_completed:
            continue
        shown += 1

        icon, color = get_completion_badge(item.completed)
        text = Text(truncate_text(item.text, max_text_width))
        if item.completed:
            text.stylize("strike dim")
        if item.id == editing_id:
            text.stylize("reverse")

        table.add_row(str(position), f"[{color}]{icon}[/{color}]", text)

    if not items:
        table.add_row("", "", "[dim italic]No todos yet. Add one with: a <text>[/dim italic]")
    elif shown == 0:
        table.add_row("", "", "[dim italic]All todos are completed (h: show)[/dim italic]")

    hidden = len(items) - shown
    if hidden:
        count = f"[dim]({len(items)} total, {hidden} hidden)[/dim]"
    else:
        count = f"[dim]({len(items)})[/dim]"
    title = f"[bold white]Todo App[/bold white] {count}"

    return Panel(
        table,
        title=title,
        border_style="blue",
        padding=(1, 2),
    )
