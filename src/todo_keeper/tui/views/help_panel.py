"""Help panel renderer for the command reference.

This module provides the render_help_panel function that displays
a table of all available commands organized by category.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table


def render_help_panel() -> Panel:
    """Build Rich Panel displaying command reference table.

    Returns:
        Rich Panel component with categorized commands
    """
    table = Table(
        show_header=True,
        header_style="bold magenta",
        border_style="blue",
        padding=(0, 1),
    )
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Action", style="yellow")
    table.add_column("Description", style="white")

    table.add_row("", "", "")
    table.add_row("", "[bold green]Todos[/bold green]", "", style="bold")
    table.add_row("a <text>", "Add", "Append a new todo (blank text is ignored)")
    table.add_row("t <n>", "Toggle", "Mark todo n complete/incomplete")
    table.add_row("e <n>", "Edit", "Edit todo n; the next line is its new text")
    table.add_row(":cancel", "Cancel edit", "Leave edit mode without changes")
    table.add_row("d <n>", "Delete", "Remove todo n")

    table.add_row("", "", "")
    table.add_row("", "[bold yellow]View[/bold yellow]", "", style="bold")
    table.add_row("h", "Hide/show done", "Toggle visibility of completed todos")

    table.add_row("", "", "")
    table.add_row("", "[bold magenta]Meta[/bold magenta]", "", style="bold")
    table.add_row("?", "Help", "Toggle this help panel")
    table.add_row("q", "Quit", "Save and exit")

    return Panel(
        table,
        title="[bold white]Commands[/bold white]",
        border_style="blue",
        padding=(1, 2),
    )
