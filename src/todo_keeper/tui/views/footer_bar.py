"""Footer bar renderer for status indicators.

This module provides the render_footer_bar function that displays
a status bar with remaining-todo count, edit mode, error messages, and
help hints.
"""

from __future__ import annotations

from rich.text import Text

from ..tui_utils import truncate_text


def render_footer_bar(
    total: int,
    remaining: int,
    error_message: str | None = None,
    editing: bool = False,
    terminal_width: int = 80,
) -> Text:
    """Build Rich Text displaying footer status bar.

    Args:
        total: Number of todos in the list
        remaining: Number of todos not yet completed
        error_message: Current error message to display, if any
        editing: Whether an edit session is open
        terminal_width: Terminal width for truncation calculations

    Returns:
        Rich Text component ready for rendering
    """
    parts = []

    if total == 0:
        parts.append(("No todos", "dim"))
    elif remaining == 0:
        parts.append((f"All {total} done", "green"))
    else:
        count_text = f"{remaining} of {total} left"
        parts.append((count_text, "yellow"))

    if editing:
        parts.append((" | ", "dim"))
        parts.append(("EDITING (:cancel to abort)", "bold magenta"))

    help_hint = "Type ? for help"

    # Error message (truncated if needed)
    if error_message:
        used = sum(len(text) for text, _ in parts) + len(" | ") * 2 + len(help_hint)
        available_width = terminal_width - used

        if available_width > 10:  # Minimum space for meaningful error
            parts.append((" | ", "dim"))
            parts.append((truncate_text(error_message, available_width), "red"))

    parts.append((" | ", "dim"))
    parts.append((help_hint, "cyan"))

    footer = Text()
    for text, style in parts:
        footer.append(text, style=style)

    return footer
