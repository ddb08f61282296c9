"""TUI utility functions for formatting and display helpers."""

import shutil


def truncate_text(text: str, max_len: int) -> str:
    """
    Truncate text to max length, adding ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Truncated text with "..." suffix if text exceeds max_len

    Examples:
        >>> truncate_text("short", 10)
        'short'
        >>> truncate_text("buy milk and eggs", 10)
        'buy mil...'
    """
    if len(text) <= max_len:
        return text

    if max_len <= 3:
        return "..."[:max_len]

    return text[: max_len - 3] + "..."


def get_terminal_size() -> tuple[int, int]:
    """
    Get terminal size as (columns, rows) tuple.

    Returns:
        Tuple of (columns, rows), defaults to (80, 24) if unavailable
    """
    try:
        size = shutil.get_terminal_size(fallback=(80, 24))
        return (size.columns, size.lines)
    except Exception:
        return (80, 24)


def get_completion_badge(completed: bool) -> tuple[str, str]:
    """
    Get icon and color for a todo's completion state.

    Examples:
        >>> get_completion_badge(True)
        ('✓', 'green')
        >>> get_completion_badge(False)
        ('○', 'dim')
    """
    return ("✓", "green") if completed else ("○", "dim")
