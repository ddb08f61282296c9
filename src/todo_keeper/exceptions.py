"""Custom exceptions for todo-keeper.

This module defines a small hierarchy of exceptions for the failure modes
that cross component boundaries. None of them are fatal to a session: the
persistence layer logs them and degrades to an empty or unchanged list.
"""


class TodoError(Exception):
    """Base exception for all todo-keeper errors."""


class StorageError(TodoError):
    """Raised when the key-value store cannot be read or written."""


class LoadFailure(TodoError):
    """Raised when a persisted snapshot is unreadable or cannot be parsed."""


class SaveFailure(TodoError):
    """Raised when a snapshot write could not be committed."""


class ConfigError(TodoError):
    """Raised when configuration is invalid or cannot be loaded."""
