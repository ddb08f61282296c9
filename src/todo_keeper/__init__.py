"""todo-keeper: a personal todo list that persists across restarts."""

__version__ = "1.0.0"

from .exceptions import ConfigError, LoadFailure, SaveFailure, StorageError, TodoError
from .kv_store import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .models import STORAGE_KEY, IdGenerator, Snapshot, TodoItem, decode_snapshot, encode_snapshot
from .persistence import PersistenceSync
from .store import TodoStore

__all__ = [
    "STORAGE_KEY",
    "ConfigError",
    "IdGenerator",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LoadFailure",
    "MemoryKeyValueStore",
    "PersistenceSync",
    "SaveFailure",
    "Snapshot",
    "StorageError",
    "TodoError",
    "TodoItem",
    "TodoStore",
    "decode_snapshot",
    "encode_snapshot",
]
