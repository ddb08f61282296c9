"""Configuration loading for todo-keeper."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError
from .models import STORAGE_KEY

DEFAULT_CONFIG_PATH = Path("~/.config/todo-keeper/config.json")
DEFAULT_DATA_FILE = "~/.local/share/todo-keeper/todos.json"
DEFAULT_LOG_FILE = "~/.cache/todo-keeper/todo.log"


def _expand(raw: str) -> Path:
    return Path(os.path.expanduser(raw)).resolve()


@dataclass(frozen=True)
class Config:
    """Runtime configuration loaded from config.json."""

    data_file: Path
    log_file: Path
    storage_key: str = STORAGE_KEY
    show_completed: bool = True
    max_text_width: int = 60

    @classmethod
    def from_dict(cls, payload: dict) -> Config:
        """Create a Config object from a raw dictionary."""
        if not isinstance(payload, dict):
            raise ConfigError(f"Config must be a JSON object, got {type(payload).__name__}")

        storage_key = str(payload.get("storage_key", STORAGE_KEY))
        if not storage_key:
            raise ConfigError("storage_key must not be empty")

        try:
            max_text_width = int(payload.get("max_text_width", 60))
        except (TypeError, ValueError) as err:
            raise ConfigError(f"max_text_width must be an integer: {err}") from err
        if max_text_width <= 0:
            raise ConfigError(f"max_text_width must be positive, got {max_text_width}")

        return cls(
            data_file=_expand(payload.get("data_file", DEFAULT_DATA_FILE)),
            log_file=_expand(payload.get("log_file", DEFAULT_LOG_FILE)),
            storage_key=storage_key,
            show_completed=bool(payload.get("show_completed", True)),
            max_text_width=max_text_width,
        )


def load_config(path: Path | None = None) -> Config:
    """Load configuration from the provided path.

    With no path, the default location is tried and defaults are used if
    nothing is there. An explicit path must exist.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if path is None:
        path = _expand(str(DEFAULT_CONFIG_PATH))
        if not path.exists():
            return Config.from_dict({})
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as err:
        raise ConfigError(f"Failed to read config {path}: {err}") from err
    return Config.from_dict(data)
