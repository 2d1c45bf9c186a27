"""Persistent JSON config helpers.

Stores key binding overrides, pager/style preferences, and listing options.
Malformed or missing config falls back to defaults on every read.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazydir"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_PAGER = "less -R"
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON, returning whether it was written."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        return False
    return True


def load_keybindings(data: dict[str, object] | None = None) -> dict[str, str]:
    """Return configured binding overrides; non-string keys or actions are dropped."""
    config = load_config() if data is None else data
    value = config.get("keybindings")
    if not isinstance(value, dict):
        return {}
    return {
        key: action
        for key, action in value.items()
        if isinstance(key, str) and isinstance(action, str) and key and action.strip()
    }


def _load_string(key: str, default: str, data: dict[str, object] | None) -> str:
    config = load_config() if data is None else data
    value = config.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _load_bool(key: str, default: bool, data: dict[str, object] | None) -> bool:
    """Only explicit booleans are accepted; anything else falls back to ``default``."""
    config = load_config() if data is None else data
    value = config.get(key)
    return value if isinstance(value, bool) else default


def load_pager(data: dict[str, object] | None = None) -> str:
    """Pager command line: config value, then ``$PAGER``, then ``less -R``."""
    env_pager = os.environ.get("PAGER", "").strip()
    return _load_string("pager", env_pager or DEFAULT_PAGER, data)


def load_style(data: dict[str, object] | None = None) -> str:
    return _load_string("style", DEFAULT_STYLE, data)


def load_wrap_search(data: dict[str, object] | None = None) -> bool:
    return _load_bool("wrap_search", True, data)


def load_show_hidden(data: dict[str, object] | None = None) -> bool:
    return _load_bool("show_hidden", True, data)


def write_default_config(keybindings: dict[str, str]) -> bool:
    """Write a starter config with every default value spelled out.

    Existing keys in the current config win over the defaults.
    """
    config: dict[str, object] = {
        "keybindings": dict(keybindings),
        "pager": DEFAULT_PAGER,
        "style": DEFAULT_STYLE,
        "wrap_search": True,
        "show_hidden": True,
    }
    config.update(load_config())
    return save_config(config)
