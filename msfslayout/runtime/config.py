"""Persistent JSON config helpers.

Stores watch timing defaults and the manifest-check preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "msfslayout"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_POLL_INTERVAL_MS = 200


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks layout generation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_positive_int(key: str, default: int) -> int:
    """Read a positive integer value; booleans and non-integers fall back to ``default``."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_debounce_ms() -> int:
    """Load the quiet period, in milliseconds, before a watch regeneration."""
    return _load_positive_int("debounce_ms", DEFAULT_DEBOUNCE_MS)


def load_poll_interval_ms() -> int:
    """Load the filesystem polling interval used by watch mode."""
    return _load_positive_int("poll_interval_ms", DEFAULT_POLL_INTERVAL_MS)


def load_check_manifest() -> bool:
    """Return whether ``manifest.json`` must exist before generating.

    Only explicit booleans are honored; anything else means ``True``.
    """
    value = load_config().get("check_manifest")
    return value if isinstance(value, bool) else True


def save_defaults(*, debounce_ms: int, poll_interval_ms: int, check_manifest: bool) -> None:
    """Persist CLI defaults; non-positive intervals are not stored."""
    config = load_config()
    if debounce_ms > 0:
        config["debounce_ms"] = int(debounce_ms)
    if poll_interval_ms > 0:
        config["poll_interval_ms"] = int(poll_interval_ms)
    config["check_manifest"] = bool(check_manifest)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_POLL_INTERVAL_MS",
    "load_config",
    "save_config",
    "load_debounce_ms",
    "load_poll_interval_ms",
    "load_check_manifest",
    "save_defaults",
]
