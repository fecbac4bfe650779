"""JSON document helpers shared by the layout and manifest writers.

Output is deterministic: two-space indent, LF newlines, insertion key order.
Writes go through a temporary sibling file and ``os.replace`` so readers never
observe a half-written document.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import ManifestReadError


def dump_json(data: Any) -> str:
    """Serialize ``data`` with stable two-space indentation and LF line endings."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    return text.replace("\r\n", "\n")


def read_json_object(path: Path) -> dict[str, Any]:
    """Read a UTF-8 JSON document that must decode to a top-level object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestReadError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ManifestReadError(path, "expected JSON object")
    return data


TEMP_SUFFIX = ".tmp"


def atomic_temp_prefix(name: str) -> str:
    """Return the filename prefix used for in-flight writes of document ``name``."""
    return f".{name}."


def write_text_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` (UTF-8) via write-then-rename."""
    fd, tmp_name = tempfile.mkstemp(prefix=atomic_temp_prefix(path.name), suffix=TEMP_SUFFIX, dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = [
    "TEMP_SUFFIX",
    "atomic_temp_prefix",
    "dump_json",
    "read_json_object",
    "write_text_atomic",
]
