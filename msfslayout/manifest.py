"""``total_package_size`` maintenance for ``manifest.json``.

The field is only rewritten when the manifest already declares it; presence
of the key is the opt-in.
"""

from __future__ import annotations

from pathlib import Path

from .errors import ManifestReadError, ManifestWriteError
from .jsonio import dump_json, read_json_object, write_text_atomic

TOTAL_SIZE_KEY = "total_package_size"
TOTAL_SIZE_WIDTH = 20


def format_total_package_size(total_size: int) -> str:
    """Return ``total_size`` as a zero-padded 20-digit decimal string."""
    return str(int(total_size)).zfill(TOTAL_SIZE_WIDTH)


def update_total_package_size(manifest_path: Path, total_size: int) -> bool:
    """Rewrite ``total_package_size`` in ``manifest_path`` if the key exists.

    Returns ``True`` when the document was rewritten. Read, parse and write
    failures raise ``ManifestWriteError``.
    """
    try:
        manifest = read_json_object(manifest_path)
    except ManifestReadError as exc:
        raise ManifestWriteError(manifest_path, f"size {total_size}: {exc.cause}") from exc

    if TOTAL_SIZE_KEY not in manifest:
        return False

    manifest[TOTAL_SIZE_KEY] = format_total_package_size(total_size)
    try:
        write_text_atomic(manifest_path, dump_json(manifest))
    except OSError as exc:
        raise ManifestWriteError(manifest_path, f"size {total_size}: {exc}") from exc
    return True


__all__ = [
    "TOTAL_SIZE_KEY",
    "TOTAL_SIZE_WIDTH",
    "format_total_package_size",
    "update_total_package_size",
]
