"""Exclusion policy for layout content entries.

Excluded files are left out of ``content`` but still count toward the package
size.
"""

from __future__ import annotations

# Top-level directory holding transient conversion artifacts.
CONVERSION_DIR_NAME = "_cvt_"

# Case-folded platform housekeeping file names.
EXCLUDED_FILE_NAMES = frozenset(
    {
        "thumbs.db",
        "desktop.ini",
        ".ds_store",
    }
)


def is_excluded(relative_path: str) -> bool:
    """Return whether a root-relative, ``/``-separated path is omitted from content."""
    segments = relative_path.split("/")
    if len(segments) > 1 and segments[0].casefold() == CONVERSION_DIR_NAME:
        return True
    return segments[-1].casefold() in EXCLUDED_FILE_NAMES


__all__ = [
    "CONVERSION_DIR_NAME",
    "EXCLUDED_FILE_NAMES",
    "is_excluded",
]
