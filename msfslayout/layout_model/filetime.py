"""Modification-time conversion to Windows FILETIME ticks.

A FILETIME counts 100-nanosecond intervals since 1601-01-01T00:00:00Z. Inputs
are absolute instants (Unix epoch milliseconds), so no timezone is involved.
"""

from __future__ import annotations

import math

# Milliseconds between 1601-01-01T00:00:00Z and 1970-01-01T00:00:00Z.
FILETIME_EPOCH_OFFSET_MS = 11_644_473_600_000
TICKS_PER_MILLISECOND = 10_000


def filetime_from_epoch_ms(epoch_ms: int | float) -> int:
    """Return FILETIME ticks for a Unix-epoch millisecond instant."""
    return math.floor((epoch_ms + FILETIME_EPOCH_OFFSET_MS) * TICKS_PER_MILLISECOND)


def filetime_from_mtime_ns(mtime_ns: int) -> int:
    """Return FILETIME ticks for ``st_mtime_ns`` truncated to millisecond resolution."""
    return filetime_from_epoch_ms(mtime_ns // 1_000_000)


__all__ = [
    "FILETIME_EPOCH_OFFSET_MS",
    "TICKS_PER_MILLISECOND",
    "filetime_from_epoch_ms",
    "filetime_from_mtime_ns",
]
