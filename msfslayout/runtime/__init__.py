"""Watch-mode runtime entry points.

This package groups the long-running watch session (`watch_layout`) and the
lower-level pieces it is built from: polling change source, debounce state
machine, and the single-worker regeneration scheduler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import WatchSession


def watch_layout(*args, **kwargs):
    """Lazily import the watch entrypoint to keep package imports lightweight."""
    from .session import watch_layout as _watch_layout

    return _watch_layout(*args, **kwargs)


def __getattr__(name: str):
    if name == "WatchSession":
        from .session import WatchSession

        return WatchSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["WatchSession", "watch_layout"]
