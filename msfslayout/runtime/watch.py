"""Poll-based filesystem change detection for watch mode.

Snapshots map each root-relative path to cheap stat metadata. Diffing two
snapshots yields add/change/remove events, which a daemon thread pushes onto
the session queue. The package's own documents (and their in-flight
temporaries) are never part of a snapshot, so regeneration writes cannot
retrigger the watcher.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from queue import Queue

from ..jsonio import TEMP_SUFFIX, atomic_temp_prefix

EVENT_ADD = "add"
EVENT_ADD_DIR = "addDir"
EVENT_CHANGE = "change"
EVENT_UNLINK = "unlink"
EVENT_UNLINK_DIR = "unlinkDir"


@dataclass(frozen=True)
class ChangeEvent:
    """One observed mutation below the watched root."""

    kind: str
    path: str


@dataclass(frozen=True)
class WatchError:
    """Transport-level failure while observing the tree."""

    message: str


@dataclass(frozen=True)
class PathState:
    is_dir: bool
    size: int
    mtime_ns: int


PackageSnapshot = dict[str, PathState]


def _is_ignored_root_name(name: str, ignored_names: frozenset[str]) -> bool:
    if name in ignored_names:
        return True
    return name.endswith(TEMP_SUFFIX) and any(name.startswith(atomic_temp_prefix(doc)) for doc in ignored_names)


def take_snapshot(root: Path, ignored_names: Iterable[str] = ()) -> PackageSnapshot:
    """Return stat metadata for every entry below ``root``.

    ``ignored_names`` are file names skipped at the root level only. Entries
    that vanish mid-walk are dropped; a directory that cannot be listed raises
    ``OSError``.
    """
    ignored = frozenset(ignored_names)
    snapshot: PackageSnapshot = {}

    def walk(directory: Path, prefix: str) -> None:
        with os.scandir(directory) as entries:
            children = list(entries)
        for child in children:
            if not prefix and _is_ignored_root_name(child.name, ignored):
                continue
            relative = f"{prefix}{child.name}"
            try:
                is_dir = child.is_dir(follow_symlinks=False)
                st = child.stat(follow_symlinks=False)
            except FileNotFoundError:
                continue
            if is_dir:
                snapshot[relative] = PathState(True, 0, 0)
                try:
                    walk(Path(child.path), f"{relative}/")
                except FileNotFoundError:
                    continue
            else:
                snapshot[relative] = PathState(False, int(st.st_size), int(st.st_mtime_ns))

    walk(root, "")
    return snapshot


def diff_snapshots(previous: PackageSnapshot, current: PackageSnapshot) -> list[ChangeEvent]:
    """Return events turning ``previous`` into ``current``, sorted by path."""
    events: list[ChangeEvent] = []
    for path in sorted(previous.keys() | current.keys()):
        before = previous.get(path)
        after = current.get(path)
        if before is None and after is not None:
            events.append(ChangeEvent(EVENT_ADD_DIR if after.is_dir else EVENT_ADD, path))
        elif after is None and before is not None:
            events.append(ChangeEvent(EVENT_UNLINK_DIR if before.is_dir else EVENT_UNLINK, path))
        elif before is not None and after is not None and before != after:
            if before.is_dir != after.is_dir:
                events.append(ChangeEvent(EVENT_UNLINK_DIR if before.is_dir else EVENT_UNLINK, path))
                events.append(ChangeEvent(EVENT_ADD_DIR if after.is_dir else EVENT_ADD, path))
            elif not after.is_dir:
                events.append(ChangeEvent(EVENT_CHANGE, path))
    return events


class PollingChangeSource:
    """Daemon thread that polls ``root`` and publishes changes to ``sink``."""

    def __init__(
        self,
        root: Path,
        sink: Queue,
        *,
        ignored_names: Iterable[str] = (),
        poll_interval_seconds: float = 0.2,
        snapshot: Callable[[Path, Iterable[str]], PackageSnapshot] = take_snapshot,
    ) -> None:
        self._root = root
        self._sink = sink
        self._ignored_names = tuple(ignored_names)
        self._poll_interval_seconds = poll_interval_seconds
        self._snapshot = snapshot
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._previous: PackageSnapshot | None = None

    def _poll_once(self) -> None:
        try:
            current = self._snapshot(self._root, self._ignored_names)
        except OSError as exc:
            self._sink.put(WatchError(f"Watcher error: {exc}"))
            return
        previous = self._previous
        self._previous = current
        if previous is None:
            return
        for event in diff_snapshots(previous, current):
            self._sink.put(event)

    def _worker(self) -> None:
        while not self._stop.is_set():
            self._poll_once()
            self._stop.wait(self._poll_interval_seconds)

    def start(self) -> None:
        """Capture the baseline snapshot and begin polling."""
        if self._thread is not None:
            return
        self._poll_once()
        self._thread = threading.Thread(
            target=self._worker,
            name="msfslayout-watch",
            daemon=True,
        )
        self._thread.start()

    def close(self) -> None:
        """Stop polling and wait for the worker to exit."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()


__all__ = [
    "EVENT_ADD",
    "EVENT_ADD_DIR",
    "EVENT_CHANGE",
    "EVENT_UNLINK",
    "EVENT_UNLINK_DIR",
    "ChangeEvent",
    "WatchError",
    "PathState",
    "PackageSnapshot",
    "take_snapshot",
    "diff_snapshots",
    "PollingChangeSource",
]
