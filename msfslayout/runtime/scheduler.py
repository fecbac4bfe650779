"""Background runner for watch-mode regenerations."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Queue


@dataclass(frozen=True)
class RegenerationFinished:
    """Completion notice posted back to the session queue."""

    run_id: int
    result: object | None
    error: BaseException | None = None


class RegenerationScheduler:
    """Run at most one regeneration at a time on a daemon worker thread.

    Completion (or failure) is reported through ``sink`` so the session loop
    stays the only place that mutates debounce state.
    """

    def __init__(self, regenerate: Callable[[], object], sink: Queue) -> None:
        self._regenerate = regenerate
        self._sink = sink
        self._lock = threading.Lock()
        self._running = False
        self._next_run_id = 1
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def _worker(self, run_id: int) -> None:
        result: object | None = None
        error: BaseException | None = None
        try:
            result = self._regenerate()
        except Exception as exc:
            error = exc
        finally:
            with self._lock:
                self._running = False
        self._sink.put(RegenerationFinished(run_id=run_id, result=result, error=error))

    def submit(self) -> int | None:
        """Start a regeneration unless one is in flight; return its run id."""
        with self._lock:
            if self._running:
                return None
            self._running = True
            run_id = self._next_run_id
            self._next_run_id += 1

        worker = threading.Thread(
            target=self._worker,
            args=(run_id,),
            name="msfslayout-regenerate",
            daemon=True,
        )
        self._thread = worker
        worker.start()
        return run_id

    def wait(self, timeout: float | None = None) -> None:
        """Block until the in-flight regeneration, if any, has finished."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)


__all__ = [
    "RegenerationFinished",
    "RegenerationScheduler",
]
