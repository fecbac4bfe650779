"""Watch-mode session: keep ``layout.json`` in sync with one package root.

A single loop thread consumes one queue carrying change events, transport
errors and regeneration completions, and drives ``RegenerationDebouncer``.
Regenerations run on ``RegenerationScheduler``'s worker so changes that land
mid-run are still observed and coalesced into a follow-up run.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from queue import Empty, Queue

from ..orchestrator import LAYOUT_FILENAME, MANIFEST_FILENAME, ProcessOptions, ProcessResult, process_layout
from ..reporting import LayoutReporter
from .config import DEFAULT_DEBOUNCE_MS, DEFAULT_POLL_INTERVAL_MS
from .debounce import RegenerationDebouncer
from .scheduler import RegenerationFinished, RegenerationScheduler
from .watch import ChangeEvent, PollingChangeSource, WatchError

_STOP = object()

Regenerate = Callable[[Path, ProcessOptions], object]
SourceFactory = Callable[[Path, Queue], object]


class WatchSession:
    """Process-wide state for one watch invocation on a single root."""

    def __init__(
        self,
        package_dir: Path | str,
        options: ProcessOptions | None = None,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_MS / 1000.0,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_MS / 1000.0,
        regenerate: Regenerate | None = None,
        source_factory: SourceFactory | None = None,
        monotonic: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ) -> None:
        self.root = Path(package_dir).absolute()
        self.options = replace(options or ProcessOptions(), force=True)
        self.reporter = LayoutReporter(quiet=self.options.quiet, debug_enabled=self.options.debug)
        if logger is not None:
            self.reporter.logger = logger
        if regenerate is None:
            reporter_logger = self.reporter.logger

            def regenerate(root: Path, run_options: ProcessOptions) -> object:
                return process_layout(root, run_options, logger=reporter_logger)

        self._regenerate = regenerate
        self._queue: Queue = Queue()
        self._monotonic = monotonic
        self._debouncer = RegenerationDebouncer(debounce_seconds)
        self._scheduler = RegenerationScheduler(lambda: self._regenerate(self.root, self.options), self._queue)
        if source_factory is None:

            def source_factory(root: Path, sink: Queue) -> object:
                return PollingChangeSource(
                    root,
                    sink,
                    ignored_names=(LAYOUT_FILENAME, MANIFEST_FILENAME),
                    poll_interval_seconds=poll_interval_seconds,
                )

        self._source = source_factory(self.root, self._queue)
        self._thread: threading.Thread | None = None
        self._stopped = threading.Event()
        self.baseline_result: object | None = None
        self.regeneration_count = 0

    @property
    def debouncer(self) -> RegenerationDebouncer:
        return self._debouncer

    def start(self) -> object:
        """Run the forced baseline regeneration, then subscribe and start the loop."""
        if self._thread is not None:
            return self.baseline_result
        self.reporter.info(f"Watching {self.root} for changes...")
        self.baseline_result = self._regenerate(self.root, self.options)
        self._source.start()
        self._thread = threading.Thread(
            target=self._loop,
            name="msfslayout-watch-loop",
            daemon=True,
        )
        self._thread.start()
        return self.baseline_result

    def notify(self, event: ChangeEvent | WatchError) -> None:
        """Feed one event into the session as if the change source observed it."""
        self._queue.put(event)

    def _handle_finished(self, finished: RegenerationFinished) -> None:
        self.regeneration_count += 1
        if finished.error is not None:
            self.reporter.error(f"Regeneration failed: {finished.error}")
            return
        result = finished.result
        if isinstance(result, ProcessResult) and result.success:
            self.reporter.info(f"Regenerated {LAYOUT_FILENAME} ({result.file_count} files)")

    def _loop(self) -> None:
        while True:
            timeout = self._debouncer.seconds_until_due(self._monotonic())
            try:
                item = self._queue.get(timeout=timeout)
            except Empty:
                item = None

            if item is _STOP:
                self._debouncer.shutdown()
                return

            now = self._monotonic()
            if isinstance(item, ChangeEvent):
                self.reporter.debug(f"{item.kind}: {item.path}")
                self._debouncer.note_change(now)
            elif isinstance(item, WatchError):
                self.reporter.error(item.message)
            elif isinstance(item, RegenerationFinished):
                self._handle_finished(item)
                self._debouncer.finish_run(now)

            if self._debouncer.try_start(self._monotonic()):
                self._scheduler.submit()

    def wait(self, poll_seconds: float = 0.5) -> None:
        """Block until ``stop`` is called, staying responsive to ``KeyboardInterrupt``."""
        while not self._stopped.wait(poll_seconds):
            pass

    def stop(self) -> int:
        """Unsubscribe, cancel the pending deadline, let an in-flight run finish.

        Returns the number of change-driven regenerations performed.
        """
        if self._stopped.is_set():
            return self.regeneration_count
        self._source.close()
        if self._thread is not None:
            self._queue.put(_STOP)
            self._thread.join()
        self._scheduler.wait()
        while True:
            try:
                item = self._queue.get_nowait()
            except Empty:
                break
            if isinstance(item, RegenerationFinished):
                self._handle_finished(item)
        self._stopped.set()
        return self.regeneration_count


def watch_layout(
    package_dir: Path | str,
    options: ProcessOptions | None = None,
    *,
    debounce_seconds: float = DEFAULT_DEBOUNCE_MS / 1000.0,
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_MS / 1000.0,
    logger: logging.Logger | None = None,
) -> int:
    """Watch ``package_dir`` until interrupted; return the regeneration count."""
    session = WatchSession(
        package_dir,
        options,
        debounce_seconds=debounce_seconds,
        poll_interval_seconds=poll_interval_seconds,
        logger=logger,
    )
    session.start()
    try:
        session.wait()
    except KeyboardInterrupt:
        pass
    finally:
        count = session.stop()
    session.reporter.info(f"Stopped watching. {count} regeneration(s) performed.")
    return count


__all__ = [
    "WatchSession",
    "watch_layout",
]
