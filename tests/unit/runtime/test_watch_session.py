"""Watch session coordination tests.

A fake change source lets tests inject events directly; the regenerate
callable records calls so coalescing and follow-up runs are observable.
"""

from __future__ import annotations

import json
import logging
import tempfile
import threading
import time
import unittest
from pathlib import Path
from queue import Queue

from msfslayout.orchestrator import ProcessOptions
from msfslayout.runtime.debounce import DebounceState
from msfslayout.runtime.session import WatchSession
from msfslayout.runtime.watch import ChangeEvent, WatchError


class _FakeSource:
    def __init__(self, root: Path, sink: Queue) -> None:
        self.root = root
        self.sink = sink
        self.started = False
        self.closed = False

    def start(self) -> None:
        self.started = True

    def close(self) -> None:
        self.closed = True


class _RecordingRegenerate:
    def __init__(self) -> None:
        self.calls: list[ProcessOptions] = []
        self.lock = threading.Lock()
        self.changed = threading.Condition(self.lock)
        self.gate: threading.Event | None = None

    def __call__(self, root: Path, options: ProcessOptions) -> str:
        with self.lock:
            self.calls.append(options)
            self.changed.notify_all()
            gate = self.gate if len(self.calls) > 1 else None
        if gate is not None:
            gate.wait(5)
        return "ok"

    def wait_for_calls(self, count: int, timeout: float = 5.0) -> bool:
        with self.lock:
            return self.changed.wait_for(lambda: len(self.calls) >= count, timeout)


def _session(regenerate: _RecordingRegenerate, debounce_seconds: float = 0.05) -> WatchSession:
    return WatchSession(
        "/pkg",
        ProcessOptions(quiet=True),
        debounce_seconds=debounce_seconds,
        regenerate=regenerate,
        source_factory=_FakeSource,
        logger=logging.getLogger("msfslayout.tests.watch_session"),
    )


class WatchSessionTests(unittest.TestCase):
    def test_start_runs_forced_baseline_and_starts_source(self) -> None:
        regenerate = _RecordingRegenerate()
        session = _session(regenerate)

        session.start()
        try:
            self.assertEqual(len(regenerate.calls), 1)
            self.assertTrue(regenerate.calls[0].force)
            self.assertTrue(regenerate.calls[0].quiet)
            self.assertTrue(session._source.started)
        finally:
            count = session.stop()

        self.assertEqual(count, 0)
        self.assertTrue(session._source.closed)

    def test_burst_of_events_triggers_one_regeneration(self) -> None:
        regenerate = _RecordingRegenerate()
        session = _session(regenerate)
        session.start()

        for index in range(5):
            session.notify(ChangeEvent("change", f"file{index}.txt"))
        self.assertTrue(regenerate.wait_for_calls(2))
        time.sleep(0.2)
        count = session.stop()

        self.assertEqual(len(regenerate.calls), 2)
        self.assertEqual(count, 1)
        self.assertEqual(session.debouncer.change_count, 5)
        self.assertIs(session.debouncer.state, DebounceState.SHUTTING_DOWN)

    def test_change_during_regeneration_triggers_follow_up(self) -> None:
        regenerate = _RecordingRegenerate()
        regenerate.gate = threading.Event()
        session = _session(regenerate)
        session.start()

        session.notify(ChangeEvent("add", "first.txt"))
        self.assertTrue(regenerate.wait_for_calls(2))
        session.notify(ChangeEvent("add", "second.txt"))
        deadline = time.monotonic() + 5
        while not session.debouncer.rerun_pending and time.monotonic() < deadline:
            time.sleep(0.01)
        self.assertTrue(session.debouncer.rerun_pending)

        regenerate.gate.set()
        self.assertTrue(regenerate.wait_for_calls(3))
        count = session.stop()

        self.assertEqual(count, 2)
        self.assertTrue(all(options.force for options in regenerate.calls))

    def test_stop_before_deadline_cancels_pending_run(self) -> None:
        regenerate = _RecordingRegenerate()
        session = _session(regenerate, debounce_seconds=30)
        session.start()

        session.notify(ChangeEvent("change", "a.txt"))
        count = session.stop()

        self.assertEqual(count, 0)
        self.assertEqual(len(regenerate.calls), 1)

    def test_watch_error_is_logged_and_session_keeps_running(self) -> None:
        regenerate = _RecordingRegenerate()
        session = WatchSession(
            "/pkg",
            debounce_seconds=0.05,
            regenerate=regenerate,
            source_factory=_FakeSource,
            logger=logging.getLogger("msfslayout.tests.watch_errors"),
        )
        session.start()

        with self.assertLogs("msfslayout.tests.watch_errors", level="ERROR") as logs:
            session.notify(WatchError("Watcher error: boom"))
            session.notify(ChangeEvent("add", "late.txt"))
            self.assertTrue(regenerate.wait_for_calls(2))
            session.stop()

        self.assertIn("Watcher error: boom", [record.getMessage() for record in logs.records])


class WatchSessionFilesystemTests(unittest.TestCase):
    def test_new_file_is_picked_up_by_polling_session(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "manifest.json").write_text('{"total_package_size": "0"}', encoding="utf-8")
            (root / "a.txt").write_text("a", encoding="utf-8")
            session = WatchSession(
                root,
                ProcessOptions(quiet=True),
                debounce_seconds=0.05,
                poll_interval_seconds=0.02,
                logger=logging.getLogger("msfslayout.tests.watch_fs"),
            )
            session.start()
            try:
                self.assertTrue((root / "layout.json").exists())
                (root / "b.txt").write_text("bb", encoding="utf-8")
                paths: list[str] = []
                deadline = time.monotonic() + 10
                while time.monotonic() < deadline:
                    layout = json.loads((root / "layout.json").read_text(encoding="utf-8"))
                    paths = [entry["path"] for entry in layout["content"]]
                    if "b.txt" in paths:
                        break
                    time.sleep(0.05)
            finally:
                count = session.stop()

            self.assertEqual(paths, ["a.txt", "b.txt"])
            self.assertGreaterEqual(count, 1)


if __name__ == "__main__":
    unittest.main()
