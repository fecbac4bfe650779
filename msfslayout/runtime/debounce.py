"""Debounce state machine for change-driven regeneration.

States cycle ``IDLE -> DEBOUNCING -> RUNNING -> IDLE``; ``SHUTTING_DOWN`` is
terminal. Every change pushes the deadline out by one window. A change that
lands while a run is in flight marks a rerun, and finishing that run re-arms
the deadline instead of going idle, so the final change is never dropped.
The clock is passed in by the caller, which keeps this module free of
threads and sleeps.
"""

from __future__ import annotations

import enum


class DebounceState(enum.Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class RegenerationDebouncer:
    """Coalesce change bursts into single regeneration runs."""

    def __init__(self, window_seconds: float) -> None:
        if window_seconds < 0:
            raise ValueError("debounce window must be >= 0")
        self.window_seconds = window_seconds
        self.state = DebounceState.IDLE
        self.deadline: float | None = None
        self.rerun_pending = False
        self.change_count = 0
        self.run_count = 0

    @property
    def busy(self) -> bool:
        return self.state is DebounceState.RUNNING

    def note_change(self, now: float) -> None:
        """Record one qualifying change observed at ``now``."""
        if self.state is DebounceState.SHUTTING_DOWN:
            return
        self.change_count += 1
        self.deadline = now + self.window_seconds
        if self.state is DebounceState.RUNNING:
            self.rerun_pending = True
            return
        self.state = DebounceState.DEBOUNCING

    def seconds_until_due(self, now: float) -> float | None:
        """Return how long until the deadline, or ``None`` when nothing is armed."""
        if self.state is not DebounceState.DEBOUNCING or self.deadline is None:
            return None
        return max(0.0, self.deadline - now)

    def try_start(self, now: float) -> bool:
        """Enter ``RUNNING`` if the window has elapsed; return whether a run should start."""
        if self.state is not DebounceState.DEBOUNCING or self.deadline is None:
            return False
        if now < self.deadline:
            return False
        self.state = DebounceState.RUNNING
        self.deadline = None
        self.run_count += 1
        return True

    def finish_run(self, now: float) -> None:
        """Leave ``RUNNING``; re-arm when changes arrived during the run."""
        if self.state is not DebounceState.RUNNING:
            return
        if self.rerun_pending:
            self.rerun_pending = False
            self.state = DebounceState.DEBOUNCING
            if self.deadline is None or self.deadline < now:
                self.deadline = now
            return
        self.state = DebounceState.IDLE
        self.deadline = None

    def shutdown(self) -> None:
        """Cancel any armed deadline and refuse further changes."""
        self.state = DebounceState.SHUTTING_DOWN
        self.deadline = None
        self.rerun_pending = False


__all__ = [
    "DebounceState",
    "RegenerationDebouncer",
]
