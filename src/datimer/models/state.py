"""Stopwatch state machine: running/paused with accumulated duration."""

from __future__ import annotations

from typing import Literal

from .clock import SystemClock
from .entry import TimestampedEntry, elapsed_entry, paused_entry, resumed_entry

TimerStatus = Literal["running", "paused"]

TOGGLE_KEYS = frozenset({"p", " "})
QUIT_KEY = "q"


class TimerStateMachine:
    """Tracks running/paused state and the committed elapsed duration.

    ``running_total`` holds the time of every finished running interval.
    The interval in progress is measured from ``anchor`` and is only added
    to the total when the stopwatch is paused.
    """

    def __init__(self, clock=None):
        self.clock = clock or SystemClock()
        self.status: TimerStatus = "running"
        self.running_total = 0.0
        self.anchor = self.clock.monotonic()

    @property
    def is_running(self) -> bool:
        return self.status == "running"

    def elapsed(self) -> float:
        """Seconds to display: committed total plus the live interval."""
        if self.is_running:
            return self.running_total + (self.clock.monotonic() - self.anchor)
        return self.running_total

    def pause(self) -> list[TimestampedEntry]:
        """Pause a running stopwatch.

        Returns the history entries for the transition: the time of day it
        was paused, then the committed total in italics.
        """
        if self.status != "running":
            raise ValueError("Can only pause a running stopwatch")

        self.running_total += self.clock.monotonic() - self.anchor
        self.status = "paused"
        return [
            paused_entry(self.clock.now()),
            elapsed_entry(self.running_total, italic=True),
        ]

    def resume(self) -> list[TimestampedEntry]:
        """Resume a paused stopwatch.

        Returns the time of day it was resumed, then the (not yet advancing)
        total in bold.
        """
        if self.status != "paused":
            raise ValueError("Can only resume a paused stopwatch")

        self.anchor = self.clock.monotonic()
        self.status = "running"
        return [
            resumed_entry(self.clock.now()),
            elapsed_entry(self.running_total, bold=True),
        ]

    def toggle(self) -> list[TimestampedEntry]:
        if self.is_running:
            return self.pause()
        return self.resume()
