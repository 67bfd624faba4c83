"""The stopwatch event loop: ticks, key handling, history writes."""

from __future__ import annotations

import time
from typing import TextIO

from datimer.utils.exit_codes import SUCCESS
from datimer.utils.logger import get_logger

from .clock import SystemClock
from .entry import elapsed_entry, start_entry
from .exceptions import RenderError
from .history import DEFAULT_PERSIST_INTERVAL, HistoryBuffer
from .keyboard import InputListener, KeyboardHandler
from .state import QUIT_KEY, TOGGLE_KEYS, TimerStateMachine
from .ui import TerminalDisplay

TICK_SECONDS = 0.128

# Blank rows left between the last history line and the shell prompt on exit
EXIT_CURSOR_OFFSET = 2


class StopwatchSession:
    """Runs one stopwatch until the user quits.

    Owns the timer, the history buffer and the display; only the key
    listener runs on another thread.
    """

    def __init__(
        self,
        sink: TextIO,
        display: TerminalDisplay | None = None,
        keyboard: KeyboardHandler | None = None,
        clock=None,
        persist_interval: float = DEFAULT_PERSIST_INTERVAL,
        sleep=time.sleep,
    ):
        self.clock = clock or SystemClock()
        self.display = display or TerminalDisplay()
        self.keyboard = keyboard or KeyboardHandler()
        self.listener = InputListener(self.keyboard)
        self.timer = TimerStateMachine(self.clock)
        self.history = HistoryBuffer.for_display(
            self.display, sink, clock=self.clock, persist_interval=persist_interval
        )
        self.sleep = sleep
        self._logger = get_logger()

    def tick(self) -> bool:
        """Run one loop iteration. Returns False once the user quit."""
        if self.timer.is_running:
            self.history.replace(elapsed_entry(self.timer.elapsed(), bold=True))

        key = self.listener.poll()
        if key == QUIT_KEY:
            return False
        if key in TOGGLE_KEYS:
            for entry in self.timer.toggle():
                self.history.append(entry)
            self._logger.info(
                "stopwatch %s at %.3fs", self.timer.status, self.timer.running_total
            )
        return True

    def run(self) -> int:
        """
        Run the stopwatch until 'q' or Ctrl-C.

        Raises TerminalInitError before drawing anything if the terminal
        cannot be switched to cbreak mode. The terminal is restored on every
        way out, including RenderError and PersistenceError.
        """
        self.keyboard.enable()
        self._logger.info(
            "stopwatch started (history capacity %d)", self.history.capacity
        )
        failed = True
        try:
            self.display.start(start_entry(self.clock.now()))
            self.listener.start()
            try:
                self._loop()
            except KeyboardInterrupt:
                self._logger.info("interrupted, quitting")
            self.history.persist()
            failed = False
        finally:
            self.listener.stop()
            self._shutdown(error_pending=failed)

        self._logger.info("stopwatch stopped after %.3fs", self.timer.elapsed())
        return SUCCESS

    def _loop(self) -> None:
        started = self.clock.monotonic()
        ticks = 0
        while self.tick():
            ticks += 1
            now = self.clock.monotonic()
            delay = started + ticks * TICK_SECONDS - now
            if delay <= 0:
                # Fell behind (stalled or suspended): skip missed ticks
                ticks = int((now - started) / TICK_SECONDS) + 1
                delay = started + ticks * TICK_SECONDS - now
            self.sleep(delay)

    def _shutdown(self, error_pending: bool = False) -> None:
        """Restore the terminal.

        While another error is already propagating, a failed restore is only
        logged so the original error (and its exit code) reaches the caller.
        """
        try:
            self.display.restore(self.history.last_row + EXIT_CURSOR_OFFSET)
        except RenderError as e:
            if not error_pending:
                raise
            self._logger.error("terminal restore failed: %s", e)
        finally:
            self.keyboard.disable()
