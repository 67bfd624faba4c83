"""Keyboard input: cbreak terminal mode and a background key listener."""

from __future__ import annotations

import queue
import sys
import termios
import threading
import tty

from datimer.utils.logger import get_logger

from .exceptions import TerminalInitError
from .state import QUIT_KEY


class KeyboardHandler:
    """Switches the terminal into cbreak mode and reads single keys."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd: int | None = None
        self.old_settings = None

    def enable(self) -> None:
        """Setup terminal for unbuffered, unechoed input."""
        try:
            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError) as e:
            self.old_settings = None
            raise TerminalInitError(f"Could not enable cbreak mode: {e}") from e

    def read_key(self) -> str | None:
        """
        Block until a key is pressed.

        Returns the key character, or None once input is closed.
        """
        key = self.stream.read(1)
        return key or None

    def disable(self) -> None:
        """Restore terminal settings."""
        if self.old_settings is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except termios.error as e:
            get_logger().warning("could not restore terminal settings: %s", e)
        self.old_settings = None


class InputListener:
    """Forwards key presses from a blocking reader into a one-slot queue.

    The listener blocks while the slot is occupied, so at most one key waits
    between two polls and a burst of presses collapses instead of queueing.
    It ends after forwarding ``q``, at end of input, on a read error, or once
    ``stop()`` is called. The thread is a daemon and is never joined.
    """

    def __init__(self, keyboard: KeyboardHandler, put_timeout: float = 0.1):
        self.keyboard = keyboard
        self.put_timeout = put_timeout
        self.keys: queue.Queue[str] = queue.Queue(maxsize=1)
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._listen, name="datimer-input", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def poll(self) -> str | None:
        """Take the pending key without blocking, or None."""
        try:
            return self.keys.get_nowait()
        except queue.Empty:
            return None

    def _listen(self) -> None:
        logger = get_logger()
        while not self._stopped.is_set():
            try:
                key = self.keyboard.read_key()
            except (OSError, ValueError) as e:
                logger.warning("input listener stopped on read error: %s", e)
                return
            if key is None:
                logger.info("input closed, listener stopped")
                return
            if not self._send(key):
                return
            if key == QUIT_KEY:
                return

    def _send(self, key: str) -> bool:
        """Hand *key* over, waiting for the slot to free up. False if stopped."""
        while not self._stopped.is_set():
            try:
                self.keys.put(key, timeout=self.put_timeout)
                return True
            except queue.Full:
                continue
        return False
