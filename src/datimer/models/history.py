"""Scrolling history of stopwatch events with file persistence."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import TextIO

from datimer.utils.logger import get_logger

from .clock import SystemClock
from .entry import TimestampedEntry
from .exceptions import PersistenceError
from .ui import VIEWPORT_ORIGIN

DEFAULT_PERSIST_INTERVAL = 20.0

# Rows kept free under the viewport for the cursor on exit
FOOTER_ROWS = 2


class HistoryBuffer:
    """Bounded, oldest-first list of entries mirrored to screen and file.

    Two kinds of write:

    * ``replace`` overwrites the last row (the live "Elapsed:" counter) and
      never changes the length.
    * ``append`` adds a row. When the buffer is full the oldest entry is
      dropped and the whole viewport is redrawn.

    The sink is rewritten in full on every append, and on any write once
    ``persist_interval`` seconds have passed since the last rewrite, so the
    file always matches what is visible.
    """

    def __init__(
        self,
        display,
        sink: TextIO,
        capacity: int,
        viewport_origin: int = VIEWPORT_ORIGIN,
        clock=None,
        persist_interval: float = DEFAULT_PERSIST_INTERVAL,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self.display = display
        self.sink = sink
        self.capacity = capacity
        self.viewport_origin = viewport_origin
        self.clock = clock or SystemClock()
        self.persist_interval = persist_interval
        self._entries: deque[TimestampedEntry] = deque()
        self._last_persist = self.clock.monotonic()
        self._logger = get_logger()

    @classmethod
    def for_display(
        cls,
        display,
        sink: TextIO,
        clock=None,
        persist_interval: float = DEFAULT_PERSIST_INTERVAL,
    ) -> HistoryBuffer:
        """Size the buffer to the rows left on screen below the header."""
        height = display.viewport_height()
        capacity = max(1, height - VIEWPORT_ORIGIN - FOOTER_ROWS)
        return cls(
            display,
            sink,
            capacity,
            viewport_origin=VIEWPORT_ORIGIN,
            clock=clock,
            persist_interval=persist_interval,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimestampedEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[TimestampedEntry, ...]:
        return tuple(self._entries)

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.capacity

    @property
    def last_row(self) -> int:
        """Screen row of the last history line (the first row when empty)."""
        return self.viewport_origin + max(len(self._entries), 1) - 1

    def replace(self, entry: TimestampedEntry) -> None:
        """Overwrite the last row with *entry*.

        With an empty buffer the entry is only drawn, not stored.
        """
        if self._entries:
            self._entries[-1] = entry
        self.display.render(entry, self.last_row)
        self.maybe_persist()

    def append(self, entry: TimestampedEntry) -> None:
        """Add *entry* as a new row, scrolling when the viewport is full."""
        if self.is_full:
            self._entries.popleft()
            self._entries.append(entry)
            self.redraw()
        else:
            self._entries.append(entry)
            self.display.render(entry, self.last_row)
        self.persist()

    def redraw(self) -> None:
        """Clear the viewport and draw every entry top to bottom."""
        self.display.clear_rows(self.viewport_origin, self.capacity)
        for offset, entry in enumerate(self._entries):
            self.display.render(entry, self.viewport_origin + offset)

    def maybe_persist(self) -> bool:
        """Persist if the interval has passed. Returns True if it wrote."""
        if self.clock.monotonic() - self._last_persist >= self.persist_interval:
            self.persist()
            return True
        return False

    def persist(self) -> None:
        """Truncate the sink and write every entry, one per line."""
        try:
            self.sink.seek(0)
            self.sink.truncate()
            for entry in self._entries:
                self.sink.write(entry.to_line() + "\n")
            self.sink.flush()
        except (OSError, ValueError) as e:
            self._logger.error("history persist failed: %s", e)
            raise PersistenceError(f"Failed to write history log: {e}") from e

        self._last_persist = self.clock.monotonic()
        self._logger.debug("history persisted (%d entries)", len(self._entries))
