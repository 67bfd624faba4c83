"""Terminal output for the stopwatch: header, history rows, restore."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from .entry import TimestampedEntry
from .exceptions import RenderError

TITLE = "DATIMER"
HELP_LINE = "Press 'p' or space to pause/resume, 'q' to quit"

TITLE_ROW = 0
HELP_ROW = 1
START_ROW = 3
VIEWPORT_ORIGIN = 4

# Column where every time value starts, so they line up under each other
TIME_COLUMN = 14


class TerminalDisplay:
    """Draws entries at absolute (column, row) positions.

    Each draw is self-contained: ``render(entry, row)`` erases the row and
    writes the entry, so the caller only has to track row numbers.
    """

    def __init__(self, console: Console | None = None, time_column: int = TIME_COLUMN):
        self.console = console or Console(highlight=False)
        self.time_column = time_column

    @contextmanager
    def _writing(self) -> Iterator[None]:
        try:
            yield
        except OSError as e:
            raise RenderError(f"Failed to write to terminal: {e}") from e

    def viewport_height(self) -> int:
        """Terminal height in rows, read once at startup."""
        return self.console.size.height

    def start(self, start: TimestampedEntry) -> None:
        """Clear the screen and draw the header and the start time."""
        with self._writing():
            self.console.control(
                Control.show_cursor(False), Control.clear(), Control.home()
            )
            self.console.control(Control.move_to(0, TITLE_ROW))
            self.console.print(Text(TITLE, style="bold"), end="", soft_wrap=True)
            self.console.control(Control.move_to(0, HELP_ROW))
            self.console.print(Text(HELP_LINE), end="", soft_wrap=True)
        self.render(start, START_ROW)

    def render(self, entry: TimestampedEntry, row: int) -> None:
        """Draw one entry: label at column 0, time at the time column."""
        with self._writing():
            self.console.control(
                Control.move_to(0, row), Control((ControlType.ERASE_IN_LINE, 2))
            )
            self.console.print(
                Text(entry.label, style=entry.style.label_style()),
                end="",
                soft_wrap=True,
            )
            self.console.control(Control.move_to(self.time_column, row))
            self.console.print(
                Text(str(entry.time), style=entry.style.time_style()),
                end="",
                soft_wrap=True,
            )

    def clear_rows(self, first_row: int, count: int) -> None:
        with self._writing():
            for row in range(first_row, first_row + count):
                self.console.control(
                    Control.move_to(0, row), Control((ControlType.ERASE_IN_LINE, 2))
                )

    def restore(self, row: int) -> None:
        """Park the cursor at *row* and show it again.

        Rich closes every styled segment with a reset, so no color is left
        active at this point.
        """
        with self._writing():
            self.console.control(Control.move_to(0, row), Control.show_cursor(True))
            self.console.line()
