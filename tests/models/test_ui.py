"""Unit tests for TerminalDisplay.

Rich drops control codes for non-terminals, so every console here is
forced into terminal mode and writes to a StringIO buffer.
"""

from __future__ import annotations

import io
from datetime import datetime

import pytest
from rich.console import Console

from datimer.models.entry import (
    ClockTime,
    TimestampedEntry,
    elapsed_entry,
    start_entry,
)
from datimer.models.exceptions import RenderError
from datimer.models.ui import (
    HELP_LINE,
    START_ROW,
    TIME_COLUMN,
    TITLE,
    VIEWPORT_ORIGIN,
    TerminalDisplay,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _move(column: int, row: int) -> str:
    """ANSI cursor position sequence (1-based on the wire)."""
    return f"\x1b[{row + 1};{column + 1}H"


def _terminal_console(file=None) -> tuple[Console, io.StringIO]:
    buf = file or io.StringIO()
    con = Console(
        file=buf,
        force_terminal=True,
        color_system="standard",
        width=80,
        height=24,
        highlight=False,
    )
    return con, buf


class _BrokenFile(io.StringIO):
    def write(self, text):
        raise OSError("terminal went away")


# ===========================================================================
# Layout constants
# ===========================================================================


class TestLayout:
    def test_viewport_below_start_row(self):
        assert VIEWPORT_ORIGIN == START_ROW + 1

    def test_help_line_names_controls(self):
        assert "'p'" in HELP_LINE
        assert "'q'" in HELP_LINE
        assert "space" in HELP_LINE

    def test_time_column_fits_longest_label(self):
        assert TIME_COLUMN > len("Resumed at:")


# ===========================================================================
# TerminalDisplay
# ===========================================================================


class TestTerminalDisplayInit:
    def test_uses_provided_console(self):
        con, _ = _terminal_console()
        assert TerminalDisplay(con).console is con

    def test_creates_default_console(self):
        assert isinstance(TerminalDisplay().console, Console)

    def test_viewport_height_reads_console(self):
        con, _ = _terminal_console()
        assert TerminalDisplay(con).viewport_height() == 24


class TestRender:
    def test_label_at_column_zero(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).render(elapsed_entry(5), 6)
        out = buf.getvalue()
        assert _move(0, 6) in out
        assert out.index(_move(0, 6)) < out.index("Elapsed:")

    def test_time_at_fixed_column(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).render(elapsed_entry(3725), 6)
        out = buf.getvalue()
        assert _move(TIME_COLUMN, 6) in out
        assert out.index(_move(TIME_COLUMN, 6)) < out.index("01:02:05")

    def test_custom_time_column(self):
        con, buf = _terminal_console()
        TerminalDisplay(con, time_column=20).render(elapsed_entry(1), 4)
        assert _move(20, 4) in buf.getvalue()

    def test_erases_row_first(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).render(elapsed_entry(1), 4)
        assert f"{_move(0, 4)}\x1b[2K" in buf.getvalue()

    def test_bold_time(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).render(elapsed_entry(1, bold=True), 4)
        assert "\x1b[1m00:00:01" in buf.getvalue()

    def test_no_trailing_newline(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).render(
            TimestampedEntry("Paused at:", ClockTime(10, 0, 0)), 4
        )
        assert "\n" not in buf.getvalue()

    def test_write_failure_raises_render_error(self):
        con, _ = _terminal_console(_BrokenFile())
        with pytest.raises(RenderError, match="terminal went away"):
            TerminalDisplay(con).render(elapsed_entry(1), 4)


class TestStart:
    def test_hides_cursor_and_clears(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).start(start_entry(datetime(2024, 1, 1, 10, 0, 0)))
        out = buf.getvalue()
        assert "\x1b[?25l" in out
        assert "\x1b[2J" in out

    def test_draws_header_and_start_time(self):
        con, buf = _terminal_console()
        display = TerminalDisplay(con)
        display.start(start_entry(datetime(2024, 1, 1, 10, 0, 0)))
        out = buf.getvalue()
        assert TITLE in out
        assert HELP_LINE in out
        assert _move(0, START_ROW) in out
        assert "Start time:" in out
        assert "10:00:00" in out


class TestClearRows:
    def test_erases_each_row(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).clear_rows(4, 3)
        out = buf.getvalue()
        for row in (4, 5, 6):
            assert f"{_move(0, row)}\x1b[2K" in out
        assert _move(0, 7) not in out


class TestRestore:
    def test_shows_cursor_at_row(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).restore(9)
        out = buf.getvalue()
        assert _move(0, 9) in out
        assert "\x1b[?25h" in out

    def test_ends_with_newline(self):
        con, buf = _terminal_console()
        TerminalDisplay(con).restore(9)
        assert buf.getvalue().endswith("\n")

    def test_write_failure_raises_render_error(self):
        con, _ = _terminal_console(_BrokenFile())
        with pytest.raises(RenderError):
            TerminalDisplay(con).restore(9)
