"""Shared test fixtures and configuration.

Keeps log and config files inside *tmp_path* and provides in-memory
stand-ins for the clock, the terminal and the keyboard.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from datimer.models.exceptions import TerminalInitError


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Redirect platformdirs and reset the logger singleton for every test."""
    import datimer.utils.logger as logger_mod
    from datimer.services.config_service import get_config_service

    logger_mod._logger = None
    logging.getLogger("datimer").handlers.clear()
    get_config_service.cache_clear()

    with patch("datimer.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        with patch(
            "datimer.services.config_service.user_config_dir",
            return_value=str(tmp_path / "config"),
        ):
            yield

    for handler in logging.getLogger("datimer").handlers:
        handler.close()
    logging.getLogger("datimer").handlers.clear()
    logger_mod._logger = None
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock. Wall time moves together with monotonic time."""

    def __init__(self, wall: datetime | None = None, mono: float = 1000.0):
        self.start_wall = wall or datetime(2024, 1, 1, 10, 0, 0)
        self.start_mono = mono
        self.mono = mono

    def now(self) -> datetime:
        return self.start_wall + timedelta(seconds=self.mono - self.start_mono)

    def monotonic(self) -> float:
        return self.mono

    def advance(self, seconds: float) -> None:
        self.mono += seconds


class RecordingDisplay:
    """Records every draw call and keeps the last entry drawn per row."""

    def __init__(self, height: int = 24):
        self.height = height
        self.rows = {}
        self.calls = []

    def viewport_height(self) -> int:
        return self.height

    def start(self, entry) -> None:
        self.calls.append(("start", entry))
        self.rows[3] = entry

    def render(self, entry, row: int) -> None:
        self.calls.append(("render", row, entry))
        self.rows[row] = entry

    def clear_rows(self, first_row: int, count: int) -> None:
        self.calls.append(("clear", first_row, count))
        for row in range(first_row, first_row + count):
            self.rows.pop(row, None)

    def restore(self, row: int) -> None:
        self.calls.append(("restore", row))

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeKeyboard:
    """Hands out a fixed list of keys, then reports end of input."""

    def __init__(self, keys=(), fail_enable: bool = False):
        self.keys = list(keys)
        self.fail_enable = fail_enable
        self.enabled = False
        self.disabled = False

    def enable(self) -> None:
        if self.fail_enable:
            raise TerminalInitError("Could not enable cbreak mode: not a tty")
        self.enabled = True

    def read_key(self):
        if self.keys:
            return self.keys.pop(0)
        return None

    def disable(self) -> None:
        self.disabled = True


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture()
def make_keyboard():
    """Factory for FakeKeyboard instances."""
    return FakeKeyboard
