"""Stopwatch domain: entries, history buffer, timer state and event loop."""

from .entry import ClockTime, Color, EntryStyle, TimestampedEntry
from .exceptions import DatimerError, PersistenceError, RenderError, TerminalInitError
from .history import HistoryBuffer
from .keyboard import InputListener, KeyboardHandler
from .session import StopwatchSession
from .state import TimerStateMachine
from .ui import TerminalDisplay

__all__ = [
    "ClockTime",
    "Color",
    "EntryStyle",
    "TimestampedEntry",
    "HistoryBuffer",
    "TimerStateMachine",
    "StopwatchSession",
    "KeyboardHandler",
    "InputListener",
    "TerminalDisplay",
    "DatimerError",
    "TerminalInitError",
    "RenderError",
    "PersistenceError",
]
