"""History entries shown in the stopwatch viewport and written to the log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from rich.style import Style

ELAPSED_LABEL = "Elapsed:"
PAUSED_LABEL = "Paused at:"
RESUMED_LABEL = "Resumed at:"
START_LABEL = "Start time:"


class Color(Enum):
    """Foreground colors used by the stopwatch."""

    RESET = None
    CYAN = "cyan"
    GREEN = "green"
    RED = "red"


@dataclass(frozen=True)
class EntryStyle:
    """Display style of an entry. Purely cosmetic."""

    color: Color = Color.RESET
    bold: bool = False
    italic: bool = False

    def label_style(self) -> Style:
        """Style for the label text (color only)."""
        return Style(color=self.color.value)

    def time_style(self) -> Style:
        """Style for the time text (color plus emphasis)."""
        return Style(color=self.color.value, bold=self.bold, italic=self.italic)


@dataclass(frozen=True, order=True)
class ClockTime:
    """Hours, minutes and seconds as shown on screen.

    Durations are not wrapped at 24 hours, so a 30 hour run shows as
    ``30:00:00``. Times of day come from a datetime and stay within 0-23.
    """

    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total: float) -> ClockTime:
        """Build from a duration in seconds; fractions are dropped."""
        secs = max(0, int(total))
        return cls(secs // 3600, (secs % 3600) // 60, secs % 60)

    @classmethod
    def from_datetime(cls, moment: datetime) -> ClockTime:
        return cls(moment.hour, moment.minute, moment.second)

    @classmethod
    def parse(cls, text: str) -> ClockTime:
        """Parse ``HH:MM:SS``. Raises ValueError on anything else."""
        parts = text.strip().split(":")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time: {text!r}")
        hours, minutes, seconds = (int(p) for p in parts)
        if minutes > 59 or seconds > 59:
            raise ValueError(f"Invalid time: {text!r}")
        return cls(hours, minutes, seconds)

    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"


@dataclass(frozen=True)
class TimestampedEntry:
    """A label paired with a time and a display style."""

    label: str
    time: ClockTime
    style: EntryStyle = field(default_factory=EntryStyle, compare=False)

    def to_line(self) -> str:
        """Format used in the history log file."""
        return f"{self.label} {self.time}"

    @classmethod
    def from_line(cls, line: str) -> TimestampedEntry:
        """Read back a line written by to_line(). The style is not stored."""
        label, sep, time_text = line.rstrip("\n").rpartition(" ")
        if not sep or not label:
            raise ValueError(f"Invalid history line: {line!r}")
        return cls(label, ClockTime.parse(time_text))


def elapsed_entry(
    seconds: float, *, bold: bool = False, italic: bool = False
) -> TimestampedEntry:
    """Create an "Elapsed:" entry for a duration."""
    return TimestampedEntry(
        ELAPSED_LABEL,
        ClockTime.from_seconds(seconds),
        EntryStyle(Color.RESET, bold=bold, italic=italic),
    )


def paused_entry(moment: datetime) -> TimestampedEntry:
    return TimestampedEntry(
        PAUSED_LABEL, ClockTime.from_datetime(moment), EntryStyle(Color.RED)
    )


def resumed_entry(moment: datetime) -> TimestampedEntry:
    return TimestampedEntry(
        RESUMED_LABEL, ClockTime.from_datetime(moment), EntryStyle(Color.GREEN)
    )


def start_entry(moment: datetime) -> TimestampedEntry:
    return TimestampedEntry(
        START_LABEL, ClockTime.from_datetime(moment), EntryStyle(Color.CYAN)
    )
