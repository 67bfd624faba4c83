"""Console utilities for Datimer."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = False) -> Console:
    """Console for the stopwatch screen.

    Highlighting is off by default: the display styles every entry itself
    and rich would otherwise recolor the digits of each time value.
    """
    return Console(highlight=highlight)


@lru_cache(maxsize=1)
def get_error_console() -> Console:
    """Console on stderr for fatal errors, printed after the screen is restored."""
    return Console(stderr=True, highlight=False)
