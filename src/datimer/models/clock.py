"""Wall-clock and monotonic time sources."""

import time
from datetime import datetime


class SystemClock:
    """Reads the real clocks.

    ``now()`` is for what the user sees (time of day), ``monotonic()`` is for
    measuring durations and never jumps backwards.
    """

    def now(self) -> datetime:
        return datetime.now()

    def monotonic(self) -> float:
        return time.monotonic()
