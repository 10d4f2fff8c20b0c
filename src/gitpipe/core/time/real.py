"""Real clock implementation using time.monotonic() and datetime.now()."""

import time
from datetime import UTC, datetime

from gitpipe.core.time.abc import Time


class RealTime(Time):
    """Production implementation using the system clocks."""

    def monotonic(self) -> float:
        return time.monotonic()

    def now(self) -> datetime:
        return datetime.now(UTC)
