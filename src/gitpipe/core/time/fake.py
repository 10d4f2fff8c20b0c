"""Fake Time implementation for testing.

FakeTime is an in-memory clock that advances by a fixed tick per reading,
enabling exact assertions on recorded durations.
"""

from datetime import UTC, datetime

from gitpipe.core.time.abc import Time

DEFAULT_FAKE_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeTime(Time):
    """In-memory fake clock.

    Each monotonic() call returns the current reading and then advances it by
    ``tick`` seconds, so a start/stop pair measures exactly one tick. now()
    always returns the same instant.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(
        self,
        *,
        start: float = 0.0,
        tick: float = 0.0,
        current_time: datetime = DEFAULT_FAKE_NOW,
    ) -> None:
        """Create FakeTime.

        Args:
            start: Initial monotonic reading
            tick: Seconds added after every monotonic() call
            current_time: Value returned by now()
        """
        self._now = start
        self._tick = tick
        self._current_time = current_time
        self._readings: list[float] = []

    @property
    def readings(self) -> list[float]:
        """Get the monotonic values returned so far.

        This property is for test assertions only.
        """
        return self._readings

    def monotonic(self) -> float:
        """Return the current reading and advance by one tick."""
        now = self._now
        self._readings.append(now)
        self._now += self._tick
        return now

    def now(self) -> datetime:
        return self._current_time
