"""Clock abstraction for testing.

This module provides an ABC for the clock readings used to time git commands
and bound their termination, so tests can assert on recorded durations and
timestamps without depending on wall time.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic clock reading in seconds.

        Only differences between two readings are meaningful.
        """
        ...

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...
