"""Wall-clock timing of git invocations."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import timedelta

from gitpipe.core.time.abc import Time

logger = logging.getLogger(__name__)


def format_command_time(elapsed_seconds: float, command_line: str) -> str:
    """Format a timing line, e.g. ``[0:00:00.120000] git log --oneline``."""
    return f"[{timedelta(seconds=elapsed_seconds)}] {command_line}"


class CommandTimer:
    """Timer whose start and stop may happen in different calls.

    Deferred output streams are opened in one call and closed by the caller
    much later, so they hold a CommandTimer instead of using time_command().
    """

    def __init__(self, executable: str, command: Sequence[str], time: Time) -> None:
        self._command_line = " ".join([executable, *command])
        self._time = time
        self._start = time.monotonic()

    def stop(self) -> float:
        """Log the elapsed time since construction and return it."""
        elapsed = self._time.monotonic() - self._start
        logger.debug(format_command_time(elapsed, self._command_line))
        return elapsed


@contextmanager
def time_command(executable: str, command: Sequence[str], time: Time) -> Iterator[None]:
    """Log how long the enclosed block took, whether or not it raised.

    Args:
        executable: Git executable name, used as the first word of the logged line
        command: Argument vector of the timed command
        time: Clock to read
    """
    timer = CommandTimer(executable, command, time)
    try:
        yield
    finally:
        timer.stop()
