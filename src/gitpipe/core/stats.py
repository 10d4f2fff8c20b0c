"""Process counter for diagnostics."""

import threading


class ExecutionStats:
    """Counts closed git process sessions, successful or not.

    Safe to share between threads. Diagnostic only: nothing in gitpipe makes
    decisions based on the count.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processes_run = 0

    @property
    def processes_run(self) -> int:
        """Number of sessions closed so far."""
        with self._lock:
            return self._processes_run

    def record_process(self) -> None:
        """Count one closed session."""
        with self._lock:
            self._processes_run += 1


# Used by executors constructed without an explicit stats collector
DEFAULT_STATS = ExecutionStats()
