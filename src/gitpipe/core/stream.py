"""One-pass text streams over a command's stdout.

OutputStream is the interface handed back by GitCommands.open_output_stream().
ProcessStdoutReader implements it over a live ProcessSession: output is read
as the caller pulls it, and the process is only waited for and exit-checked
when the stream is closed.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from types import TracebackType
from typing import IO

from gitpipe.core.session import ProcessSession
from gitpipe.core.timing import CommandTimer

logger = logging.getLogger(__name__)


class OutputStream(ABC):
    """Readable, closeable, one-pass text stream of command output.

    Iterating yields lines including their trailing newline. Use as a context
    manager, or call close() explicitly: closing is what reports failures.
    """

    @abstractmethod
    def read(self, size: int = -1) -> str:
        """Read up to size characters, or everything left if size is negative."""
        ...

    @abstractmethod
    def readline(self) -> str:
        """Read one line including its newline; empty string at end of output."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        ...

    @property
    @abstractmethod
    def closed(self) -> bool: ...

    def readlines(self) -> list[str]:
        return list(self)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def __enter__(self) -> "OutputStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ProcessStdoutReader(OutputStream):
    """Stdout of a running git process. MUST be closed.

    close() drains any unread output, waits for the process, checks its exit
    code and records the command's timing. It runs once: closing again, or the
    finalizer running after an explicit close, does nothing.
    """

    def __init__(self, session: ProcessSession, timer: CommandTimer | None = None) -> None:
        self._session = session
        self._timer = timer
        self._closed = False

    @property
    def session(self) -> ProcessSession:
        return self._session

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> str:
        return self._stdout().read(size)

    def readline(self) -> str:
        return self._stdout().readline()

    def close(self) -> None:
        self._release(check=True)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._release(check=exc_type is None)

    def __del__(self) -> None:
        if getattr(self, "_closed", True):
            return
        logger.warning("Output stream was never closed: %s", self._session.command_line)
        self._release(check=False)

    def _stdout(self) -> IO[str]:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return self._session.stdout

    def _release(self, *, check: bool) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._session.close(check=check)
        finally:
            if self._timer is not None:
                self._timer.stop()
