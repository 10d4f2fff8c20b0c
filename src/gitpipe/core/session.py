"""Lifecycle of a single git child process.

A ProcessSession owns exactly one spawned process, from spawn through close:

- stderr is always piped and drained by a background thread, so the child can
  never block on a full stderr pipe while the caller is busy with stdout
- stdout/stdin are piped only when the execution mode asks for them
- close() finishes the streams, waits for exit bounded by the configured
  timeout, checks the exit code, and counts the process exactly once

Pipes are opened in binary and wrapped as text without newline translation,
so ``\\r\\n`` and a lone ``\\r`` reach the caller exactly as git wrote them.

Sessions are context managers. Leaving the block closes the session; if the
block raised, the close still happens but its own failures are logged rather
than raised, so the original exception is the one the caller sees.
"""

import io
import logging
import os
import subprocess
import sys
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import TracebackType
from typing import IO, Any, NoReturn

from gitpipe.core.config import GitPipeConfig
from gitpipe.core.errors import ErrorKind, GitCommandError, GitNotFoundError
from gitpipe.core.stats import ExecutionStats
from gitpipe.core.time.abc import Time
from gitpipe.core.time.real import RealTime

logger = logging.getLogger(__name__)
stderr_logger = logging.getLogger(f"{__name__}.stderr")

IS_WINDOWS = sys.platform == "win32"


class ProcessSession:
    """One spawned git process and its redirected streams.

    Attributes:
        process: The underlying Popen handle (binary pipes)
        command: Validated argument vector (without the executable)
        argv: Full argument vector including the executable
        started_at: When the process was spawned
        exit_code: Exit code, None until the process has been waited for
    """

    def __init__(
        self,
        process: subprocess.Popen[bytes],
        *,
        command: Sequence[str],
        argv: Sequence[str],
        config: GitPipeConfig,
        stats: ExecutionStats,
        time: Time,
    ) -> None:
        self.process = process
        self.command = tuple(command)
        self.argv = tuple(argv)
        self.started_at = time.now()
        self.exit_code: int | None = None
        self._config = config
        self._stats = stats
        self._time = time
        self._closed = False
        self._stdin = _text_stream(process.stdin, config.encoding, write_through=True)
        self._stdout = _text_stream(process.stdout, config.encoding)
        self._stdout_drain: threading.Thread | None = None
        self._stderr_lines: list[str] = []
        self._stderr_thread = threading.Thread(
            target=self._drain_stderr,
            name=f"git-stderr-{process.pid}",
            daemon=True,
        )
        self._stderr_thread.start()

    @classmethod
    def start(
        cls,
        command: Sequence[str],
        *,
        config: GitPipeConfig,
        stats: ExecutionStats,
        redirect_stdin: bool,
        redirect_stdout: bool,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        time: Time | None = None,
    ) -> "ProcessSession":
        """Spawn git with an already-validated command.

        Args:
            command: Validated argument vector (subcommand first)
            config: Executable, timeout and encoding settings
            stats: Counter incremented when the session closes
            redirect_stdin: Pipe stdin so the caller can write to it. When False
                the child reads from the null device, never from our stdin.
            redirect_stdout: Pipe stdout so the caller can read it. When False
                the child writes straight to our stdout.
            cwd: Working directory (None = inherit)
            env: Complete child environment (None = inherit)
            time: Clock for the start timestamp and the close deadline

        Returns:
            A running session; the caller must close it

        Raises:
            GitNotFoundError: If the git executable cannot be found
        """
        argv = [config.git_executable, *command]
        environment = os.environ if env is None else env

        logger.debug("Starting process: %s", " ".join(argv))
        logger.debug("  Working directory: %s", cwd if cwd is not None else os.getcwd())
        logger.debug("  ENV[GIT_DIR]:      %s", environment.get("GIT_DIR", ""))

        kwargs: dict[str, Any] = {}
        if IS_WINDOWS:
            kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW

        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE if redirect_stdin else subprocess.DEVNULL,
                stdout=subprocess.PIPE if redirect_stdout else None,
                stderr=subprocess.PIPE,
                cwd=cwd,
                env=None if env is None else dict(env),
                **kwargs,
            )
        except FileNotFoundError as e:
            raise GitNotFoundError(config.git_executable, command) from e

        logger.debug("Started pid=%s", process.pid)
        return cls(
            process,
            command=command,
            argv=argv,
            config=config,
            stats=stats,
            time=time if time is not None else RealTime(),
        )

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def has_stdin(self) -> bool:
        return self._stdin is not None

    @property
    def has_stdout(self) -> bool:
        return self._stdout is not None

    @property
    def stdin(self) -> IO[str]:
        """Writer for the child's stdin.

        Raises:
            ValueError: If stdin was not redirected
        """
        if self._stdin is None:
            raise ValueError(f"stdin was not redirected for: {self.command_line}")
        return self._stdin

    @property
    def stdout(self) -> IO[str]:
        """Reader for the child's stdout.

        Raises:
            ValueError: If stdout was not redirected
        """
        if self._stdout is None:
            raise ValueError(f"stdout was not redirected for: {self.command_line}")
        return self._stdout

    @property
    def stderr_lines(self) -> list[str]:
        """Non-blank stderr lines seen so far. Diagnostic only."""
        return list(self._stderr_lines)

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self, *, check: bool = True) -> None:
        """Finish the streams, wait for exit, and verify the exit code.

        Runs at most once; later calls do nothing. The process counter is
        incremented exactly once whatever the outcome. Reading the rest of
        stdout and waiting for exit share one timeout budget, so a child that
        keeps stdout open without exiting still times out on schedule.

        Args:
            check: Raise on timeout or non-zero exit. With check=False (used
                while another exception is already propagating) the failure is
                logged instead, and unread stdout is discarded by closing the
                pipe rather than by reading it to the end.

        Raises:
            GitCommandError: TIMED_OUT or NON_ZERO_EXIT, only when check=True
        """
        if self._closed:
            return
        self._closed = True

        deadline = self._time.monotonic() + self._config.timeout_seconds
        try:
            self._finish_streams(drain=check)
            self._wait_for_exit(deadline)
            self._check_exit_code()
        except GitCommandError as e:
            if check:
                raise
            logger.warning("Suppressed failure while closing '%s': %s", self.command_line, e)
        finally:
            self._stats.record_process()

    def __enter__(self) -> "ProcessSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close(check=exc_type is None)

    def _drain_stderr(self) -> None:
        stderr = _text_stream(self.process.stderr, self._config.encoding)
        if stderr is None:
            return
        try:
            for line in stderr:
                text = line.rstrip()
                if text.strip():
                    self._stderr_lines.append(text)
                    stderr_logger.debug(text)
        finally:
            stderr.close()

    def _finish_streams(self, *, drain: bool) -> None:
        stdin = self._stdin
        if stdin is not None and not stdin.closed:
            try:
                stdin.close()
            except BrokenPipeError:
                # Child exited without reading everything written to it
                logger.debug("stdin already closed by pid=%s", self.pid)

        stdout = self._stdout
        if stdout is None or stdout.closed:
            return
        if not drain:
            stdout.close()
            return
        # Reading to EOF keeps the child from blocking on a full pipe. It runs on
        # its own thread so _wait_for_exit() can bound it with the timeout.
        self._stdout_drain = threading.Thread(
            target=_read_to_end,
            args=(stdout,),
            name=f"git-stdout-{self.pid}",
            daemon=True,
        )
        self._stdout_drain.start()

    def _wait_for_exit(self, deadline: float) -> None:
        if self._stdout_drain is not None:
            self._stdout_drain.join(timeout=self._remaining(deadline))
            if self._stdout_drain.is_alive():
                self._timed_out()

        try:
            self.exit_code = self.process.wait(timeout=self._remaining(deadline))
        except subprocess.TimeoutExpired:
            self._timed_out()

        self._join_stderr()
        logger.debug("pid=%s exited with code %s", self.pid, self.exit_code)

    def _remaining(self, deadline: float) -> float:
        return max(0.0, deadline - self._time.monotonic())

    def _timed_out(self) -> NoReturn:
        if self._config.kill_on_timeout:
            logger.debug("Killing pid=%s after %ss", self.pid, self._config.timeout_seconds)
            self.process.kill()
            self.process.wait()
            if self._stdout_drain is not None:
                self._stdout_drain.join(timeout=self._config.timeout_seconds)
            self._join_stderr()
        raise self._error("Command did not terminate.", ErrorKind.TIMED_OUT) from None

    def _join_stderr(self) -> None:
        self._stderr_thread.join(timeout=self._config.timeout_seconds)
        if self._stderr_thread.is_alive():
            # Something else inherited the stderr pipe and is keeping it open
            logger.debug("stderr of pid=%s still open after exit", self.pid)

    def _check_exit_code(self) -> None:
        if self.exit_code != 0:
            raise self._error("Command exited with error code.", ErrorKind.NON_ZERO_EXIT)

    def _error(self, message: str, kind: ErrorKind) -> GitCommandError:
        return GitCommandError(
            message,
            kind=kind,
            command=self.command,
            argv=self.argv,
            exit_code=self.exit_code,
            stderr_lines=self.stderr_lines,
            session=self,
        )


def _text_stream(
    pipe: IO[bytes] | None, encoding: str, *, write_through: bool = False
) -> io.TextIOWrapper | None:
    if pipe is None:
        return None
    return io.TextIOWrapper(
        pipe,
        encoding=encoding,
        errors="replace",
        newline="",
        write_through=write_through,
    )


def _read_to_end(stdout: IO[str]) -> None:
    try:
        while stdout.read(8192):
            pass
    finally:
        stdout.close()
