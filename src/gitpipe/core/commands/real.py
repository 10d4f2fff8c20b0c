"""Production GitCommands implementation using subprocess.

This module provides the real implementation that runs actual git processes.
"""

import os
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import IO, TypeVar

from gitpipe.core.commands.abc import GitCommands
from gitpipe.core.config import GitPipeConfig
from gitpipe.core.session import ProcessSession
from gitpipe.core.stats import DEFAULT_STATS, ExecutionStats
from gitpipe.core.stream import OutputStream, ProcessStdoutReader
from gitpipe.core.time.abc import Time
from gitpipe.core.time.real import RealTime
from gitpipe.core.timing import CommandTimer, time_command
from gitpipe.core.validation import validate_command

T = TypeVar("T")


class RealGitCommands(GitCommands):
    """Production implementation using subprocess.

    Each call spawns one git process; nothing is pooled or reused.
    """

    def __init__(
        self,
        *,
        config: GitPipeConfig | None = None,
        stats: ExecutionStats | None = None,
        time: Time | None = None,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        """Create a git command runner.

        Args:
            config: Executable, timeout and encoding (None = defaults)
            stats: Process counter (None = the shared module-level counter)
            time: Clock used for timing commands
            cwd: Working directory for every command (None = inherit)
            env: Variables to add to the inherited environment, e.g. GIT_DIR
            stdout: Where command_noisy() forwards output (None = sys.stdout at
                the time of the call)
        """
        self._config = config if config is not None else GitPipeConfig()
        self._stats = stats if stats is not None else DEFAULT_STATS
        self._time = time if time is not None else RealTime()
        self._cwd = cwd
        self._env = dict(env) if env is not None else None
        self._stdout = stdout

    @property
    def config(self) -> GitPipeConfig:
        return self._config

    @property
    def stats(self) -> ExecutionStats:
        return self._stats

    def command(self, *command: str) -> str:
        return self.command_output_pipe(lambda stdout: stdout.read(), *command)

    def command_oneline(self, *command: str) -> str | None:
        def first_line(stdout: IO[str]) -> str | None:
            line = stdout.readline()
            if not line:
                return None
            return line.rstrip("\r\n")

        return self.command_output_pipe(first_line, *command)

    def command_noisy(self, *command: str) -> None:
        target = self._stdout if self._stdout is not None else sys.stdout

        def forward(stdout: IO[str]) -> None:
            for line in stdout:
                target.write(line)
                target.flush()

        self.command_output_pipe(forward, *command)

    def command_output_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        with time_command(self._config.git_executable, command, self._time):
            validated = validate_command(command)
            with self._start(validated, redirect_stdin=False, redirect_stdout=True) as session:
                return handler(session.stdout)

    def command_input_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        with time_command(self._config.git_executable, command, self._time):
            validated = validate_command(command)
            with self._start(validated, redirect_stdin=True, redirect_stdout=False) as session:
                return handler(session.stdin)

    def command_input_output_pipe(
        self, handler: Callable[[IO[str], IO[str]], T], *command: str
    ) -> T:
        with time_command(self._config.git_executable, command, self._time):
            validated = validate_command(command)
            with self._start(validated, redirect_stdin=True, redirect_stdout=True) as session:
                return handler(session.stdin, session.stdout)

    def open_output_stream(self, *command: str) -> OutputStream:
        timer = CommandTimer(self._config.git_executable, command, self._time)
        try:
            validated = validate_command(command)
            session = self._start(validated, redirect_stdin=False, redirect_stdout=True)
        except Exception:
            timer.stop()
            raise
        return ProcessStdoutReader(session, timer)

    def _start(
        self, command: Sequence[str], *, redirect_stdin: bool, redirect_stdout: bool
    ) -> ProcessSession:
        env = None
        if self._env is not None:
            env = {**os.environ, **self._env}
        return ProcessSession.start(
            command,
            config=self._config,
            stats=self._stats,
            redirect_stdin=redirect_stdin,
            redirect_stdout=redirect_stdout,
            cwd=self._cwd,
            env=env,
            time=self._time,
        )
