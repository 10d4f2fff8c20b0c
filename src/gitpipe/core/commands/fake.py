"""Fake GitCommands implementation for testing.

FakeGitCommands answers commands from canned output configured at
construction, so code built on GitCommands can be tested without git.
"""

import io
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import IO, TypeVar

from gitpipe.core.commands.abc import GitCommands
from gitpipe.core.errors import ErrorKind, GitCommandError
from gitpipe.core.stats import ExecutionStats
from gitpipe.core.stream import OutputStream
from gitpipe.core.validation import validate_command

T = TypeVar("T")


class StaticOutputStream(OutputStream):
    """OutputStream over a fixed string.

    close() counts the process and raises the configured failure, mirroring a
    real stream whose process is only reaped and checked when it is closed.
    """

    def __init__(
        self,
        output: str,
        failure: GitCommandError | None = None,
        stats: ExecutionStats | None = None,
    ) -> None:
        self._buffer = io.StringIO(output)
        self._failure = failure
        self._stats = stats

    @property
    def closed(self) -> bool:
        return self._buffer.closed

    def read(self, size: int = -1) -> str:
        return self._buffer.read(size)

    def readline(self) -> str:
        return self._buffer.readline()

    def close(self) -> None:
        if self._buffer.closed:
            return
        self._buffer.close()
        if self._stats is not None:
            self._stats.record_process()
        if self._failure is not None:
            raise self._failure


class FakeGitCommands(GitCommands):
    """In-memory fake implementation of git command execution.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Commands are looked up by their full argument tuple

    Commands not in ``outputs`` succeed with empty output. Commands in
    ``exit_codes`` with a non-zero value fail with NON_ZERO_EXIT after the
    handler (if any) has run; commands in ``timeouts`` fail with TIMED_OUT.
    Invalid subcommand names are rejected exactly as the real implementation
    rejects them.

    Examples:
        >>> git = FakeGitCommands(outputs={("rev-parse", "HEAD"): "abc123\\n"})
        >>> git.command_oneline("rev-parse", "HEAD")
        'abc123'
        >>> git.commands
        [('rev-parse', 'HEAD')]
    """

    def __init__(
        self,
        *,
        outputs: Mapping[tuple[str, ...], str] | None = None,
        exit_codes: Mapping[tuple[str, ...], int] | None = None,
        timeouts: Sequence[tuple[str, ...]] = (),
        stats: ExecutionStats | None = None,
        stdout: IO[str] | None = None,
        git_executable: str = "git",
    ) -> None:
        """Initialize fake with predetermined command results.

        Args:
            outputs: Stdout text per command
            exit_codes: Exit code per command (default 0)
            timeouts: Commands that never terminate
            stats: Counter incremented once per accepted command
            stdout: Where command_noisy() writes (None = sys.stdout)
            git_executable: Executable name reported in errors
        """
        self._outputs = dict(outputs or {})
        self._exit_codes = dict(exit_codes or {})
        self._timeouts = set(timeouts)
        self._stats = stats if stats is not None else ExecutionStats()
        self._stdout = stdout
        self._git_executable = git_executable
        self._commands: list[tuple[str, ...]] = []
        self._inputs: list[tuple[tuple[str, ...], str]] = []

    @property
    def stats(self) -> ExecutionStats:
        return self._stats

    @property
    def commands(self) -> list[tuple[str, ...]]:
        """Get every accepted command in call order.

        This property is for test assertions only.
        """
        return self._commands.copy()

    @property
    def inputs(self) -> list[tuple[tuple[str, ...], str]]:
        """Get (command, text written to stdin) for every command given stdin.

        This property is for test assertions only.
        """
        return self._inputs.copy()

    def command(self, *command: str) -> str:
        return self.command_output_pipe(lambda stdout: stdout.read(), *command)

    def command_oneline(self, *command: str) -> str | None:
        def first_line(stdout: IO[str]) -> str | None:
            line = stdout.readline()
            return line.rstrip("\r\n") if line else None

        return self.command_output_pipe(first_line, *command)

    def command_noisy(self, *command: str) -> None:
        target = self._stdout if self._stdout is not None else sys.stdout
        self.command_output_pipe(lambda stdout: target.write(stdout.read()), *command)

    def command_output_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        validated = self._accept(command)
        try:
            result = handler(io.StringIO(self._outputs.get(validated, "")))
        finally:
            self._stats.record_process()
        self._check(validated)
        return result

    def command_input_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        validated = self._accept(command)
        stdin = _RecordingInput()
        try:
            result = handler(stdin)
        finally:
            self._inputs.append((validated, stdin.value))
            self._stats.record_process()
        self._check(validated)
        return result

    def command_input_output_pipe(
        self, handler: Callable[[IO[str], IO[str]], T], *command: str
    ) -> T:
        validated = self._accept(command)
        stdin = _RecordingInput()
        try:
            result = handler(stdin, io.StringIO(self._outputs.get(validated, "")))
        finally:
            self._inputs.append((validated, stdin.value))
            self._stats.record_process()
        self._check(validated)
        return result

    def open_output_stream(self, *command: str) -> OutputStream:
        validated = self._accept(command)
        return StaticOutputStream(
            self._outputs.get(validated, ""), self._failure(validated), self._stats
        )

    def _accept(self, command: Sequence[str]) -> tuple[str, ...]:
        validated = validate_command(command)
        self._commands.append(validated)
        return validated

    def _check(self, command: tuple[str, ...]) -> None:
        failure = self._failure(command)
        if failure is not None:
            raise failure

    def _failure(self, command: tuple[str, ...]) -> GitCommandError | None:
        argv = (self._git_executable, *command)
        if command in self._timeouts:
            return GitCommandError(
                "Command did not terminate.",
                kind=ErrorKind.TIMED_OUT,
                command=command,
                argv=argv,
            )
        exit_code = self._exit_codes.get(command, 0)
        if exit_code != 0:
            return GitCommandError(
                "Command exited with error code.",
                kind=ErrorKind.NON_ZERO_EXIT,
                command=command,
                argv=argv,
                exit_code=exit_code,
            )
        return None


class _RecordingInput(io.StringIO):
    """StringIO that remembers its contents after being closed."""

    def __init__(self) -> None:
        super().__init__()
        self.recorded = ""

    def close(self) -> None:
        if not self.closed:
            self.recorded = self.getvalue()
        super().close()

    @property
    def value(self) -> str:
        return self.recorded if self.closed else self.getvalue()
