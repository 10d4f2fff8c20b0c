"""High-level git command execution interface.

This module provides a clean abstraction over running git as a child process,
making code that shells out to git testable without spawning anything.

Architecture:
- GitCommands: Abstract base class defining the execution modes
- RealGitCommands: Production implementation using subprocess
- FakeGitCommands: In-memory implementation for tests

Every mode takes the git subcommand and its arguments as separate strings,
e.g. ``git.command("log", "--format=%H", "-1")``. The subcommand name must be
a plain identifier; arguments are passed through verbatim and never reach a
shell.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import IO, TypeVar

from gitpipe.core.errors import wrap_git_command_errors
from gitpipe.core.stream import OutputStream

T = TypeVar("T")


class GitCommands(ABC):
    """Abstract interface for running git commands.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.

    Every method raises GitCommandError when the command is rejected, does not
    terminate in time, or exits non-zero.
    """

    @abstractmethod
    def command(self, *command: str) -> str:
        """Run a git command and return everything it wrote to stdout."""
        ...

    @abstractmethod
    def command_oneline(self, *command: str) -> str | None:
        """Run a git command and return the first line of its stdout.

        The line is returned without its newline. The rest of the output is
        read and discarded. Returns None if the command printed nothing.
        """
        ...

    @abstractmethod
    def command_noisy(self, *command: str) -> None:
        """Run a git command, passing its stdout through to our own stdout."""
        ...

    @abstractmethod
    def command_output_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        """Run a git command and hand its stdout to handler.

        The process is waited for and exit-checked after handler returns.
        Output handler leaves unread is discarded.

        Returns:
            Whatever handler returns
        """
        ...

    @abstractmethod
    def command_input_pipe(self, handler: Callable[[IO[str]], T], *command: str) -> T:
        """Run a git command and hand its stdin to handler.

        The command's stdout is not captured. stdin is closed after handler
        returns, if handler has not closed it already.

        Returns:
            Whatever handler returns
        """
        ...

    @abstractmethod
    def command_input_output_pipe(
        self, handler: Callable[[IO[str], IO[str]], T], *command: str
    ) -> T:
        """Run a git command and hand both its stdin and stdout to handler.

        handler is called as ``handler(stdin, stdout)``. It is up to handler to
        interleave writes and reads so that neither side waits on the other
        forever: flush or close stdin before reading a response that depends
        on it.

        Returns:
            Whatever handler returns
        """
        ...

    @abstractmethod
    def open_output_stream(self, *command: str) -> OutputStream:
        """Start a git command and return a stream over its stdout.

        The returned stream MUST be closed (or used as a context manager).
        Closing it waits for the process and raises if the command failed.
        """
        ...

    def wrap_git_command_errors(self, message: str, action: Callable[[], T]) -> T:
        """Run action, re-raising git failures with a friendlier message.

        See gitpipe.core.errors.wrap_git_command_errors().
        """
        return wrap_git_command_errors(message, action)
