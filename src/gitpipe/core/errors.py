"""Typed errors raised by git command execution.

Every failure of a spawned git process is reported as a GitCommandError whose
``kind`` says what went wrong. Callers that want friendlier messages wrap their
calls with wrap_git_command_errors(), which converts runtime failures into a
WrappedGitCommandError while keeping the original as ``__cause__``.
"""

from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from gitpipe.core.session import ProcessSession

T = TypeVar("T")


class ErrorKind(Enum):
    """Why a git command failed."""

    INVALID_COMMAND = "invalid_command"
    TIMED_OUT = "timed_out"
    NON_ZERO_EXIT = "non_zero_exit"


class GitCommandError(RuntimeError):
    """A git command was rejected, did not terminate, or exited with an error.

    Attributes:
        kind: Failure category
        command: Argument vector passed to git (without the executable)
        argv: Full argument vector including the executable, empty if never spawned
        exit_code: Process exit code, None if the process was never spawned or
            did not terminate
        stderr_lines: Non-blank stderr lines captured before the failure
        session: The session that failed, None for rejected commands
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        command: Sequence[str],
        argv: Sequence[str] = (),
        exit_code: int | None = None,
        stderr_lines: Sequence[str] = (),
        session: "ProcessSession | None" = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.command = tuple(command)
        self.argv = tuple(argv)
        self.exit_code = exit_code
        self.stderr_lines = list(stderr_lines)
        self.session = session

    @property
    def command_line(self) -> str:
        """Space-joined command line, as it would be typed."""
        return " ".join(self.argv or self.command)

    def __str__(self) -> str:
        message = super().__str__()
        if self.kind is ErrorKind.INVALID_COMMAND:
            return message
        details = f"{message}\nCommand: {self.command_line}"
        if self.exit_code is not None:
            details += f"\nExit code: {self.exit_code}"
        return details


class GitNotFoundError(RuntimeError):
    """The configured git executable could not be started."""

    def __init__(self, executable: str, command: Sequence[str]) -> None:
        full_command = " ".join([executable, *command])
        super().__init__(
            f"Command not found while trying to run git: {executable}\n"
            f"Full command: {full_command}"
        )
        self.executable = executable
        self.command = tuple(command)


class WrappedGitCommandError(RuntimeError):
    """Caller-facing error built from a message template and a GitCommandError.

    The original GitCommandError is available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        command_line: str,
        exit_code: int | None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.command_line = command_line
        self.exit_code = exit_code


_WRAPPED_KINDS = frozenset({ErrorKind.NON_ZERO_EXIT, ErrorKind.TIMED_OUT})


def _exit_code_text(error: GitCommandError) -> str:
    if error.exit_code is None:
        return "timed out"
    return str(error.exit_code)


def wrap_git_command_errors(message: str, action: Callable[[], T]) -> T:
    """Run action, re-raising git failures with a friendlier message.

    Args:
        message: Template for the new error. ``{0}`` is replaced with the
            failed command line and ``{1}`` with its exit code, or with
            "timed out" when the command did not terminate.
        action: Zero-argument callable that runs one or more git commands

    Returns:
        Whatever action returns

    Raises:
        WrappedGitCommandError: If action raised a GitCommandError that timed
            out or exited non-zero. Rejected commands propagate unchanged.
    """
    try:
        return action()
    except GitCommandError as e:
        if e.kind not in _WRAPPED_KINDS:
            raise
        raise WrappedGitCommandError(
            message.format(e.command_line, _exit_code_text(e)),
            kind=e.kind,
            command_line=e.command_line,
            exit_code=e.exit_code,
        ) from e
