"""Run git as a child process with captured, streamed and interactive I/O."""

from gitpipe.core.commands import FakeGitCommands, GitCommands, RealGitCommands
from gitpipe.core.config import GitPipeConfig
from gitpipe.core.context import GitPipeContext, create_context
from gitpipe.core.errors import (
    ErrorKind,
    GitCommandError,
    GitNotFoundError,
    WrappedGitCommandError,
    wrap_git_command_errors,
)
from gitpipe.core.stats import ExecutionStats
from gitpipe.core.stream import OutputStream

__all__ = [
    "ErrorKind",
    "ExecutionStats",
    "FakeGitCommands",
    "GitCommandError",
    "GitCommands",
    "GitNotFoundError",
    "GitPipeConfig",
    "GitPipeContext",
    "OutputStream",
    "RealGitCommands",
    "WrappedGitCommandError",
    "create_context",
    "wrap_git_command_errors",
]
