"""CLI error handling utilities with styled output.

Git failures surfacing in a CLI command are reported with a red "Error:"
prefix and exit code 1 instead of a traceback.
"""

from collections.abc import Callable
from typing import TypeVar

import click

from gitpipe.cli.output import user_output
from gitpipe.core.errors import GitCommandError, GitNotFoundError, WrappedGitCommandError

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def git_succeeds(action: Callable[[], T]) -> T:
        """Run action, turning git failures into a styled error and exit.

        Args:
            action: Zero-argument callable running one or more git commands

        Returns:
            Whatever action returns

        Raises:
            SystemExit: If a git command failed (with exit code 1)
        """
        try:
            return action()
        except (GitCommandError, GitNotFoundError, WrappedGitCommandError) as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            if isinstance(e, GitCommandError):
                for line in e.stderr_lines:
                    user_output(f"  {line}")
            raise SystemExit(1) from e
