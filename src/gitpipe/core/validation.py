"""Validation of git subcommand names before anything is spawned."""

import re
from collections.abc import Sequence

from gitpipe.core.errors import ErrorKind, GitCommandError

VALID_COMMAND_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_command_name(name: str) -> bool:
    """Check that name is a plain subcommand identifier."""
    # fullmatch so a trailing newline cannot slip past "$"
    return VALID_COMMAND_NAME.fullmatch(name) is not None


def validate_command(command: Sequence[str]) -> tuple[str, ...]:
    """Reject commands whose first element is not a plain subcommand name.

    Only the subcommand name is checked. The remaining arguments are handed to
    the child process as an argument vector and never pass through a shell.

    Args:
        command: Subcommand name followed by its arguments

    Returns:
        The command as an immutable tuple

    Raises:
        GitCommandError: With kind INVALID_COMMAND if the command is empty or
            its name contains anything but letters, digits, underscore or hyphen
    """
    validated = tuple(command)
    if not validated or not is_valid_command_name(validated[0]):
        name = validated[0] if validated else ""
        raise GitCommandError(
            f"bad command: {name}",
            kind=ErrorKind.INVALID_COMMAND,
            command=validated,
        )
    return validated
