"""Tests for subcommand name validation."""

import pytest

from gitpipe.core.errors import ErrorKind, GitCommandError
from gitpipe.core.validation import is_valid_command_name, validate_command


@pytest.mark.parametrize("name", ["log", "rev-parse", "cat-file", "update_ref", "tfs2", "A-z_9"])
def test_plain_subcommand_names_are_accepted(name: str) -> None:
    assert is_valid_command_name(name)
    assert validate_command([name, "--anything; goes", "$(here)"]) == (
        name,
        "--anything; goes",
        "$(here)",
    )


@pytest.mark.parametrize(
    "name",
    ["", "log;rm", "../git", "/usr/bin/git", "log --oneline", "log\n", "$(id)", "log|cat"],
)
def test_names_with_other_characters_are_rejected(name: str) -> None:
    with pytest.raises(GitCommandError) as exc_info:
        validate_command([name, "arg"])

    assert exc_info.value.kind is ErrorKind.INVALID_COMMAND
    assert exc_info.value.exit_code is None
    assert exc_info.value.session is None


def test_empty_command_is_rejected() -> None:
    with pytest.raises(GitCommandError) as exc_info:
        validate_command([])

    assert exc_info.value.kind is ErrorKind.INVALID_COMMAND
    assert str(exc_info.value) == "bad command: "


def test_rejection_message_names_the_command() -> None:
    with pytest.raises(GitCommandError, match="bad command: log;rm"):
        validate_command(["log;rm"])


def test_validated_command_is_a_tuple() -> None:
    command = ["status", "--short"]
    validated = validate_command(command)

    command.append("--branch")

    assert validated == ("status", "--short")
