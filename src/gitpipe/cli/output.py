"""Output utilities for CLI commands with clear intent.

user_output is for messages meant for the person at the terminal (stderr);
machine_output is for command results other programs may consume (stdout).
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write command results to stdout."""
    click.echo(message, nl=nl)
