"""Passthrough command - stream a git command's output to the terminal."""

import click

from gitpipe.cli.commands.capture import PASSTHROUGH_SETTINGS
from gitpipe.cli.ensure import Ensure
from gitpipe.core.context import GitPipeContext


@click.command("passthrough", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def passthrough_cmd(ctx: GitPipeContext, args: tuple[str, ...]) -> None:
    """Run git ARGS, forwarding its output as it is produced."""
    Ensure.invariant(len(args) > 0, "Missing git subcommand")

    Ensure.git_succeeds(lambda: ctx.git.command_noisy(*args))
