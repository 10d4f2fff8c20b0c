"""First-line command - print only the first line of a git command's output."""

import click

from gitpipe.cli.commands.capture import PASSTHROUGH_SETTINGS
from gitpipe.cli.ensure import Ensure
from gitpipe.cli.output import machine_output
from gitpipe.core.context import GitPipeContext


@click.command("first-line", context_settings=PASSTHROUGH_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def first_line_cmd(ctx: GitPipeContext, args: tuple[str, ...]) -> None:
    """Run git ARGS and print the first line of its output."""
    Ensure.invariant(len(args) > 0, "Missing git subcommand")

    line = Ensure.git_succeeds(lambda: ctx.git.command_oneline(*args))
    if line is not None:
        machine_output(line)
