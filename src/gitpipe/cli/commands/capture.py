"""Capture command - print everything a git command wrote to stdout."""

import click

from gitpipe.cli.ensure import Ensure
from gitpipe.cli.output import machine_output
from gitpipe.core.context import GitPipeContext

PASSTHROUGH_SETTINGS = dict(ignore_unknown_options=True, allow_interspersed_args=False)


@click.command("capture", context_settings=PASSTHROUGH_SETTINGS)
@click.option(
    "--error-message",
    "error_message",
    default=None,
    help="Message to report on failure. {0} is the command line, {1} the exit code.",
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def capture_cmd(ctx: GitPipeContext, error_message: str | None, args: tuple[str, ...]) -> None:
    """Run git ARGS and print its complete output once it has exited."""
    Ensure.invariant(len(args) > 0, "Missing git subcommand")

    if error_message is None:
        output = Ensure.git_succeeds(lambda: ctx.git.command(*args))
    else:
        output = Ensure.git_succeeds(
            lambda: ctx.git.wrap_git_command_errors(
                error_message, lambda: ctx.git.command(*args)
            )
        )
    machine_output(output, nl=False)
