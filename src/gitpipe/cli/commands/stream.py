"""Stream command - read a git command's output incrementally."""

import click

from gitpipe.cli.commands.capture import PASSTHROUGH_SETTINGS
from gitpipe.cli.ensure import Ensure
from gitpipe.cli.output import machine_output
from gitpipe.core.context import GitPipeContext


def _print_numbered(ctx: GitPipeContext, args: tuple[str, ...], limit: int | None) -> int:
    count = 0
    with ctx.git.open_output_stream(*args) as stream:
        for line in stream:
            if limit is not None and count >= limit:
                break
            count += 1
            text = line.rstrip("\r\n")
            machine_output(f"{count:6}\t{text}")
    return count


@click.command("stream", context_settings=PASSTHROUGH_SETTINGS)
@click.option("-n", "--limit", type=int, default=None, help="Stop after this many lines.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def stream_cmd(ctx: GitPipeContext, limit: int | None, args: tuple[str, ...]) -> None:
    """Run git ARGS and print its output with line numbers as it is read.

    Lines beyond --limit are read and discarded so git can finish normally.
    """
    Ensure.invariant(len(args) > 0, "Missing git subcommand")
    Ensure.invariant(limit is None or limit >= 0, "--limit must not be negative")

    Ensure.git_succeeds(lambda: _print_numbered(ctx, args, limit))
