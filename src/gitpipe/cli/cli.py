import logging

import click

from gitpipe.cli.commands.capture import capture_cmd
from gitpipe.cli.commands.first_line import first_line_cmd
from gitpipe.cli.commands.passthrough import passthrough_cmd
from gitpipe.cli.commands.stream import stream_cmd
from gitpipe.cli.ensure import Ensure
from gitpipe.cli.output import user_output
from gitpipe.core.context import GitPipeContext, create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_LOG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


@click.group(name="gitpipe", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitpipe")
@click.option("--debug", is_flag=True, help="Log process start, git stderr and timings.")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds to wait for git to exit (default from config, else 10).",
)
@click.option("--show-count", is_flag=True, help="Report how many git processes were run.")
@click.pass_context
def cli(ctx: click.Context, debug: bool, timeout: float | None, show_count: bool) -> None:
    """Run git commands with captured, first-line, passthrough or streamed output."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=DEBUG_LOG_FORMAT)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        Ensure.invariant(timeout is None or timeout > 0, "--timeout must be positive")
        try:
            ctx.obj = create_context(timeout_seconds=timeout)
        except ValueError as e:
            Ensure.invariant(False, str(e))

    if show_count:
        app: GitPipeContext = ctx.obj
        ctx.call_on_close(lambda: user_output(f"git processes run: {app.stats.processes_run}"))


cli.add_command(capture_cmd)
cli.add_command(first_line_cmd)
cli.add_command(passthrough_cmd)
cli.add_command(stream_cmd)


def main() -> None:
    """CLI entry point used by the `gitpipe` console script."""
    cli()
