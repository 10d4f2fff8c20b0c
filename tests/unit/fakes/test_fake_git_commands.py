"""Tests for FakeGitCommands test infrastructure.

These tests verify that FakeGitCommands behaves like RealGitCommands from a
caller's point of view, so code tested against the fake holds up against git.
"""

import io

import pytest

from gitpipe.core.commands.fake import FakeGitCommands, StaticOutputStream
from gitpipe.core.errors import ErrorKind, GitCommandError, WrappedGitCommandError


def test_unknown_commands_succeed_with_empty_output() -> None:
    git = FakeGitCommands()

    assert git.command("status") == ""
    assert git.command_oneline("status") is None


def test_command_returns_configured_output() -> None:
    git = FakeGitCommands(outputs={("log", "--format=%H"): "aaa\nbbb\n"})

    assert git.command("log", "--format=%H") == "aaa\nbbb\n"
    assert git.command_oneline("log", "--format=%H") == "aaa"


def test_commands_are_recorded_in_order() -> None:
    git = FakeGitCommands()

    git.command("fetch")
    git.command_oneline("rev-parse", "HEAD")

    assert git.commands == [("fetch",), ("rev-parse", "HEAD")]


def test_invalid_commands_are_rejected_and_not_counted() -> None:
    git = FakeGitCommands()

    with pytest.raises(GitCommandError) as exc_info:
        git.command("log;rm", "-rf")

    assert exc_info.value.kind is ErrorKind.INVALID_COMMAND
    assert git.commands == []
    assert git.stats.processes_run == 0


def test_non_zero_exit_raises_after_handler_runs() -> None:
    git = FakeGitCommands(outputs={("merge",): "CONFLICT\n"}, exit_codes={("merge",): 1})
    seen: list[str] = []

    with pytest.raises(GitCommandError) as exc_info:
        git.command_output_pipe(lambda stdout: seen.append(stdout.read()), "merge")

    assert seen == ["CONFLICT\n"]
    assert exc_info.value.kind is ErrorKind.NON_ZERO_EXIT
    assert exc_info.value.exit_code == 1
    assert exc_info.value.command_line == "git merge"


def test_timeouts_raise_timed_out() -> None:
    git = FakeGitCommands(timeouts=[("fetch", "origin")])

    with pytest.raises(GitCommandError) as exc_info:
        git.command("fetch", "origin")

    assert exc_info.value.kind is ErrorKind.TIMED_OUT
    assert exc_info.value.exit_code is None


def test_every_accepted_command_is_counted() -> None:
    git = FakeGitCommands(exit_codes={("fail",): 1})

    git.command("status")
    with pytest.raises(GitCommandError):
        git.command("fail")
    git.open_output_stream("log").close()

    assert git.stats.processes_run == 3


def test_noisy_writes_to_configured_stdout() -> None:
    out = io.StringIO()
    git = FakeGitCommands(outputs={("log",): "commit abc\n"}, stdout=out)

    assert git.command_noisy("log") is None
    assert out.getvalue() == "commit abc\n"


def test_input_pipe_records_written_text() -> None:
    git = FakeGitCommands()

    def write_message(stdin: io.TextIOBase) -> str:
        stdin.write("commit message\n")
        stdin.close()
        return "written"

    assert git.command_input_pipe(write_message, "commit-tree", "HEAD^{tree}") == "written"
    assert git.inputs == [(("commit-tree", "HEAD^{tree}"), "commit message\n")]


def test_input_output_pipe_gets_both_streams() -> None:
    git = FakeGitCommands(outputs={("cat-file", "--batch-check"): "abc blob 12\n"})

    def interact(stdin: io.TextIOBase, stdout: io.TextIOBase) -> str:
        stdin.write("abc\n")
        return stdout.readline()

    result = git.command_input_output_pipe(interact, "cat-file", "--batch-check")

    assert result == "abc blob 12\n"
    assert git.inputs == [(("cat-file", "--batch-check"), "abc\n")]


def test_output_stream_raises_configured_failure_on_close() -> None:
    git = FakeGitCommands(outputs={("log",): "one\ntwo\n"}, exit_codes={("log",): 128})

    stream = git.open_output_stream("log")
    assert list(stream) == ["one\n", "two\n"]

    with pytest.raises(GitCommandError) as exc_info:
        stream.close()

    assert exc_info.value.exit_code == 128
    assert stream.closed
    stream.close()


def test_output_stream_is_counted_when_closed() -> None:
    git = FakeGitCommands(outputs={("log",): "one\n"})

    stream = git.open_output_stream("log")
    assert git.stats.processes_run == 0

    stream.close()
    stream.close()

    assert git.stats.processes_run == 1


def test_failing_output_stream_is_still_counted() -> None:
    git = FakeGitCommands(exit_codes={("log",): 1})

    stream = git.open_output_stream("log")
    with pytest.raises(GitCommandError):
        stream.close()

    assert git.stats.processes_run == 1


def test_static_output_stream_context_manager() -> None:
    with StaticOutputStream("a\nb\n") as stream:
        assert stream.readline() == "a\n"
        assert stream.read() == "b\n"

    assert stream.closed


def test_wrap_git_command_errors_on_fake() -> None:
    git = FakeGitCommands(exit_codes={("svn", "fetch"): 2})

    with pytest.raises(WrappedGitCommandError) as exc_info:
        git.wrap_git_command_errors(
            "Could not fetch: {0} (exit {1})", lambda: git.command("svn", "fetch")
        )

    assert str(exc_info.value) == "Could not fetch: git svn fetch (exit 2)"
    assert isinstance(exc_info.value.__cause__, GitCommandError)
