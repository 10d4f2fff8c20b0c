"""Tests for command timing instrumentation."""

import logging

import pytest

from gitpipe.core.time.fake import FakeTime
from gitpipe.core.timing import CommandTimer, format_command_time, time_command


def test_format_command_time() -> None:
    assert format_command_time(1.5, "git log") == "[0:00:01.500000] git log"


def test_time_command_logs_elapsed_and_command_line(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="gitpipe.core.timing")
    clock = FakeTime(start=100.0, tick=0.25)

    with time_command("git", ("log", "--oneline"), clock):
        pass

    assert caplog.messages == ["[0:00:00.250000] git log --oneline"]
    assert clock.readings == [100.0, 100.25]


def test_time_command_logs_when_block_raises(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="gitpipe.core.timing")
    clock = FakeTime(tick=2.0)

    with pytest.raises(RuntimeError):
        with time_command("git", ("fetch",), clock):
            raise RuntimeError("boom")

    assert caplog.messages == ["[0:00:02] git fetch"]


def test_command_timer_stop_returns_elapsed(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="gitpipe.core.timing")
    timer = CommandTimer("git", ("cat-file", "--batch"), FakeTime(tick=3.0))

    assert timer.stop() == 3.0
    assert caplog.messages == ["[0:00:03] git cat-file --batch"]
