from pathlib import Path

import pytest

from gitpipe.core.commands.real import RealGitCommands
from gitpipe.core.config import GitPipeConfig
from gitpipe.core.stats import ExecutionStats
from tests.test_utils.fake_git import is_posix, write_fake_git


@pytest.fixture
def fake_git(tmp_path: Path) -> Path:
    """Path to an executable standing in for git."""
    if not is_posix():
        pytest.skip("fake git wrapper is a POSIX shell script")
    return write_fake_git(tmp_path)


@pytest.fixture
def stats() -> ExecutionStats:
    return ExecutionStats()


@pytest.fixture
def config(fake_git: Path) -> GitPipeConfig:
    return GitPipeConfig(git_executable=str(fake_git), timeout_seconds=5.0)


@pytest.fixture
def git(config: GitPipeConfig, stats: ExecutionStats) -> RealGitCommands:
    return RealGitCommands(config=config, stats=stats)
