"""Helpers for running RealGitCommands against tests/fixtures/fake_git.py."""

import os
import stat
import sys
from pathlib import Path

FAKE_GIT_SCRIPT = Path(__file__).parent.parent / "fixtures" / "fake_git.py"


def write_fake_git(directory: Path) -> Path:
    """Write an executable named fake-git that runs the fake git script.

    Args:
        directory: Where to create the executable

    Returns:
        Absolute path to the executable, usable as GitPipeConfig.git_executable
    """
    executable = directory / "fake-git"
    executable.write_text(
        f'#!/bin/sh\nexec "{sys.executable}" "{FAKE_GIT_SCRIPT}" "$@"\n',
        encoding="utf-8",
    )
    executable.chmod(executable.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return executable


def is_posix() -> bool:
    return os.name == "posix"
