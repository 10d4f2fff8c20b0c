"""Git command execution subpackage.

This subpackage provides the GitCommands abstraction over running git as a
child process, with a subprocess-backed implementation and an in-memory fake.
"""

from gitpipe.core.commands.abc import GitCommands
from gitpipe.core.commands.fake import FakeGitCommands, StaticOutputStream
from gitpipe.core.commands.real import RealGitCommands

__all__ = [
    "FakeGitCommands",
    "GitCommands",
    "RealGitCommands",
    "StaticOutputStream",
]
