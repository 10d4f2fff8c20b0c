"""Application context with dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

from gitpipe.core.commands.abc import GitCommands
from gitpipe.core.commands.real import RealGitCommands
from gitpipe.core.config import ConfigStore, FilesystemConfigStore, GitPipeConfig
from gitpipe.core.stats import ExecutionStats
from gitpipe.core.time.abc import Time
from gitpipe.core.time.real import RealTime


@dataclass(frozen=True)
class GitPipeContext:
    """Immutable context holding all dependencies for running git.

    Created at the CLI entry point (or by library callers) and threaded
    through the application. ``stats`` is the process counter that ``git``
    reports into; each context gets its own.
    """

    git: GitCommands
    stats: ExecutionStats
    time: Time
    config: GitPipeConfig

    @staticmethod
    def for_test(
        git: GitCommands,
        *,
        stats: ExecutionStats | None = None,
        config: GitPipeConfig | None = None,
    ) -> "GitPipeContext":
        """Create a context around a preconfigured GitCommands (usually a fake).

        Example:
            >>> git = FakeGitCommands(outputs={("status",): "clean\\n"})
            >>> ctx = GitPipeContext.for_test(git, stats=git.stats)
        """
        from gitpipe.core.time.fake import FakeTime

        return GitPipeContext(
            git=git,
            stats=stats if stats is not None else ExecutionStats(),
            time=FakeTime(),
            config=config if config is not None else GitPipeConfig(),
        )


def create_context(
    *,
    config_store: ConfigStore | None = None,
    timeout_seconds: float | None = None,
    cwd: Path | None = None,
) -> GitPipeContext:
    """Create production context with real implementations.

    Args:
        config_store: Where to load config from (None = ~/.gitpipe/config.toml)
        timeout_seconds: Overrides the configured exit timeout
        cwd: Working directory for git commands (None = inherit)

    Raises:
        ValueError: If the stored config is malformed or the timeout is not positive
    """
    store = config_store if config_store is not None else FilesystemConfigStore()
    config = store.load()
    if timeout_seconds is not None:
        if timeout_seconds <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout_seconds}")
        config = replace(config, timeout_seconds=timeout_seconds)

    stats = ExecutionStats()
    time = RealTime()
    git = RealGitCommands(config=config, stats=stats, time=time, cwd=cwd)
    return GitPipeContext(git=git, stats=stats, time=time, config=config)
