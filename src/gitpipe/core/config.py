"""Execution configuration data structures and loading.

Provides immutable config data loaded from ~/.gitpipe/config.toml. A missing
file is not an error: every field has a default.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class GitPipeConfig:
    """Immutable execution configuration.

    Attributes:
        git_executable: Name or path of the program every command is run with
        timeout_seconds: How long to wait for a process to exit once its
            streams are finished with
        kill_on_timeout: Kill a process that outlives the timeout instead of
            leaving it running after reporting the failure
        encoding: Text encoding of the child's standard streams
    """

    git_executable: str = DEFAULT_GIT_EXECUTABLE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    kill_on_timeout: bool = False
    encoding: str = DEFAULT_ENCODING


def parse_config(data: dict[str, object], source: Path | str) -> GitPipeConfig:
    """Build a GitPipeConfig from parsed TOML data.

    Args:
        data: Parsed TOML table
        source: Where the data came from, for error messages

    Raises:
        ValueError: If a key has the wrong type or an out-of-range value
    """
    git_executable = data.get("git_executable", DEFAULT_GIT_EXECUTABLE)
    if not isinstance(git_executable, str) or not git_executable:
        raise ValueError(f"'git_executable' must be a non-empty string in {source}")

    timeout = data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, int | float):
        raise ValueError(f"'timeout_seconds' must be a number in {source}")
    if timeout <= 0:
        raise ValueError(f"'timeout_seconds' must be positive in {source}, got {timeout}")

    kill_on_timeout = data.get("kill_on_timeout", False)
    if not isinstance(kill_on_timeout, bool):
        raise ValueError(f"'kill_on_timeout' must be true or false in {source}")

    encoding = data.get("encoding", DEFAULT_ENCODING)
    if not isinstance(encoding, str) or not encoding:
        raise ValueError(f"'encoding' must be a non-empty string in {source}")

    return GitPipeConfig(
        git_executable=git_executable,
        timeout_seconds=float(timeout),
        kill_on_timeout=kill_on_timeout,
        encoding=encoding,
    )


class ConfigStore(ABC):
    """Abstract interface for config loading.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching filesystem.
    """

    @abstractmethod
    def load(self) -> GitPipeConfig:
        """Load config, falling back to defaults when none is stored.

        Raises:
            ValueError: If stored config is malformed
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads ~/.gitpipe/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def load(self) -> GitPipeConfig:
        """Load config from disk, or defaults if the file does not exist.

        Raises:
            ValueError: If the file is not valid TOML or has malformed values
        """
        config_path = self.path()
        if not config_path.exists():
            return GitPipeConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return parse_config(data, config_path)

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".gitpipe" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that returns a config held in memory."""

    def __init__(self, config: GitPipeConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Config to return from load() (None = defaults)
        """
        self._config = config

    def load(self) -> GitPipeConfig:
        if self._config is None:
            return GitPipeConfig()
        return self._config

    def path(self) -> Path:
        return Path("/fake/gitpipe/config.toml")
