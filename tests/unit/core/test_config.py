"""Tests for config loading."""

from pathlib import Path

import pytest

from gitpipe.core.config import (
    DEFAULT_TIMEOUT_SECONDS,
    FilesystemConfigStore,
    GitPipeConfig,
    InMemoryConfigStore,
    parse_config,
)


def test_defaults() -> None:
    config = GitPipeConfig()

    assert config.git_executable == "git"
    assert config.timeout_seconds == DEFAULT_TIMEOUT_SECONDS == 10.0
    assert config.kill_on_timeout is False
    assert config.encoding == "utf-8"


def test_missing_file_loads_defaults(tmp_path: Path) -> None:
    store = FilesystemConfigStore(tmp_path / "config.toml")

    assert store.load() == GitPipeConfig()


def test_loads_all_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        'git_executable = "/opt/git/bin/git"\n'
        "timeout_seconds = 30\n"
        "kill_on_timeout = true\n"
        'encoding = "latin-1"\n',
        encoding="utf-8",
    )

    config = FilesystemConfigStore(config_path).load()

    assert config == GitPipeConfig(
        git_executable="/opt/git/bin/git",
        timeout_seconds=30.0,
        kill_on_timeout=True,
        encoding="latin-1",
    )


def test_partial_file_keeps_other_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("timeout_seconds = 2.5\n", encoding="utf-8")

    config = FilesystemConfigStore(config_path).load()

    assert config.timeout_seconds == 2.5
    assert config.git_executable == "git"


def test_invalid_toml_raises_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("timeout_seconds = \n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid TOML"):
        FilesystemConfigStore(config_path).load()


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"timeout_seconds": 0}, "must be positive"),
        ({"timeout_seconds": "10"}, "must be a number"),
        ({"timeout_seconds": True}, "must be a number"),
        ({"git_executable": ""}, "non-empty string"),
        ({"kill_on_timeout": "yes"}, "true or false"),
        ({"encoding": 8}, "non-empty string"),
    ],
)
def test_malformed_values_are_rejected(data: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_config(data, "config.toml")


def test_default_path_is_under_home() -> None:
    assert FilesystemConfigStore().path() == Path.home() / ".gitpipe" / "config.toml"


def test_in_memory_store() -> None:
    config = GitPipeConfig(timeout_seconds=1.0)

    assert InMemoryConfigStore(config).load() is config
    assert InMemoryConfigStore().load() == GitPipeConfig()
