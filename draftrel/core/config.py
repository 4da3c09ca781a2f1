"""Typed loading of the optional ``draftrel.toml`` file.

Example::

    [git]
    remote = "origin"
    fetch_tags = true

    [github]
    workers = 8
    read_retry_attempts = 2
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "GitConfig",
    "GitHubConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "draftrel.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_GIT_TIMEOUT_SECONDS = 30.0
DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
DEFAULT_GH_TIMEOUT_SECONDS = 60.0
DEFAULT_GH_READ_RETRY_ATTEMPTS = 3
DEFAULT_WORKERS = 4


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Local history and tag settings."""

    remote: str = DEFAULT_REMOTE
    fetch_tags: bool = True
    timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS
    network_timeout: float = DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Code-hosting settings (all calls go through the gh CLI)."""

    timeout: float = DEFAULT_GH_TIMEOUT_SECONDS
    read_retry_attempts: int = DEFAULT_GH_READ_RETRY_ATTEMPTS
    workers: int = DEFAULT_WORKERS


@dataclass(frozen=True, slots=True)
class Config:
    git: GitConfig = field(default_factory=GitConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        git: StrDict = get_table(data, "git") or {}
        github: StrDict = get_table(data, "github") or {}

        fetch_tags = get_bool(git, "fetch_tags")
        retry_attempts = get_int(github, "read_retry_attempts")
        if retry_attempts is not None and retry_attempts < 0:
            raise ValueError(f"github.read_retry_attempts must be >= 0 (got {retry_attempts})")
        workers = get_int(github, "workers")
        if workers is not None and workers < 1:
            raise ValueError(f"github.workers must be >= 1 (got {workers})")

        return cls(
            git=GitConfig(
                remote=get_str(git, "remote") or DEFAULT_REMOTE,
                fetch_tags=True if fetch_tags is None else fetch_tags,
                timeout=_timeout(git, "git", "timeout", DEFAULT_GIT_TIMEOUT_SECONDS),
                network_timeout=_timeout(
                    git, "git", "network_timeout", DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS
                ),
            ),
            github=GitHubConfig(
                timeout=_timeout(github, "github", "timeout", DEFAULT_GH_TIMEOUT_SECONDS),
                read_retry_attempts=(
                    DEFAULT_GH_READ_RETRY_ATTEMPTS if retry_attempts is None else retry_attempts
                ),
                workers=DEFAULT_WORKERS if workers is None else workers,
            ),
        )


def _timeout(table: StrDict, section: str, key: str, default: float) -> float:
    value = get_float(table, key)
    if value is None:
        return default
    if value <= 0:
        raise ValueError(f"{section}.{key} must be > 0 (got {value})")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to draftrel.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[Config, ConfigError]:
    """Load ``draftrel.toml`` from the repository root, or defaults if absent.

    A file that exists but cannot be parsed is still an error.
    """
    path = repo_root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
