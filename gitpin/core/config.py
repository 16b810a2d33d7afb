"""Typed configuration loading and access.

gitpin reads an optional ``.gitpin.toml`` from the repository root (or a
path given on the command line):

    [git]
    executable = "git"
    remote = "origin"
    fetch_tags = true

    [timeouts]
    command = 30.0
    network = 180.0

Every key is optional; a missing file means all defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_seconds, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "GitSettings",
    "TimeoutSettings",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = ".gitpin.toml"

DEFAULT_COMMAND_TIMEOUT = 30.0
DEFAULT_NETWORK_TIMEOUT = 3 * 60.0

_GIT_KEYS = frozenset({"executable", "remote", "fetch_tags"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed.

    ``unknown_option`` is set when the ``[git]`` table names a key gitpin
    does not understand.
    """

    message: str
    path: Path | None = None
    unknown_option: str | None = None


@dataclass(frozen=True, slots=True)
class TimeoutSettings:
    """Per-invocation limits, in seconds."""

    command: float = DEFAULT_COMMAND_TIMEOUT
    network: float = DEFAULT_NETWORK_TIMEOUT


@dataclass(frozen=True, slots=True)
class GitSettings:
    """How the git tool is invoked.

    Attributes:
        executable: Program name or path of the git binary
        remote: Remote used for remote-tracking checks, primary branch and reset
        fetch_tags: Fetch tags before picking the default version
    """

    executable: str = "git"
    remote: str = "origin"
    fetch_tags: bool = True


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    git: GitSettings = field(default_factory=GitSettings)
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        git: StrDict = get_table(data, "git") or {}
        timeouts: StrDict = get_table(data, "timeouts") or {}

        fetch_tags = get_bool(git, "fetch_tags")

        return cls(
            git=GitSettings(
                executable=get_str(git, "executable") or "git",
                remote=get_str(git, "remote") or "origin",
                fetch_tags=True if fetch_tags is None else fetch_tags,
            ),
            timeouts=TimeoutSettings(
                command=get_seconds(timeouts, "command") or DEFAULT_COMMAND_TIMEOUT,
                network=get_seconds(timeouts, "network") or DEFAULT_NETWORK_TIMEOUT,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
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


def _unknown_git_option(data: Mapping[str, object]) -> str | None:
    git = as_str_dict(data.get("git"))
    if git is None:
        return None
    unknown = sorted(set(git) - _GIT_KEYS)
    return unknown[0] if unknown else None


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    option = _unknown_git_option(result.value)
    if option is not None:
        return Err(
            ConfigError(f"Unknown git option: {option}", path=path, unknown_option=option)
        )

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or the defaults when the file doesn't exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
