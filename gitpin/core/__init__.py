"""Core types shared by the git layer and the CLI."""

from .config import Config, ConfigError, GitSettings, TimeoutSettings, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .semver import SEMVER, SemVer, VersionScheme, parse_version

__all__ = [
    # config
    "Config",
    "ConfigError",
    "GitSettings",
    "TimeoutSettings",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # semver
    "SEMVER",
    "SemVer",
    "VersionScheme",
    "parse_version",
]
