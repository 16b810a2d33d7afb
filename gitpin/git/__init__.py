"""Git ref resolution.

This package turns human-supplied versions into checkout-able refs:
- Resolver: classification, default-version chain, hash lookup, checkout
- GitRunner: the command runner bound to one repository

Usage:
    from gitpin.git import GitRunner, Resolver

    resolver = Resolver(GitRunner(Path("/path/to/repo")))
    match await resolver.validate_version("v1.4.0"):
        case Ok(resolution):
            print(f"{resolution.version} is a {resolution.ref_type}")
"""

from gitpin.git.changes import ChangeEntry
from gitpin.git.errors import (
    FatalGitError,
    GitError,
    UnknownGitOption,
    UnknownGitRevision,
)
from gitpin.git.failures import FailureKind, GitFailure, classify
from gitpin.git.refs import RefType, ShowRefEntry, VersionResolution
from gitpin.git.resolver import Resolver
from gitpin.git.runner import CommandRunner, GitRunner

__all__ = [
    # Resolver
    "Resolver",
    "RefType",
    "VersionResolution",
    "ShowRefEntry",
    "ChangeEntry",
    # Runner
    "CommandRunner",
    "GitRunner",
    # Errors
    "FailureKind",
    "FatalGitError",
    "GitError",
    "GitFailure",
    "UnknownGitOption",
    "UnknownGitRevision",
    "classify",
]
