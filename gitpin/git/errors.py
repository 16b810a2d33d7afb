"""Errors returned by resolver operations.

These are values carried in ``Err(...)``, not exceptions. Negative answers
such as "no such tag" are plain ``Ok(False)`` and never show up here.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "FatalGitError",
    "GitError",
    "UnknownGitOption",
    "UnknownGitRevision",
]


@dataclass(frozen=True, slots=True)
class UnknownGitRevision:
    """A caller-supplied version or ref matched no tag, branch or commit.

    Attributes:
        ref: The string that could not be resolved
    """

    ref: str

    def __str__(self) -> str:
        return f"unknown git revision: {self.ref}"


@dataclass(frozen=True, slots=True)
class FatalGitError:
    """git failed in a way that is not a normal negative answer.

    Attributes:
        command: The git subcommand and arguments
        message: First meaningful line of the tool's error output
        returncode: Process return code (-1 if git never ran or timed out)
        stderr: Raw standard error text
    """

    command: str
    message: str
    returncode: int = 128
    stderr: str = ""

    def __str__(self) -> str:
        return f"git {self.command} failed (exit {self.returncode}): {self.message}"


@dataclass(frozen=True, slots=True)
class UnknownGitOption:
    """A caller-supplied option is not supported.

    Attributes:
        option: The offending option name
    """

    option: str

    def __str__(self) -> str:
        return f"unknown git option: {self.option}"


type GitError = UnknownGitRevision | FatalGitError | UnknownGitOption
