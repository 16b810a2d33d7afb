"""Classification of failed git invocations.

git reports "not found" in several ways depending on the subcommand: exit
code 1 for ``show-ref --verify`` and ``rev-parse --verify``, a "bad
object" or "unknown revision" message for revision lookups, "no names
found" from ``describe``. Each failed ``ProcessError`` is mapped once,
here, onto a ``FailureKind``; the resolver then matches on the kind
instead of sniffing strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from gitpin.git.errors import FatalGitError
from gitpin.platform.process import ProcessError

__all__ = ["FailureKind", "GitFailure", "classify"]

_BAD_OBJECT_RE = re.compile(r"bad object")
_UNKNOWN_REVISION_RE = re.compile(r"unknown revision|bad revision")
# describe reports a missing tag differently in its message and its raw stderr
_NO_TAG_MESSAGE_RE = re.compile(r"cannot describe|no tag")
_NO_TAG_STDERR_RE = re.compile(r"no tag|no names found", re.IGNORECASE)


class FailureKind(Enum):
    """What a failed git invocation means to the resolver."""

    ABSENT = auto()  # exit code 1: the queried ref does not exist
    BAD_OBJECT = auto()
    UNKNOWN_REVISION = auto()
    NO_TAG = auto()
    FATAL = auto()


@dataclass(frozen=True, slots=True)
class GitFailure:
    """A classified git failure.

    Attributes:
        kind: Classification of the failure
        command: The git arguments, space-joined
        returncode: Process return code
        message: Human-readable summary (first non-empty stderr line)
        stderr: Raw standard error
    """

    kind: FailureKind
    command: str
    returncode: int
    message: str
    stderr: str

    def to_fatal(self) -> FatalGitError:
        return FatalGitError(
            command=self.command,
            message=self.message,
            returncode=self.returncode,
            stderr=self.stderr,
        )


def _summary(error: ProcessError) -> str:
    for line in error.stderr.splitlines():
        if line.strip():
            return line.strip()
    for line in error.stdout.splitlines():
        if line.strip():
            return line.strip()
    return str(error)


def _git_args(command: tuple[str, ...]) -> str:
    # Drop the executable and the leading "-C <path>" the runner adds.
    args = list(command[1:])
    if len(args) >= 2 and args[0] == "-C":
        args = args[2:]
    return " ".join(args)


def classify(error: ProcessError) -> GitFailure:
    """Map a failed git process onto a ``GitFailure``.

    Exit code 1 is ABSENT whatever the message says: it is the "no such
    ref" of ``show-ref --verify`` and ``rev-parse --verify``. Other codes are
    matched against known messages; anything else is FATAL.
    """
    message = _summary(error)

    if error.returncode == 1:
        kind = FailureKind.ABSENT
    elif _BAD_OBJECT_RE.search(message) or _BAD_OBJECT_RE.search(error.stderr):
        kind = FailureKind.BAD_OBJECT
    elif _UNKNOWN_REVISION_RE.search(message) or _UNKNOWN_REVISION_RE.search(error.stderr):
        kind = FailureKind.UNKNOWN_REVISION
    elif _NO_TAG_MESSAGE_RE.search(message) or _NO_TAG_STDERR_RE.search(error.stderr):
        kind = FailureKind.NO_TAG
    else:
        kind = FailureKind.FATAL

    return GitFailure(
        kind=kind,
        command=_git_args(error.command),
        returncode=error.returncode,
        message=message,
        stderr=error.stderr,
    )
