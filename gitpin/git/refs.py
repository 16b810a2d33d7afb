"""Ref types and parsers for git's line-oriented output."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "EOL_RE",
    "RefType",
    "ShowRefEntry",
    "VersionResolution",
    "is_hash_like",
    "parse_show_ref",
    "split_lines",
]

# git on Windows does not always emit \r\n; match both line endings.
EOL_RE = re.compile(r"\r?\n")

_HASH_RE = re.compile(r"[0-9a-f]{1,40}", re.IGNORECASE)
_REMOTE_REF_RE = re.compile(r"^refs/remotes/([A-Za-z0-9_.-]+)/")


class RefType(StrEnum):
    """What a ref string names in the repository, in precedence order."""

    TAG = "tag"
    BRANCH = "branch"
    HASH = "hash"


@dataclass(frozen=True, slots=True)
class VersionResolution:
    """A version string together with what it resolved to."""

    version: str
    ref_type: RefType

    def __iter__(self) -> Iterator[str]:
        return iter((self.version, self.ref_type))


@dataclass(frozen=True, slots=True)
class ShowRefEntry:
    """One line of ``git show-ref`` output.

    Attributes:
        hash: Object name the ref points at
        ref: Short name (last path segment of the full ref)
        remote: Remote name for refs/remotes/<remote>/..., None for local refs
    """

    hash: str
    ref: str
    remote: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.remote is not None


def split_lines(output: str) -> list[str]:
    """Split tool output on \\n or \\r\\n, dropping empty lines."""
    return [line for line in EOL_RE.split(output) if line]


def is_hash_like(text: str) -> bool:
    """True for 1-40 hex characters, the only strings worth asking git about."""
    return _HASH_RE.fullmatch(text) is not None


def parse_show_ref(output: str) -> list[ShowRefEntry]:
    """Parse ``<hash> <full-ref-path>`` lines."""
    entries: list[ShowRefEntry] = []
    for line in split_lines(output):
        parts = line.split()
        if len(parts) < 2:
            continue
        hash_, full_ref = parts[0], parts[1]
        m = _REMOTE_REF_RE.match(full_ref)
        entries.append(
            ShowRefEntry(
                hash=hash_,
                ref=full_ref.rsplit("/", 1)[-1],
                remote=m.group(1) if m else None,
            )
        )
    return entries
