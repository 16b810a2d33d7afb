from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering
from typing import Protocol

__all__ = [
    "SEMVER",
    "SemVer",
    "SemVerScheme",
    "VersionScheme",
    "parse_version",
    "sort_descending",
]


# ASCII digits only; \d would also accept other Unicode digits.
_NUM = r"0|[1-9][0-9]*"
_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    rf"^[v=]?({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _ident_key(ident: str) -> tuple[int, int, str]:
    # Numeric identifiers sort below alphanumeric ones.
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def precedence_key(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        # A release outranks any of its prereleases.
        is_release = 0 if self.prerelease else 1
        idents = tuple(_ident_key(i) for i in self.prerelease)
        return (self.major, self.minor, self.patch, is_release, idents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() == other.precedence_key()

    def __lt__(self, other: SemVer) -> bool:
        return self.precedence_key() < other.precedence_key()

    def __hash__(self) -> int:
        return hash(self.precedence_key())


def parse_version(text: str) -> SemVer | None:
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    prerelease = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease, build)


def sort_descending(tags: Iterable[str]) -> list[str]:
    """Keep tags that parse as semantic versions, highest precedence first."""
    parsed = [(tag, v) for tag in tags if (v := parse_version(tag)) is not None]
    parsed.sort(key=lambda item: item[1], reverse=True)
    return [tag for tag, _ in parsed]


class VersionScheme(Protocol):
    """Version capability the resolver uses to rank tags."""

    def sort_descending(self, tags: Iterable[str]) -> list[str]: ...


class SemVerScheme:
    def sort_descending(self, tags: Iterable[str]) -> list[str]:
        return sort_descending(tags)


SEMVER = SemVerScheme()
