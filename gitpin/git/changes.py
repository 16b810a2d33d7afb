"""Working-tree change listing across a repository and its submodules.

``git submodule foreach`` output is interleaved with sentinel lines so each
status line can be attributed to the submodule it came from:

    M  README.md            <- top level
    ---- libs/core
     M src/main.c           <- libs/core/src/main.c
    ?? notes.txt            <- libs/core/notes.txt
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from gitpin.git.refs import split_lines

__all__ = ["SENTINEL", "ChangeEntry", "parse_changes", "submodule_status_script"]

SENTINEL = "----"

# "XY path": two status characters and a space
_PREFIX_LEN = 3


@dataclass(frozen=True, slots=True)
class ChangeEntry:
    """A single changed path.

    Attributes:
        code: Two-character porcelain status code (e.g. "M ", " M", "??")
        filename: Path relative to the top-level repository
        submodule: Submodule path, "" for the top-level tree
    """

    code: str
    filename: str
    submodule: str = ""

    @property
    def is_staged(self) -> bool:
        return self.code != "??" and self.code[0] != " "

    @property
    def is_unstaged(self) -> bool:
        return self.code != "??" and self.code[1] != " "

    @property
    def is_untracked(self) -> bool:
        return self.code == "??"


def submodule_status_script() -> str:
    """Shell snippet run by ``git submodule foreach`` for each submodule."""
    return f'echo "{SENTINEL}" $path && git status --porcelain'


def parse_changes(output: str) -> list[ChangeEntry]:
    """Parse top-level status followed by sentinel-delimited submodule status.

    A sentinel for the top-level tree (empty path) is prepended, so lines
    before the first submodule sentinel belong to the repository itself.
    """
    current = ""
    changes: list[ChangeEntry] = []

    for line in split_lines(f"{SENTINEL}\n{output}"):
        if line.startswith(SENTINEL):
            current = line[len(SENTINEL) + 1 :]
            continue

        filename = line[_PREFIX_LEN:]
        if current:
            filename = posixpath.join(current, filename)
        changes.append(ChangeEntry(code=line[:2], filename=filename, submodule=current))

    return changes
