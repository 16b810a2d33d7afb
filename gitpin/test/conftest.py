"""Shared fixtures: a scripted stand-in for the git command runner."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from gitpin.core.result import Err, Ok, Result
from gitpin.platform.process import ProcessError

_FULL_SHA = "3f786850e387550fdab836ed7e6dc881de23001b"


def _no_calls() -> list[tuple[str, ...]]:
    return []


def _no_responses() -> dict[tuple[str, ...], Result[str, ProcessError]]:
    return {}


@dataclass
class ScriptedGit:
    """CommandRunner that replays canned git output.

    ``show-ref --verify --quiet <full-ref>`` is answered from ``refs`` and
    ``rev-parse --verify --quiet <rev>^{commit}`` from ``commits``: exit 0
    if present, a silent exit 1 otherwise. Every other command must be
    scripted with ``ok()``/``fail()``; anything else is a test bug.
    """

    refs: set[str] = field(default_factory=set)
    commits: set[str] = field(default_factory=set)
    calls: list[tuple[str, ...]] = field(default_factory=_no_calls)
    responses: dict[tuple[str, ...], Result[str, ProcessError]] = field(
        default_factory=_no_responses
    )

    def ok(self, *args: str, stdout: str = "") -> None:
        self.responses[args] = Ok(stdout)

    def fail(self, *args: str, returncode: int = 128, stderr: str = "", stdout: str = "") -> None:
        self.responses[args] = Err(
            ProcessError(
                command=("git", "-C", "/repo", *args),
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
            )
        )

    def add_refs(self, *refs: str) -> None:
        self.refs.update(refs)

    def add_commits(self, *revs: str) -> None:
        self.commits.update(revs)

    def commands(self, name: str) -> list[tuple[str, ...]]:
        """Recorded calls whose subcommand is ``name``."""
        return [c for c in self.calls if c and c[0] == name]

    async def __call__(self, *args: str, silent: bool = False) -> Result[str, ProcessError]:
        self.calls.append(args)
        if args in self.responses:
            return self.responses[args]
        if args[:3] == ("show-ref", "--verify", "--quiet") and len(args) == 4:
            if args[3] in self.refs:
                return Ok("")
            return Err(ProcessError(("git", *args), 1, "", ""))
        if args[:3] == ("rev-parse", "--verify", "--quiet") and len(args) == 4:
            if args[3].removesuffix("^{commit}") in self.commits:
                return Ok(f"{_FULL_SHA}\n")
            return Err(ProcessError(("git", *args), 1, "", ""))
        raise AssertionError(f"unscripted git call: {args}")


@pytest.fixture
def git() -> ScriptedGit:
    return ScriptedGit()
