"""Command runner bound to one repository.

``GitRunner`` is the production ``CommandRunner``: ``await runner("tag",
"-l")`` runs ``git -C <repo> tag -l`` and returns its stdout as a Result.
The resolver depends only on the protocol, so tests substitute a scripted
fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gitpin.core.config import Config
from gitpin.core.result import Result
from gitpin.output.console import ConsoleProtocol, Style
from gitpin.platform.process import ProcessError, run

__all__ = ["CommandRunner", "GitRunner"]

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})


class CommandRunner(Protocol):
    """Executes one git command and returns its stdout."""

    async def __call__(self, *args: str, silent: bool = False) -> Result[str, ProcessError]: ...


class GitRunner:
    """Run git in a repository with configured executable and timeouts.

    Attributes:
        path: Repository working tree
        config: Executable, remote and timeout settings
    """

    def __init__(
        self,
        path: Path,
        config: Config | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.path = path
        self.config = config or Config()
        self._console = console

    async def __call__(self, *args: str, silent: bool = False) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            self.config.timeouts.network
            if command in _NETWORK_COMMANDS
            else self.config.timeouts.command
        )
        if self._console is not None and not silent:
            self._console.print(f"$ git {' '.join(args)}", Style.DIM)

        executable = self.config.git.executable
        return await run([executable, "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
