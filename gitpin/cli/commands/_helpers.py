from __future__ import annotations

from typing import NoReturn

import typer

from gitpin.core.errors import ErrorCode
from gitpin.git.errors import FatalGitError, GitError, UnknownGitOption, UnknownGitRevision
from gitpin.output.console import ConsoleProtocol

_NETWORK_COMMANDS = ("fetch", "pull", "push", "clone")


def exit_code_for(error: GitError) -> ErrorCode:
    match error:
        case UnknownGitRevision() | UnknownGitOption():
            return ErrorCode.USER_ERROR
        case FatalGitError(returncode=-1):
            # git could not be started or timed out
            return ErrorCode.ENV_ERROR
        case FatalGitError(command=command) if command.startswith(_NETWORK_COMMANDS):
            return ErrorCode.NETWORK_ERROR
        case _:
            return ErrorCode.GIT_ERROR


def fail(console: ConsoleProtocol, error: GitError) -> NoReturn:
    console.error(str(error))
    raise typer.Exit(code=int(exit_code_for(error)))
