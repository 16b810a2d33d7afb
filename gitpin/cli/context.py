from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from gitpin.core.config import CONFIG_FILENAME, Config, load_config_or_default
from gitpin.core.errors import ErrorCode
from gitpin.core.result import Err
from gitpin.git.errors import UnknownGitOption
from gitpin.git.resolver import Resolver
from gitpin.git.runner import GitRunner
from gitpin.output.console import ConsoleProtocol, RichConsole

REPO_ENV = "GITPIN_REPO"
CONFIG_ENV = "GITPIN_CONFIG"
ECHO_ENV = "GITPIN_ECHO"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Path
    config: Config
    console: ConsoleProtocol
    resolver: Resolver


def repo_root() -> Path:
    env = os.environ.get(REPO_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd()


def build_context() -> CLIContext:
    repo = repo_root()
    if not repo.is_dir():
        typer.echo(f"error: repository path does not exist: {repo}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_env = os.environ.get(CONFIG_ENV)
    config_path = Path(config_env).expanduser() if config_env else repo / CONFIG_FILENAME

    config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        error = config_result.error
        if error.unknown_option is not None:
            typer.echo(f"error: {UnknownGitOption(error.unknown_option)}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        typer.echo(f"error: {error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    console = RichConsole(stderr=True)
    runner = GitRunner(
        repo,
        config=config,
        console=console if os.environ.get(ECHO_ENV) == "1" else None,
    )
    resolver = Resolver(
        runner,
        remote=config.git.remote,
        fetch_tags=config.git.fetch_tags,
        console=console,
    )
    return CLIContext(repo=repo, config=config, console=console, resolver=resolver)
