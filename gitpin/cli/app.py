from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from gitpin import __version__
from gitpin.cli.commands.checkout import checkout
from gitpin.cli.commands.resolve import ref_hash, ref_type, resolve
from gitpin.cli.commands.state import changes, head, primary
from gitpin.cli.commands.tags import fetch, tags
from gitpin.cli.context import CONFIG_ENV, ECHO_ENV, REPO_ENV
from gitpin.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(resolve)
app.command("type")(ref_type)
app.command("hash")(ref_hash)
app.command()(tags)
app.command()(fetch)
app.command()(head)
app.command()(primary)
app.command()(checkout)
app.command()(changes)


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        "-C",
        help="Repository to operate on (defaults to the current directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (defaults to <repo>/.gitpin.toml).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    echo: bool = typer.Option(False, "--echo", help="Print git commands as they run."),
) -> None:
    _configure_logging(verbose)

    if repo is not None:
        try:
            root = repo.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --repo '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[REPO_ENV] = str(root)

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser())

    if echo:
        os.environ[ECHO_ENV] = "1"


def main() -> None:
    app()
