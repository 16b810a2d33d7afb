"""Commands reporting the repository's current state."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.text import Text

from gitpin.cli.commands._helpers import fail
from gitpin.cli.context import build_context
from gitpin.core.errors import ErrorCode
from gitpin.core.result import Err, Ok, Result
from gitpin.git.changes import ChangeEntry
from gitpin.git.errors import FatalGitError

_console = Console(highlight=False)


def head() -> None:
    """Print the HEAD commit and the tag pointing exactly at it, if any."""
    ctx = build_context()

    async def _query() -> tuple[Result[str, FatalGitError], Result[str, FatalGitError]]:
        return await asyncio.gather(
            ctx.resolver.get_current_head(), ctx.resolver.get_current_tag()
        )

    match asyncio.run(_query()):
        case (Ok(sha), Ok("")):
            typer.echo(sha)
        case (Ok(sha), Ok(tag)):
            typer.echo(f"{sha} {tag}")
        case (Err(error), _) | (_, Err(error)):
            fail(ctx.console, error)


def primary() -> None:
    """Print the primary branch name."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.get_primary_branch_name()):
        case Ok(branch):
            typer.echo(branch)
        case Err(error):
            fail(ctx.console, error)


def _render_entry(entry: ChangeEntry) -> Text:
    text = Text()
    if entry.is_untracked:
        text.append("?? ", style="cyan")
    elif "D" in entry.code:
        text.append(f"{entry.code} ", style="red")
    elif entry.code[0] == "A":
        text.append(f"{entry.code} ", style="green")
    else:
        text.append(f"{entry.code} ", style="yellow")
    text.append(entry.filename)
    if entry.submodule:
        text.append(f"  ({entry.submodule})", style="dim")
    return text


def changes(
    check: bool = typer.Option(False, "--check", help="Exit 1 if the tree has changes."),
) -> None:
    """List changed files in the repository and its submodules."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.list_changes()):
        case Ok(entries):
            for entry in entries:
                _console.print(_render_entry(entry))
            if check and entries:
                raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        case Err(error):
            fail(ctx.console, error)
