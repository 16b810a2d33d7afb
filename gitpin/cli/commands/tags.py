"""Tag listing and fetching."""

from __future__ import annotations

import asyncio

import typer

from gitpin.cli.commands._helpers import fail
from gitpin.cli.context import build_context
from gitpin.core.errors import ErrorCode
from gitpin.core.result import Err, Ok


def tags(
    latest: bool = typer.Option(False, "--latest", help="Only print the highest version."),
    no_fetch: bool = typer.Option(
        False, "--no-fetch", help="Don't fetch tags first (only with --latest)."
    ),
) -> None:
    """List semver tags, highest first."""
    ctx = build_context()

    if latest:
        match asyncio.run(ctx.resolver.get_latest_local_tag(skip_fetch=no_fetch)):
            case Ok(None):
                ctx.console.warning("no semver tags")
                raise typer.Exit(code=int(ErrorCode.USER_ERROR))
            case Ok(tag):
                typer.echo(tag)
            case Err(error):
                fail(ctx.console, error)
        return

    match asyncio.run(ctx.resolver.get_local_tags()):
        case Ok(found):
            for tag in found:
                typer.echo(tag)
        case Err(error):
            fail(ctx.console, error)


def fetch() -> None:
    """Fetch branches and tags from the configured remote."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.fetch()):
        case Ok(_):
            ctx.console.success(f"fetched {ctx.config.git.remote}")
        case Err(error):
            fail(ctx.console, error)
