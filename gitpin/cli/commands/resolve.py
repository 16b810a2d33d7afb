"""Commands that resolve a version or ref string."""

from __future__ import annotations

import asyncio

import typer

from gitpin.cli.commands._helpers import fail
from gitpin.cli.context import build_context
from gitpin.core.result import Err, Ok


def resolve(
    version: str = typer.Argument(
        "", help="Tag, branch or hash. Empty picks the latest semver tag or primary branch."
    ),
) -> None:
    """Print the resolved version and what kind of ref it is."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.validate_version(version)):
        case Ok(resolution):
            typer.echo(f"{resolution.version} {resolution.ref_type}")
        case Err(error):
            fail(ctx.console, error)


def ref_type(ref: str = typer.Argument(..., help="Ref to classify.")) -> None:
    """Print whether REF is a tag, branch or hash."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.get_ref_type(ref)):
        case Ok(kind):
            typer.echo(str(kind))
        case Err(error):
            fail(ctx.console, error)


def ref_hash(ref: str = typer.Argument(..., help="Branch, tag or revision.")) -> None:
    """Print the commit hash REF points at, preferring the remote-tracking branch."""
    ctx = build_context()
    match asyncio.run(ctx.resolver.get_hash_for_ref(ref)):
        case Ok(sha):
            typer.echo(sha)
        case Err(error):
            fail(ctx.console, error)
