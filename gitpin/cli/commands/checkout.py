"""Checkout command."""

from __future__ import annotations

import asyncio

import typer

from gitpin.cli.commands._helpers import fail
from gitpin.cli.context import build_context
from gitpin.core.result import Err, Ok, Result
from gitpin.git.errors import FatalGitError, UnknownGitRevision
from gitpin.git.refs import VersionResolution
from gitpin.git.resolver import Resolver


async def resolve_and_checkout(
    resolver: Resolver, version: str
) -> Result[VersionResolution, UnknownGitRevision | FatalGitError]:
    """Validate ``version`` and bring the working tree to it."""
    resolved = await resolver.validate_version(version)
    if isinstance(resolved, Err):
        return resolved

    checkout = await resolver.checkout_ref(resolved.value.version)
    if isinstance(checkout, Err):
        return checkout
    return resolved


def checkout(
    version: str = typer.Argument(
        "", help="Tag, branch or hash. Empty picks the latest semver tag or primary branch."
    ),
) -> None:
    """Resolve VERSION and check it out; branches are reset to the remote."""
    ctx = build_context()
    match asyncio.run(resolve_and_checkout(ctx.resolver, version)):
        case Ok(resolution):
            ctx.console.success(f"checked out {resolution.ref_type} {resolution.version}")
        case Err(error):
            fail(ctx.console, error)
