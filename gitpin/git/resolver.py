"""Resolve version strings against a git repository.

The ``Resolver`` answers "what does this version string refer to, and how do
I get the working tree there". It issues git commands through an injected
``CommandRunner`` and returns Result types; a missing ref is ``Ok(False)``
or an empty value, never an error.

Usage:
    resolver = Resolver(GitRunner(Path("/path/to/repo")))

    match await resolver.validate_version(None):
        case Ok(VersionResolution(version, ref_type)):
            await resolver.checkout_ref(version)
        case Err(UnknownGitRevision(ref=ref)):
            print(f"unknown version: {ref}")
        case Err(e):
            print(f"git failed: {e}")

Classification precedence is tag > branch > hash. When no version is given
the highest semver tag is used, falling back to the remote's primary branch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable

from gitpin.core.result import Err, Ok, Result
from gitpin.core.semver import SEMVER, VersionScheme
from gitpin.git.changes import ChangeEntry, parse_changes, submodule_status_script
from gitpin.git.errors import FatalGitError, UnknownGitRevision
from gitpin.git.failures import FailureKind, GitFailure, classify
from gitpin.git.refs import (
    RefType,
    ShowRefEntry,
    VersionResolution,
    is_hash_like,
    parse_show_ref,
    split_lines,
)
from gitpin.git.runner import CommandRunner
from gitpin.output.console import ConsoleProtocol

__all__ = ["Resolver"]

logger = logging.getLogger(__name__)


def _commit(rev: str) -> str:
    # Peel to a commit so trees, blobs and paths never verify.
    return f"{rev}^{{commit}}"


async def _gather_flags(
    *checks: Awaitable[Result[bool, FatalGitError]],
) -> Result[tuple[bool, ...], FatalGitError]:
    """Run independent existence checks together; first error in order wins."""
    results = await asyncio.gather(*checks)
    flags: list[bool] = []
    for result in results:
        match result:
            case Err(error):
                return Err(error)
            case Ok(flag):
                flags.append(flag)
    return Ok(tuple(flags))


class Resolver:
    """Version and ref resolution over a git command runner.

    Attributes:
        remote: Remote name for remote-tracking branches and resets
        fetch_tags: Fetch tags before choosing the default version
    """

    def __init__(
        self,
        git: CommandRunner,
        *,
        remote: str = "origin",
        fetch_tags: bool = True,
        versions: VersionScheme = SEMVER,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._git = git
        self.remote = remote
        self.fetch_tags = fetch_tags
        self._versions = versions
        self._console = console

    # -------------------------------------------------------------------------
    # Existence predicates
    # -------------------------------------------------------------------------

    async def _ref_exists(self, full_ref: str) -> Result[bool, FatalGitError]:
        result = await self._git("show-ref", "--verify", "--quiet", full_ref, silent=True)
        match result:
            case Ok(_):
                return Ok(True)
            case Err(error):
                match classify(error):
                    case GitFailure(kind=FailureKind.ABSENT):
                        return Ok(False)
                    case failure:
                        return Err(failure.to_fatal())

    async def is_local_branch(self, ref: str) -> Result[bool, FatalGitError]:
        return await self._ref_exists(f"refs/heads/{ref}")

    async def is_remote_branch(self, ref: str) -> Result[bool, FatalGitError]:
        return await self._ref_exists(f"refs/remotes/{self.remote}/{ref}")

    async def is_tag(self, ref: str) -> Result[bool, FatalGitError]:
        return await self._ref_exists(f"refs/tags/{ref}")

    async def is_branch(self, ref: str) -> Result[bool, FatalGitError]:
        """True if ``ref`` exists as a local or remote-tracking branch."""
        result = await _gather_flags(self.is_local_branch(ref), self.is_remote_branch(ref))
        return result.map(any)

    async def is_hash_valid_ref(self, sha: str) -> Result[bool, FatalGitError]:
        """True if ``sha`` is hex and names a commit git knows about.

        Strings that are not 1-40 hex characters are rejected without
        running git. ``--verify`` keeps git from reading ``sha`` as a path,
        so a file named like a hash is not a commit.
        """
        if not is_hash_like(sha):
            return Ok(False)

        result = await self._git("rev-parse", "--verify", "--quiet", _commit(sha), silent=True)
        match result:
            case Ok(_):
                return Ok(True)
            case Err(error):
                failure = classify(error)
                match failure.kind:
                    case FailureKind.ABSENT | FailureKind.BAD_OBJECT | FailureKind.UNKNOWN_REVISION:
                        logger.debug("not a known commit: %s (%s)", sha, failure.message)
                        return Ok(False)
                    case _:
                        return Err(failure.to_fatal())

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    async def _classify(self, ref: str) -> Result[RefType | None, FatalGitError]:
        flags = await _gather_flags(
            self.is_tag(ref),
            self.is_branch(ref),
            self.is_hash_valid_ref(ref),
        )
        match flags:
            case Err(error):
                return Err(error)
            case Ok((is_tag, is_branch, is_hash)):
                logger.debug(
                    "classify %s: tag=%s branch=%s hash=%s", ref, is_tag, is_branch, is_hash
                )
                if is_tag:
                    return Ok(RefType.TAG)
                if is_branch:
                    return Ok(RefType.BRANCH)
                if is_hash:
                    return Ok(RefType.HASH)
                return Ok(None)
            case _:
                raise AssertionError(f"unexpected classification result: {flags!r}")

    async def get_ref_type(self, ref: str) -> Result[RefType, UnknownGitRevision | FatalGitError]:
        match await self._classify(ref):
            case Ok(None):
                return Err(UnknownGitRevision(ref))
            case Ok(ref_type):
                return Ok(ref_type)
            case Err(error):
                return Err(error)

    # -------------------------------------------------------------------------
    # Version resolution
    # -------------------------------------------------------------------------

    async def ensure_version(self, version: str | None = None) -> Result[str, FatalGitError]:
        """Return ``version`` unchanged, or pick a default when it is empty.

        The default is the highest semver tag, or the primary branch name
        when the repository has no semver tags.
        """
        if version:
            return Ok(version)

        match await self.get_latest_local_tag(skip_fetch=not self.fetch_tags):
            case Err(error):
                return Err(error)
            case Ok(str() as tag):
                logger.debug("default version: latest tag %s", tag)
                return Ok(tag)
            case Ok(None):
                logger.debug("no semver tags, falling back to primary branch")
                return await self.get_primary_branch_name()
            case other:
                raise AssertionError(f"unexpected latest tag result: {other!r}")

    async def validate_version(
        self, version: str | None = None
    ) -> Result[VersionResolution, UnknownGitRevision | FatalGitError]:
        """Resolve ``version`` (or the default) and classify it."""
        resolved = await self.ensure_version(version)
        if isinstance(resolved, Err):
            return resolved

        candidate = resolved.value
        match await self._classify(candidate):
            case Ok(None):
                return Err(UnknownGitRevision(candidate))
            case Ok(ref_type):
                return Ok(VersionResolution(candidate, ref_type))
            case Err(error):
                return Err(error)

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    async def fetch(self) -> Result[str, FatalGitError]:
        """Fetch branches and tags from the remote."""
        match await self._git("fetch", "--tags", self.remote):
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(error):
                return Err(classify(error).to_fatal())

    async def get_local_tags(self) -> Result[list[str], FatalGitError]:
        """Local tags that are valid semantic versions, highest first."""
        match await self._git("tag", "-l", silent=True):
            case Ok(stdout):
                return Ok(self._versions.sort_descending(split_lines(stdout)))
            case Err(error):
                return Err(classify(error).to_fatal())

    async def get_latest_local_tag(
        self, *, skip_fetch: bool = False
    ) -> Result[str | None, FatalGitError]:
        """Highest semver tag, or None when there are none.

        Args:
            skip_fetch: Don't fetch tags from the remote first
        """
        if not skip_fetch:
            fetched = await self.fetch()
            if isinstance(fetched, Err):
                return fetched

        tags = await self.get_local_tags()
        return tags.map(lambda found: found[0] if found else None)

    # -------------------------------------------------------------------------
    # Current state
    # -------------------------------------------------------------------------

    async def get_primary_branch_name(self) -> Result[str, FatalGitError]:
        """Short name of the branch ``<remote>/HEAD`` points at.

        Falls back to the local HEAD when the remote has no HEAD pointer
        (for example when no remote is configured).
        """
        result = await self._git(
            "rev-parse", "--symbolic-full-name", f"{self.remote}/HEAD", silent=True
        )
        if isinstance(result, Err):
            failure = classify(result.error)
            if failure.kind is not FailureKind.UNKNOWN_REVISION:
                return Err(failure.to_fatal())
            logger.debug("no %s/HEAD, using local HEAD", self.remote)
            result = await self._git("rev-parse", "--symbolic-full-name", "HEAD", silent=True)

        match result:
            case Ok(stdout):
                return Ok(stdout.strip().split("/")[-1])
            case Err(error):
                return Err(classify(error).to_fatal())

    async def get_current_head(self) -> Result[str, FatalGitError]:
        match await self._git("rev-parse", "HEAD", silent=True):
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(error):
                return Err(classify(error).to_fatal())

    async def get_current_tag(self) -> Result[str, FatalGitError]:
        """Tag pointing exactly at HEAD, or "" when there is none."""
        match await self._git("describe", "--tags", "--exact-match", silent=True):
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(error):
                match classify(error):
                    case GitFailure(kind=FailureKind.NO_TAG):
                        return Ok("")
                    case failure:
                        return Err(failure.to_fatal())

    # -------------------------------------------------------------------------
    # Hash lookup
    # -------------------------------------------------------------------------

    async def get_hash_for_ref(self, ref: str) -> Result[str, UnknownGitRevision | FatalGitError]:
        """Best commit hash for ``ref``.

        Prefers a remote-tracking ref named ``ref``, then a local one, then
        whatever commit ``git rev-parse --verify`` makes of it (abbreviated
        hashes etc.).
        """
        match await self._git("show-ref", ref, silent=True):
            case Ok(stdout):
                entries = parse_show_ref(stdout)
            case Err(error):
                failure = classify(error)
                if failure.kind is not FailureKind.ABSENT:
                    return Err(failure.to_fatal())
                entries = []

        entry = self._pick_show_ref_entry(ref, entries)
        if entry is not None:
            logger.debug("hash for %s from %s: %s", ref, entry.remote or "local", entry.hash)
            return Ok(entry.hash)

        match await self._git("rev-parse", "--verify", "--quiet", _commit(ref), silent=True):
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(_):
                return Err(UnknownGitRevision(ref))

    @staticmethod
    def _pick_show_ref_entry(ref: str, entries: list[ShowRefEntry]) -> ShowRefEntry | None:
        for entry in entries:
            if entry.is_remote and entry.ref == ref:
                return entry
        for entry in entries:
            if not entry.is_remote and entry.ref.strip() == ref:
                return entry
        return None

    # -------------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------------

    async def checkout_ref(self, ref: str) -> Result[None, FatalGitError]:
        """Check out a branch (then sync it with the remote) or a tag/hash."""
        match await self.is_branch(ref):
            case Err(error):
                return Err(error)
            case Ok(True):
                return await self.checkout_branch(ref)
            case Ok(_):
                return await self.checkout_tag_or_hash(ref)

    async def checkout_tag_or_hash(self, ref: str) -> Result[None, FatalGitError]:
        """Check out ``ref`` directly; it must already be resolvable.

        The trailing ``--`` makes git treat ``ref`` as a revision only, never
        as a path to restore.
        """
        match await self._git("checkout", ref, "--"):
            case Ok(_):
                return Ok(None)
            case Err(error):
                return Err(classify(error).to_fatal())

    async def checkout_branch(self, ref: str) -> Result[None, FatalGitError]:
        """Check out branch ``ref`` and hard-reset it to ``<remote>/<ref>``.

        An existing local branch is checked out as is; otherwise a local
        branch of that name is created. The reset always follows.
        """
        local = await self.is_local_branch(ref)
        if isinstance(local, Err):
            return local

        args = ("checkout", ref) if local.value else ("checkout", "-b", ref)
        checkout = await self._git(*args)
        if isinstance(checkout, Err):
            self._report(f"Failed to checkout branch {ref}")
            return Err(classify(checkout.error).to_fatal())

        upstream = f"{self.remote}/{ref}"
        reset = await self._git("reset", "--hard", upstream)
        if isinstance(reset, Err):
            self._report(f"Failed to reset branch {ref} to {upstream}")
            return Err(classify(reset.error).to_fatal())

        return Ok(None)

    # -------------------------------------------------------------------------
    # Working tree
    # -------------------------------------------------------------------------

    async def list_changes(self) -> Result[list[ChangeEntry], FatalGitError]:
        """Changed paths in the repository and all of its submodules."""
        local, submodules = await asyncio.gather(
            self._git("status", "--porcelain", "--ignore-submodules=untracked", silent=True),
            self._git(
                "submodule", "foreach", "--quiet", submodule_status_script(), silent=True
            ),
        )
        match (local, submodules):
            case (Ok(top), Ok(nested)):
                return Ok(parse_changes(f"{top}\n{nested}"))
            case (Err(error), _) | (_, Err(error)):
                return Err(classify(error).to_fatal())
            case _:
                raise AssertionError("unreachable")

    def _report(self, message: str) -> None:
        if self._console is not None:
            self._console.error(message)
        else:
            logger.error(message)
