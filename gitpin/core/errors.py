"""Exit codes for the gitpin command line.

Resolver failures are mapped onto these codes by the CLI so that shell
scripts can tell a typo in a version string apart from a broken checkout.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are part of the CLI contract and should remain stable:
    - 0: Success
    - 1: User error (unknown revision, unsupported option, dirty tree on --check)
    - 2: Environment error (git missing, not a repository, bad config)
    - 3: Git error (the tool failed in an unexpected way)
    - 4: Network error (fetching from the remote failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
