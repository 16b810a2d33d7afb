"""Tests for git/failures.py."""

from __future__ import annotations

import pytest

from gitpin.git.errors import FatalGitError
from gitpin.git.failures import FailureKind, classify
from gitpin.platform.process import ProcessError


def _error(*args: str, returncode: int = 128, stderr: str = "", stdout: str = "") -> ProcessError:
    return ProcessError(
        command=("git", "-C", "/work/repo", *args),
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


class TestClassify:
    def test_silent_exit_one_is_absent(self) -> None:
        failure = classify(_error("show-ref", "--verify", "--quiet", "refs/tags/x", returncode=1))
        assert failure.kind is FailureKind.ABSENT

    def test_bad_object(self) -> None:
        failure = classify(_error("log", stderr="fatal: bad object deadbeef\n"))
        assert failure.kind is FailureKind.BAD_OBJECT

    def test_unknown_revision(self) -> None:
        failure = classify(
            _error(
                "rev-parse",
                stderr="fatal: ambiguous argument 'x': unknown revision or path not in the working tree.\n",
            )
        )
        assert failure.kind is FailureKind.UNKNOWN_REVISION

    @pytest.mark.parametrize(
        "stderr",
        [
            "fatal: no tag exactly matches 'abc'\n",
            "fatal: No names found, cannot describe anything.\n",
            "fatal: NO NAMES FOUND\n",
        ],
    )
    def test_no_tag(self, stderr: str) -> None:
        assert classify(_error("describe", stderr=stderr)).kind is FailureKind.NO_TAG

    def test_bad_revision(self) -> None:
        failure = classify(_error("rev-parse", stderr="fatal: bad revision 'beef'\n"))
        assert failure.kind is FailureKind.UNKNOWN_REVISION

    @pytest.mark.parametrize(
        "stderr",
        ["fatal: bad object cafe\n", "warning: unknown revision\n", "error: no tag here\n"],
    )
    def test_exit_code_one_beats_message_pattern(self, stderr: str) -> None:
        failure = classify(_error("show-ref", "--verify", "refs/tags/x", returncode=1, stderr=stderr))
        assert failure.kind is FailureKind.ABSENT

    def test_anything_else_is_fatal(self) -> None:
        failure = classify(_error("status", stderr="fatal: not a git repository\n"))
        assert failure.kind is FailureKind.FATAL

    def test_spawn_failure_is_fatal(self) -> None:
        failure = classify(_error("status", returncode=-1, stderr="[Errno 2] No such file"))
        assert failure.kind is FailureKind.FATAL


class TestGitFailure:
    def test_command_drops_executable_and_repo(self) -> None:
        failure = classify(_error("fetch", "--tags", "origin", stderr="fatal: timeout\n"))
        assert failure.command == "fetch --tags origin"

    def test_message_is_first_stderr_line(self) -> None:
        failure = classify(_error("checkout", "x", stderr="\nerror: pathspec 'x'\nhint: more\n"))
        assert failure.message == "error: pathspec 'x'"

    def test_message_falls_back_to_process_summary(self) -> None:
        failure = classify(_error("show-ref", returncode=2))
        assert failure.message == "git -C /work/repo ... failed (exit 2)"

    def test_to_fatal(self) -> None:
        failure = classify(_error("reset", "--hard", "origin/main", stderr="fatal: boom\n"))
        assert failure.to_fatal() == FatalGitError(
            command="reset --hard origin/main",
            message="fatal: boom",
            returncode=128,
            stderr="fatal: boom\n",
        )
        assert str(failure.to_fatal()) == "git reset --hard origin/main failed (exit 128): fatal: boom"
