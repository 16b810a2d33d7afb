"""Tests for git/runner.py."""

from __future__ import annotations

from pathlib import Path

import pytest

import gitpin.git.runner as runner_mod
from gitpin.core.config import Config, GitSettings, TimeoutSettings
from gitpin.core.result import Ok, Result
from gitpin.git.runner import GitRunner
from gitpin.output.console import MockConsole, Style
from gitpin.platform.process import ProcessError


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path, float | None]] = []

    async def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        self.calls.append((cmd, cwd, timeout))
        return Ok("out\n")


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    rec = _Recorder()
    monkeypatch.setattr(runner_mod, "run", rec)
    return rec


class TestGitRunner:
    @pytest.mark.asyncio
    async def test_runs_git_in_repo(self, recorder: _Recorder, tmp_path: Path) -> None:
        result = await GitRunner(tmp_path)("rev-parse", "HEAD")

        assert result == Ok("out\n")
        cmd, cwd, timeout = recorder.calls[0]
        assert cmd == ["git", "-C", str(tmp_path), "rev-parse", "HEAD"]
        assert cwd == tmp_path
        assert timeout == 30.0

    @pytest.mark.asyncio
    async def test_network_commands_use_network_timeout(
        self, recorder: _Recorder, tmp_path: Path
    ) -> None:
        config = Config(timeouts=TimeoutSettings(command=5.0, network=99.0))
        runner = GitRunner(tmp_path, config=config)

        await runner("fetch", "--tags", "origin")
        await runner("tag", "-l")

        assert [c[2] for c in recorder.calls] == [99.0, 5.0]

    @pytest.mark.asyncio
    async def test_configured_executable(self, recorder: _Recorder, tmp_path: Path) -> None:
        config = Config(git=GitSettings(executable="/opt/git/bin/git"))
        await GitRunner(tmp_path, config=config)("status")

        assert recorder.calls[0][0][0] == "/opt/git/bin/git"

    @pytest.mark.asyncio
    async def test_echo_unless_silent(self, recorder: _Recorder, tmp_path: Path) -> None:
        console = MockConsole()
        runner = GitRunner(tmp_path, console=console)

        await runner("checkout", "main")
        await runner("tag", "-l", silent=True)

        assert console.messages == ["$ git checkout main"]
        assert console.count(Style.DIM) == 1
