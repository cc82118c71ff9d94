"""Tests for the external command runner.

Tests cover:
- CommandResult ok / display / check
- CommandError message and payload
- SubprocessRunner with real child processes (success, failure, cwd, timeout)
- Missing executables
- Mocked subprocess wiring (args, cwd, inherited streams)
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fullstack_scaffold.scaffolder.runner import (
    CommandError,
    CommandResult,
    ScaffoldError,
    SubprocessRunner,
    resolve_executable,
)


# ---------------------------------------------------------------------------
# CommandResult
# ---------------------------------------------------------------------------


class TestCommandResult:
    @pytest.mark.unit
    def test_ok(self):
        assert CommandResult(command="npm", returncode=0).ok
        assert not CommandResult(command="npm", returncode=2).ok

    @pytest.mark.unit
    def test_display(self):
        result = CommandResult(command="npm", args=["install", "axios"])
        assert result.display == "npm install axios"

    @pytest.mark.unit
    def test_check_returns_self_on_success(self):
        result = CommandResult(command="npm")
        assert result.check() is result

    @pytest.mark.unit
    def test_check_raises_on_failure(self):
        result = CommandResult(command="npm", args=["install"], returncode=3, stderr="boom")
        with pytest.raises(CommandError) as excinfo:
            result.check()
        assert excinfo.value.result is result
        assert "exit code 3" in str(excinfo.value)
        assert "npm install" in str(excinfo.value)
        assert "boom" in str(excinfo.value)

    @pytest.mark.unit
    def test_command_error_is_scaffold_error(self):
        assert issubclass(CommandError, ScaffoldError)


# ---------------------------------------------------------------------------
# SubprocessRunner (real processes)
# ---------------------------------------------------------------------------


class TestSubprocessRunner:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self, tmp_path: Path):
        runner = SubprocessRunner(capture=True)
        result = await runner.run(sys.executable, ["-c", "print('hello')"], tmp_path)
        assert result.ok
        assert result.stdout == "hello"
        assert result.cwd == tmp_path

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self, tmp_path: Path):
        runner = SubprocessRunner(capture=True)
        result = await runner.run(
            sys.executable, ["-c", "import sys; sys.exit(4)"], tmp_path
        )
        assert result.returncode == 4
        assert not result.ok

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_in_working_directory(self, tmp_path: Path):
        runner = SubprocessRunner(capture=True)
        result = await runner.run(
            sys.executable, ["-c", "import os; print(os.getcwd())"], tmp_path
        )
        assert Path(result.stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_captures_stderr(self, tmp_path: Path):
        runner = SubprocessRunner(capture=True)
        result = await runner.run(
            sys.executable, ["-c", "import sys; sys.stderr.write('oops\\n')"], tmp_path
        )
        assert result.stderr == "oops"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path: Path):
        runner = SubprocessRunner(timeout=1, capture=True)
        result = await runner.run(
            sys.executable, ["-c", "import time; time.sleep(10)"], tmp_path
        )
        assert result.returncode == -1
        assert "timed out" in result.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable(self, tmp_path: Path):
        runner = SubprocessRunner()
        result = await runner.run("nonexistent-binary-12345-xyz", [], tmp_path)
        assert result.returncode == 127
        assert "not found" in result.stderr
        with pytest.raises(CommandError):
            result.check()


# ---------------------------------------------------------------------------
# SubprocessRunner (mocked)
# ---------------------------------------------------------------------------


class TestSubprocessRunnerMocked:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_inherits_streams_by_default(self, tmp_path: Path):
        proc = AsyncMock()
        proc.communicate = AsyncMock(return_value=(None, None))
        proc.returncode = 0
        proc.kill = MagicMock()

        with patch(
            "fullstack_scaffold.scaffolder.runner.resolve_executable",
            return_value="/usr/bin/npm",
        ), patch("asyncio.create_subprocess_exec", return_value=proc) as create:
            result = await SubprocessRunner().run("npm", ["install", "axios"], tmp_path)

        args, kwargs = create.call_args
        assert args == ("/usr/bin/npm", "install", "axios")
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stdout"] is None
        assert kwargs["stderr"] is None
        assert result.ok
        assert result.stdout == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nonzero_returncode_propagates(self, tmp_path: Path):
        proc = AsyncMock()
        proc.communicate = AsyncMock(return_value=(b"", b"npm ERR!"))
        proc.returncode = 1
        proc.kill = MagicMock()

        with patch(
            "fullstack_scaffold.scaffolder.runner.resolve_executable",
            return_value="/usr/bin/npm",
        ), patch("asyncio.create_subprocess_exec", return_value=proc):
            result = await SubprocessRunner(capture=True).run("npm", ["install"], tmp_path)

        assert result.returncode == 1
        assert result.stderr == "npm ERR!"


class TestResolveExecutable:
    @pytest.mark.unit
    def test_finds_python(self):
        assert resolve_executable(sys.executable) is not None

    @pytest.mark.unit
    def test_missing(self):
        assert resolve_executable("nonexistent-binary-12345-xyz") is None

    @pytest.mark.unit
    def test_windows_cmd_fallback(self):
        def fake_which(name: str):
            return "C:\\node\\npm.cmd" if name == "npm.cmd" else None

        with patch("fullstack_scaffold.scaffolder.runner.shutil.which", side_effect=fake_which), \
                patch("fullstack_scaffold.scaffolder.runner.sys.platform", "win32"):
            assert resolve_executable("npm") == "C:\\node\\npm.cmd"
