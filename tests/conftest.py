"""Shared pytest fixtures for the fullstack-scaffold test suite.

Provides reusable fixtures for:
- A configuration rooted in a temporary base directory
- A fake command runner that records invocations instead of spawning npm
- A ready-made ``ProjectScaffolder`` wired to both
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from fullstack_scaffold.config import ScaffoldConfig
from fullstack_scaffold.scaffolder import CommandResult, ProjectScaffolder


# ---------------------------------------------------------------------------
# Fake runner
# ---------------------------------------------------------------------------


class FakeRunner:
    """Records ``run`` calls and returns canned results.

    Args:
        fail_on: Optional predicate ``(command, args) -> bool``; matching
            invocations return exit code ``fail_code``.
        on_run: Optional side effect ``(command, args, cwd) -> None`` run
            before the result is returned (e.g. to mimic create-vite writing
            files).
    """

    def __init__(
        self,
        fail_on: Callable[[str, list[str]], bool] | None = None,
        fail_code: int = 1,
        on_run: Callable[[str, list[str], Path], None] | None = None,
    ) -> None:
        self.calls: list[tuple[str, list[str], Path]] = []
        self.fail_on = fail_on
        self.fail_code = fail_code
        self.on_run = on_run

    async def run(self, command: str, args: list[str], cwd: Any) -> CommandResult:
        cwd = Path(cwd)
        self.calls.append((command, list(args), cwd))
        if self.on_run is not None:
            self.on_run(command, list(args), cwd)
        if self.fail_on is not None and self.fail_on(command, list(args)):
            return CommandResult(
                command=command,
                args=list(args),
                cwd=cwd,
                returncode=self.fail_code,
                stderr="simulated failure",
            )
        return CommandResult(command=command, args=list(args), cwd=cwd)

    @property
    def arg_lists(self) -> list[list[str]]:
        return [args for _, args, _ in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A runner that succeeds for every command."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """The ``FakeRunner`` class, for tests that need custom behaviour."""
    return FakeRunner


@pytest.fixture
def failing_runner_factory() -> Callable[..., FakeRunner]:
    """Factory for runners that fail on commands whose first arg matches.

    Usage:
        def test_x(failing_runner_factory):
            runner = failing_runner_factory("create")
    """
    def factory(first_arg: str, fail_code: int = 1) -> FakeRunner:
        return FakeRunner(
            fail_on=lambda command, args: bool(args) and args[0] == first_arg,
            fail_code=fail_code,
        )

    return factory


# ---------------------------------------------------------------------------
# Config / scaffolder
# ---------------------------------------------------------------------------


@pytest.fixture
def scaffold_config(tmp_path: Path) -> ScaffoldConfig:
    """Default configuration rooted in a temporary directory."""
    return ScaffoldConfig(base_dir=tmp_path)


@pytest.fixture
def scaffolder(scaffold_config: ScaffoldConfig, fake_runner: FakeRunner) -> ProjectScaffolder:
    """A ``ProjectScaffolder`` that never spawns real processes."""
    return ProjectScaffolder(config=scaffold_config, runner=fake_runner)


@pytest.fixture
def snapshot_tree() -> Callable[[Path], dict[str, bytes | None]]:
    """Return a function mapping every path under a root to its bytes.

    Directories map to ``None``.
    """
    def snapshot(root: Path) -> dict[str, bytes | None]:
        return {
            str(p.relative_to(root)): (None if p.is_dir() else p.read_bytes())
            for p in sorted(root.rglob("*"))
        }

    return snapshot
