"""External command execution for the scaffolder.

The engine never spawns processes directly; it calls ``runner.run(...)`` on
an injected object with the signature of :class:`SubprocessRunner`.  Tests
substitute a fake with the same ``async run`` method.
"""

from __future__ import annotations

import asyncio
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""


class CommandError(ScaffoldError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, result: "CommandResult") -> None:
        self.result = result
        message = f"Command failed with exit code {result.returncode}: {result.display}"
        if result.stderr:
            message = f"{message}\n{result.stderr}"
        super().__init__(message)


@dataclass
class CommandResult:
    """Outcome of one external command invocation."""

    command: str
    args: list[str] = field(default_factory=list)
    cwd: Path | None = None
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def display(self) -> str:
        """The command line as a single printable string."""
        return " ".join([self.command, *self.args])

    def check(self) -> "CommandResult":
        """Return ``self`` on success, raise :class:`CommandError` otherwise."""
        if not self.ok:
            raise CommandError(self)
        return self


class CommandRunner(Protocol):
    async def run(
        self, command: str, args: list[str], cwd: str | Path
    ) -> CommandResult: ...


class SubprocessRunner:
    """Runs programs with ``asyncio.create_subprocess_exec``.

    Output is inherited from the parent process by default so installer
    progress streams straight to the terminal.

    Args:
        timeout: Maximum wall-clock seconds per command before the child is
            killed and a ``-1`` return code is reported.
        capture: Capture stdout/stderr instead of inheriting them.
    """

    def __init__(self, timeout: int = 900, capture: bool = False) -> None:
        self.timeout = timeout
        self.capture = capture

    async def run(
        self, command: str, args: list[str], cwd: str | Path
    ) -> CommandResult:
        result = CommandResult(command=command, args=list(args), cwd=Path(cwd))
        executable = resolve_executable(command)
        if executable is None:
            result.returncode = 127
            result.stderr = f"Executable not found: {command}"
            return result

        pipe = asyncio.subprocess.PIPE if self.capture else None
        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdout=pipe,
            stderr=pipe,
            cwd=str(cwd),
        )

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            result.returncode = -1
            result.stderr = f"Command timed out after {self.timeout}s: {result.display}"
            return result

        result.returncode = process.returncode or 0
        result.stdout = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
        result.stderr = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
        return result


def resolve_executable(command: str) -> str | None:
    """Locate *command* on ``PATH``.

    On Windows npm ships as ``npm.cmd``, which ``create_subprocess_exec``
    will not find from the bare name.
    """
    found = shutil.which(command)
    if found is None and sys.platform == "win32":
        found = shutil.which(f"{command}.cmd")
    return found
