"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and produces ``<project>/frontend`` (React +
Vite, bootstrapped by ``npm create vite``) and ``<project>/backend``
(Express).  Directories and files are only ever created, never overwritten,
so a second run over the same target is a no-op apart from the external
commands.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.markup import escape

from fullstack_scaffold.config import ScaffoldConfig
from fullstack_scaffold.utils import console, print_step, print_success

from .filesystem import WriteOutcome, ensure_directories, ensure_directory, ensure_file
from .runner import CommandResult, CommandRunner, SubprocessRunner
from .templates import BACKEND_FILES, FRONTEND_FILES, ROUTE_TEMPLATE, TemplateRegistry


# ---------------------------------------------------------------------------
# Fixed directory layout
# ---------------------------------------------------------------------------

FRONTEND_DIRS: list[str] = [
    "public",
    "public/assets",
    "src/assets",
    "src/components",
    "src/pages",
    "src/hooks",
    "src/styles",
    "src/animations",
    "src/api",
]

BACKEND_DIRS: list[str] = [
    "config",
    "controllers",
    "middleware",
    "models",
    "routes",
    "auth",
    "utils",
    "tests",
]

_SAFE_NAME = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*$")


# ---------------------------------------------------------------------------
# Request / report models
# ---------------------------------------------------------------------------


class ScaffoldRequest(BaseModel):
    """What to scaffold.  Immutable for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Target directory name under the base dir")

    @field_validator("project_name")
    @classmethod
    def _filesystem_safe(cls, value: str) -> str:
        if not value:
            raise ValueError("project name must not be empty")
        if not _SAFE_NAME.match(value):
            raise ValueError(
                "project name may only contain letters, digits, '.', '_' and '-' "
                "and must not start with '.' or '-'"
            )
        return value


@dataclass
class PathResult:
    """One ensure_directory / ensure_file outcome."""

    path: Path
    kind: Literal["dir", "file"]
    outcome: WriteOutcome


@dataclass
class ScaffoldReport:
    """Everything a scaffolding run touched, in execution order."""

    project_root: Path
    paths: list[PathResult] = field(default_factory=list)
    commands: list[CommandResult] = field(default_factory=list)

    @property
    def created(self) -> list[Path]:
        return [r.path for r in self.paths if r.outcome is WriteOutcome.CREATED]

    @property
    def existing(self) -> list[Path]:
        return [r.path for r in self.paths if r.outcome is WriteOutcome.ALREADY_EXISTS]

    def outcome_for(self, path: str | Path) -> WriteOutcome | None:
        """Outcome recorded for *path*, or ``None`` if it was never touched."""
        target = Path(path)
        for result in self.paths:
            if result.path == target:
                return result.outcome
        return None

    def summary(self) -> dict[str, str]:
        dirs = [r for r in self.paths if r.kind == "dir"]
        files = [r for r in self.paths if r.kind == "file"]
        return {
            "Project": str(self.project_root),
            "Directories created": str(sum(r.outcome is WriteOutcome.CREATED for r in dirs)),
            "Files created": str(sum(r.outcome is WriteOutcome.CREATED for r in files)),
            "Already present": str(len(self.existing)),
            "Commands run": str(len(self.commands)),
        }


# ---------------------------------------------------------------------------
# Main scaffolder
# ---------------------------------------------------------------------------


class ProjectScaffolder:
    """Creates the frontend and backend subtrees for one project.

    Args:
        config: Run configuration.  Defaults to ``ScaffoldConfig()``.
        runner: Object with an ``async run(command, args, cwd)`` method.
            Defaults to a :class:`SubprocessRunner` using the configured
            timeout.
        registry: Template registry used to render engine-owned files.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        runner: CommandRunner | None = None,
        registry: TemplateRegistry | None = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.runner = runner or SubprocessRunner(timeout=self.config.commands.timeout)
        self.registry = registry or TemplateRegistry()

    # -- Public API --------------------------------------------------------

    async def scaffold(self, request: ScaffoldRequest | str) -> ScaffoldReport:
        """Generate the project described by *request*.

        Any failing command raises :class:`CommandError` and any filesystem
        error propagates; nothing already created is removed.

        Returns:
            The :class:`ScaffoldReport` for the run.
        """
        if isinstance(request, str):
            request = ScaffoldRequest(project_name=request)

        project_root = self.config.project_path(request.project_name)
        report = ScaffoldReport(project_root=project_root)
        context = self._build_context(request)

        await self._ensure_dir(report, project_root)
        await self._build_frontend(report, project_root / "frontend", context)
        await self._build_backend(report, project_root / "backend", context)

        print_success(f'\nProject "{request.project_name}" created successfully!')
        return report

    # -- Context building --------------------------------------------------

    def _build_context(self, request: ScaffoldRequest) -> dict[str, Any]:
        """Build the Jinja2 template context."""
        return {
            "project_name": request.project_name,
            "frontend": self.config.frontend.model_dump(),
            "backend": self.config.backend.model_dump(),
        }

    # -- Frontend ----------------------------------------------------------

    async def _build_frontend(
        self, report: ScaffoldReport, frontend_dir: Path, ctx: dict[str, Any]
    ) -> None:
        frontend = self.config.frontend
        npm = self.config.commands.npm

        await self._ensure_dir(report, frontend_dir)

        print_step("Bootstrapping frontend with Vite + React...")
        await self._run(
            report,
            npm,
            ["create", "vite@latest", ".", "--", "--template", frontend.template, "--force"],
            frontend_dir,
        )
        if frontend.install_dependencies:
            await self._run(report, npm, ["install"], frontend_dir)
            if frontend.extra_packages:
                await self._run(
                    report, npm, ["install", *frontend.extra_packages], frontend_dir
                )

        await self._ensure_dirs(report, frontend_dir, FRONTEND_DIRS)

        await self._write_templates(report, frontend_dir, list(FRONTEND_FILES), ctx)

    # -- Backend -----------------------------------------------------------

    async def _build_backend(
        self, report: ScaffoldReport, backend_dir: Path, ctx: dict[str, Any]
    ) -> None:
        backend = self.config.backend
        npm = self.config.commands.npm

        print_step("Creating backend...")
        await self._ensure_dir(report, backend_dir)
        await self._ensure_dirs(report, backend_dir, BACKEND_DIRS)

        await self._write_templates(report, backend_dir, list(BACKEND_FILES), ctx)

        for route in ctx["backend"]["routes"]:
            content = self.registry.render_template(ROUTE_TEMPLATE, {**ctx, "route": route})
            await self._ensure_file(
                report, backend_dir / "routes" / f"{route['module']}.js", content
            )

        if backend.install_dependencies:
            print_step("Installing backend dependencies...")
            if not (backend_dir / "package.json").exists():
                await self._run(report, npm, ["init", "-y"], backend_dir)
            if backend.packages:
                await self._run(report, npm, ["install", *backend.packages], backend_dir)

    # -- Primitives --------------------------------------------------------

    async def _write_templates(
        self,
        report: ScaffoldReport,
        base_dir: Path,
        identifiers: list[str],
        ctx: dict[str, Any],
    ) -> None:
        for identifier in identifiers:
            content = self.registry.render(identifier, ctx)
            target = base_dir / self.registry.output_path(identifier)
            await self._ensure_file(report, target, content)

    async def _ensure_dir(self, report: ScaffoldReport, path: Path) -> None:
        outcome = await asyncio.to_thread(ensure_directory, path)
        report.paths.append(PathResult(path=path, kind="dir", outcome=outcome))

    async def _ensure_dirs(
        self, report: ScaffoldReport, base: Path, relative_dirs: list[str]
    ) -> None:
        outcomes = await asyncio.to_thread(ensure_directories, base, relative_dirs)
        for rel, outcome in zip(relative_dirs, outcomes):
            report.paths.append(PathResult(path=base / rel, kind="dir", outcome=outcome))

    async def _ensure_file(self, report: ScaffoldReport, path: Path, content: str) -> None:
        outcome = await asyncio.to_thread(ensure_file, path, content)
        report.paths.append(PathResult(path=path, kind="file", outcome=outcome))

    async def _run(
        self, report: ScaffoldReport, command: str, args: list[str], cwd: Path
    ) -> CommandResult:
        command_line = " ".join([command, *args])
        console.print(f"  [dim]$ {escape(command_line)}[/dim]", highlight=False, soft_wrap=True)
        result = await self.runner.run(command, args, cwd)
        report.commands.append(result)
        return result.check()
