"""fullstack-scaffold scaffolder -- generates React + Express project trees.

Quick usage::

    import asyncio

    from fullstack_scaffold.scaffolder import ProjectScaffolder, ScaffoldRequest

    scaffolder = ProjectScaffolder()
    report = asyncio.run(scaffolder.scaffold(ScaffoldRequest(project_name="demo")))
"""

from fullstack_scaffold.scaffolder.filesystem import (
    WriteOutcome,
    ensure_directories,
    ensure_directory,
    ensure_file,
    write_if_absent,
)
from fullstack_scaffold.scaffolder.generator import (
    ProjectScaffolder,
    ScaffoldReport,
    ScaffoldRequest,
)
from fullstack_scaffold.scaffolder.runner import (
    CommandError,
    CommandResult,
    ScaffoldError,
    SubprocessRunner,
)
from fullstack_scaffold.scaffolder.templates import TemplateRegistry

__all__ = [
    "CommandError",
    "CommandResult",
    "ProjectScaffolder",
    "ScaffoldError",
    "ScaffoldReport",
    "ScaffoldRequest",
    "SubprocessRunner",
    "TemplateRegistry",
    "WriteOutcome",
    "ensure_directories",
    "ensure_directory",
    "ensure_file",
    "write_if_absent",
]
