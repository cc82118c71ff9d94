"""Command-line entry point.

Usage::

    fullstack-scaffold create my-app
    python -m fullstack_scaffold create my-app
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from fullstack_scaffold import __version__
from fullstack_scaffold.config import ScaffoldConfig
from fullstack_scaffold.scaffolder import (
    CommandError,
    ProjectScaffolder,
    ScaffoldRequest,
)
from fullstack_scaffold.scaffolder.runner import CommandRunner
from fullstack_scaffold.utils import (
    console,
    print_error,
    print_summary_table,
    print_warning,
    sanitize_name,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fullstack-scaffold",
        description="Create a React + Vite frontend with a complete Express backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fullstack-scaffold create my-app\n"
            "  SCAFFOLD_SKIP_INSTALL=1 fullstack-scaffold create my-app\n"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    create = subparsers.add_parser(
        "create",
        help="Create a React + Vite project with an Express backend",
    )
    create.add_argument("project_name", help="Name of the project directory to create")
    return parser


def run_create(
    project_name: str,
    config: ScaffoldConfig | None = None,
    runner: CommandRunner | None = None,
) -> int:
    """Scaffold *project_name* and return the process exit code."""
    try:
        request = ScaffoldRequest(project_name=project_name)
    except ValidationError as exc:
        print_error(f"Error: invalid project name {project_name!r}")
        for err in exc.errors():
            console.print(f"  {err['msg']}", highlight=False)
        suggestion = sanitize_name(project_name)
        if suggestion:
            print_warning(f"Try: fullstack-scaffold create {suggestion}")
        return 1

    try:
        config = config or ScaffoldConfig.from_env()
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError; int() on a bad env value raises one too.
        print_error(f"Error: invalid configuration: {exc}")
        return 1

    scaffolder = ProjectScaffolder(config=config, runner=runner)
    try:
        report = asyncio.run(scaffolder.scaffold(request))
    except CommandError as exc:
        print_error(f"Error: {exc}")
        return exc.result.returncode if exc.result.returncode > 0 else 1
    except OSError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_summary_table(report.summary(), title="Scaffold summary")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``fullstack-scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "create":
        sys.exit(run_create(args.project_name))


if __name__ == "__main__":
    main()
