"""Shared helpers for fullstack-scaffold.

Provides the Rich console used for every status line, a few coloured print
helpers, and project-name sanitising.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary string to a safe directory name.

    * Lowercases the input.
    * Replaces characters other than letters, digits, ``.``, ``_`` and ``-``
      with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens
      and dots.

    Examples::

        sanitize_name("My Cool App") -> "my-cool-app"
        sanitize_name("  ../evil  ") -> "evil"
    """
    result = re.sub(r"[^a-zA-Z0-9._-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-.")


def pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``.

    Used for the JavaScript identifiers generated per backend route.
    """
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a bold cyan step heading."""
    console.print(f"[bold cyan]{escape(message)}[/bold cyan]", soft_wrap=True)


def print_created(message: str) -> None:
    """Print a status line for something that was just created."""
    console.print(f"  [green]+[/green] {escape(message)}", highlight=False, soft_wrap=True)


def print_skipped(message: str) -> None:
    """Print a status line for something that already existed."""
    console.print(f"  [dim]=[/dim] {escape(message)}", highlight=False, soft_wrap=True)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()
