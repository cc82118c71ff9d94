"""Existence-gated directory and file creation.

Every helper here returns a :class:`WriteOutcome` so callers can assert on
what happened instead of parsing console output.  An existing path is never
modified; the check is by existence only, never by content.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from fullstack_scaffold.utils import print_created, print_skipped


class WriteOutcome(str, Enum):
    """Result of an idempotent create operation."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


def ensure_directory(path: str | Path) -> WriteOutcome:
    """Create *path* and any missing ancestors unless it already exists.

    Raises:
        FileExistsError: If *path* exists but is not a directory.
        OSError: Any other filesystem failure (e.g. permission denied) is
            propagated unchanged.
    """
    dir_path = Path(path)
    if dir_path.exists():
        if not dir_path.is_dir():
            raise FileExistsError(f"Path exists and is not a directory: {dir_path}")
        print_skipped(f"Directory already exists: {dir_path}")
        return WriteOutcome.ALREADY_EXISTS

    dir_path.mkdir(parents=True)
    print_created(f"Created directory: {dir_path}")
    return WriteOutcome.CREATED


def ensure_file(path: str | Path, content: str) -> WriteOutcome:
    """Write *content* to *path* unless a file is already there.

    Leading whitespace of *content* is stripped before writing.  The parent
    directory must already exist.

    Raises:
        IsADirectoryError: If *path* is an existing directory.
    """
    file_path = Path(path)
    if file_path.is_dir():
        raise IsADirectoryError(f"Path exists and is a directory: {file_path}")
    if file_path.exists():
        print_skipped(f"File already exists: {file_path}")
        return WriteOutcome.ALREADY_EXISTS

    # "x" mode refuses to clobber a file created between the check and the open.
    with open(file_path, "x", encoding="utf-8", newline="\n") as fh:
        fh.write(content.lstrip())
    print_created(f"Created file: {file_path}")
    return WriteOutcome.CREATED


write_if_absent = ensure_file


def ensure_directories(
    base_dir: str | Path, relative_dirs: list[str]
) -> list[WriteOutcome]:
    """Apply :func:`ensure_directory` to each entry of *relative_dirs* in order."""
    base = Path(base_dir)
    return [ensure_directory(base / rel) for rel in relative_dirs]
