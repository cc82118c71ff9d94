"""Jinja2 template registry for the generated project files.

Each engine-owned file has a logical identifier (``"backend.app"``,
``"frontend.env"``...) mapped to a template under
``fullstack_scaffold/scaffolder/templates/`` and to the output path relative
to the subtree it belongs to.  :meth:`TemplateRegistry.render` is the
content-generation function for an identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from fullstack_scaffold.utils import camel_case, pascal_case


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class TemplateEntry:
    """One registered template: where it lives and where it is written."""

    template: str
    output: str


FRONTEND_FILES: dict[str, TemplateEntry] = {
    "frontend.gitignore": TemplateEntry("shared/gitignore.j2", ".gitignore"),
    "frontend.env": TemplateEntry("frontend/env.j2", ".env"),
    "frontend.readme": TemplateEntry("frontend/README.md.j2", "README.md"),
    "frontend.index_html": TemplateEntry("frontend/index.html.j2", "public/index.html"),
    "frontend.main": TemplateEntry("frontend/main.jsx.j2", "src/main.jsx"),
    "frontend.app": TemplateEntry("frontend/App.jsx.j2", "src/App.jsx"),
    "frontend.api": TemplateEntry("frontend/api.js.j2", "src/api/index.js"),
}

BACKEND_FILES: dict[str, TemplateEntry] = {
    "backend.gitignore": TemplateEntry("shared/gitignore.j2", ".gitignore"),
    "backend.env": TemplateEntry("backend/env.j2", ".env"),
    "backend.readme": TemplateEntry("backend/README.md.j2", "README.md"),
    "backend.app": TemplateEntry("backend/app.js.j2", "app.js"),
    "backend.server": TemplateEntry("backend/server.js.j2", "server.js"),
}

# Rendered once per configured route with ``route`` in the context.
ROUTE_TEMPLATE = "backend/route.js.j2"


class TemplateRegistry:
    """Maps logical file identifiers to rendered content.

    Args:
        entries: Identifier -> :class:`TemplateEntry`.  Defaults to the
            frontend and backend file sets.
        template_dir: Root directory for the Jinja2 loader.
    """

    def __init__(
        self,
        entries: dict[str, TemplateEntry] | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        if entries is None:
            entries = {**FRONTEND_FILES, **BACKEND_FILES}
        self.entries = dict(entries)
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.entries

    def identifiers(self, prefix: str = "") -> list[str]:
        """Registered identifiers starting with *prefix*, in registration order."""
        return [key for key in self.entries if key.startswith(prefix)]

    def output_path(self, identifier: str) -> str:
        """Relative output path for *identifier*.

        Raises:
            KeyError: If the identifier is not registered.
        """
        return self.entries[identifier].output

    def render(self, identifier: str, context: dict[str, Any]) -> str:
        """Render the template registered under *identifier*.

        Raises:
            KeyError: If the identifier is not registered.
        """
        return self.render_template(self.entries[identifier].template, context)

    def render_template(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a template by its path relative to the template root."""
        return self.env.get_template(template_path).render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")

