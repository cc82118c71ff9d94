"""fullstack-scaffold configuration.

Typed configuration for a scaffolding run.  Every setting is a Pydantic v2
model so values are validated at construction time and can be serialised
to/from JSON or read from ``SCAFFOLD_*`` environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from fullstack_scaffold.utils import camel_case


class RouteConfig(BaseModel):
    """An Express router stub mounted by the generated ``app.js``."""

    name: str = Field(
        ..., pattern=r"^[A-Za-z][A-Za-z0-9_-]*$", description="Route identifier, e.g. 'profile'"
    )
    mount_path: str = Field(..., description="Mount point, e.g. '/api/profile'")
    module: str = Field(
        ..., pattern=r"^[A-Za-z0-9_-]+$", description="File name under routes/ without .js"
    )

    @field_validator("mount_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("mount_path must start with '/'")
        return value


DEFAULT_ROUTES: list[dict[str, str]] = [
    {"name": "auth", "mount_path": "/api/auth", "module": "auth"},
    {"name": "profile", "mount_path": "/api/profile", "module": "ProfileRoutes"},
    {"name": "activities", "mount_path": "/api/activities", "module": "ActivityRoutes"},
]


class FrontendConfig(BaseModel):
    """Settings for the React + Vite frontend subtree."""

    api_url: str = Field(default="http://localhost:5000")
    api_url_prod: str = Field(default="https://api.example.com")
    dev_url: str = Field(
        default="http://localhost:5173", description="Vite dev server origin allowed by CORS"
    )
    template: str = Field(default="react", description="create-vite template name")
    extra_packages: list[str] = Field(
        default_factory=lambda: ["sass", "react-router-dom", "axios"]
    )
    install_dependencies: bool = Field(default=True)


class BackendConfig(BaseModel):
    """Settings for the Express backend subtree."""

    port: int = Field(default=5000, ge=1, le=65535)
    db_host: str = Field(default="localhost")
    db_user: str = Field(default="root")
    db_password: str = Field(default="password")
    packages: list[str] = Field(
        default_factory=lambda: ["express", "cors", "morgan", "dotenv"]
    )
    install_dependencies: bool = Field(
        default=True, description="Run `npm init -y` and install packages after writing files"
    )
    routes: list[RouteConfig] = Field(
        default_factory=lambda: [RouteConfig(**r) for r in DEFAULT_ROUTES]
    )

    @model_validator(mode="after")
    def _unique_routes(self) -> "BackendConfig":
        # Each route becomes a `const <name>Routes` binding and a routes/<module>.js file.
        seen_names: dict[str, str] = {}
        seen_modules: set[str] = set()
        for route in self.routes:
            identifier = camel_case(route.name)
            if identifier in seen_names:
                raise ValueError(
                    f"route names {seen_names[identifier]!r} and {route.name!r} "
                    f"both map to the identifier {identifier}Routes"
                )
            seen_names[identifier] = route.name
            if route.module in seen_modules:
                raise ValueError(f"route module {route.module!r} is used more than once")
            seen_modules.add(route.module)
        return self


class CommandConfig(BaseModel):
    """How external tools are invoked."""

    npm: str = Field(default="npm", description="npm executable name or path")
    timeout: int = Field(default=900, ge=30, description="Per-command timeout in seconds")


class ScaffoldConfig(BaseModel):
    """Global configuration for one scaffolding run.

    Created once by the CLI (usually via :meth:`from_env`) and handed to
    ``ProjectScaffolder``.
    """

    base_dir: Path = Field(default_factory=Path.cwd)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    commands: CommandConfig = Field(default_factory=CommandConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_path(self, project_name: str) -> Path:
        """Root directory of the project named *project_name*."""
        return self.base_dir / project_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_BASE_DIR, SCAFFOLD_NPM, SCAFFOLD_COMMAND_TIMEOUT,
            SCAFFOLD_API_URL, SCAFFOLD_API_URL_PROD, SCAFFOLD_FRONTEND_URL,
            SCAFFOLD_VITE_TEMPLATE, SCAFFOLD_FRONTEND_PACKAGES,
            SCAFFOLD_BACKEND_PORT, SCAFFOLD_DB_HOST, SCAFFOLD_DB_USER,
            SCAFFOLD_DB_PASS, SCAFFOLD_BACKEND_PACKAGES, SCAFFOLD_SKIP_INSTALL.

        Package lists are comma-separated.  ``SCAFFOLD_SKIP_INSTALL`` set to
        ``1``/``true``/``yes`` disables the dependency installs on both sides
        (the frontend bootstrap still runs).
        """
        skip_install = _env_flag("SCAFFOLD_SKIP_INSTALL")

        frontend_kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_API_URL"):
            frontend_kwargs["api_url"] = os.environ["SCAFFOLD_API_URL"]
        if os.environ.get("SCAFFOLD_API_URL_PROD"):
            frontend_kwargs["api_url_prod"] = os.environ["SCAFFOLD_API_URL_PROD"]
        if os.environ.get("SCAFFOLD_FRONTEND_URL"):
            frontend_kwargs["dev_url"] = os.environ["SCAFFOLD_FRONTEND_URL"]
        if os.environ.get("SCAFFOLD_VITE_TEMPLATE"):
            frontend_kwargs["template"] = os.environ["SCAFFOLD_VITE_TEMPLATE"]
        if os.environ.get("SCAFFOLD_FRONTEND_PACKAGES"):
            frontend_kwargs["extra_packages"] = _split_list(os.environ["SCAFFOLD_FRONTEND_PACKAGES"])
        if skip_install:
            frontend_kwargs["install_dependencies"] = False

        backend_kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_BACKEND_PORT"):
            backend_kwargs["port"] = int(os.environ["SCAFFOLD_BACKEND_PORT"])
        if os.environ.get("SCAFFOLD_DB_HOST"):
            backend_kwargs["db_host"] = os.environ["SCAFFOLD_DB_HOST"]
        if os.environ.get("SCAFFOLD_DB_USER"):
            backend_kwargs["db_user"] = os.environ["SCAFFOLD_DB_USER"]
        if os.environ.get("SCAFFOLD_DB_PASS"):
            backend_kwargs["db_password"] = os.environ["SCAFFOLD_DB_PASS"]
        if os.environ.get("SCAFFOLD_BACKEND_PACKAGES"):
            backend_kwargs["packages"] = _split_list(os.environ["SCAFFOLD_BACKEND_PACKAGES"])
        if skip_install:
            backend_kwargs["install_dependencies"] = False

        command_kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_NPM"):
            command_kwargs["npm"] = os.environ["SCAFFOLD_NPM"]
        if os.environ.get("SCAFFOLD_COMMAND_TIMEOUT"):
            command_kwargs["timeout"] = int(os.environ["SCAFFOLD_COMMAND_TIMEOUT"])

        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_BASE_DIR"):
            kwargs["base_dir"] = Path(os.environ["SCAFFOLD_BASE_DIR"])

        return cls(
            frontend=FrontendConfig(**frontend_kwargs),
            backend=BackendConfig(**backend_kwargs),
            commands=CommandConfig(**command_kwargs),
            **kwargs,
        )


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
