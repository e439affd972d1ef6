"""create-typezero configuration.

Typed configuration for a scaffold run. Settings use a Pydantic v2 model so
they are validated at construction time and can be built from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PACKAGE_MANAGER = "npm"


@dataclass(frozen=True)
class PackageManagerInfo:
    """The package manager that launched the tool (``npm``, ``pnpm``, ``yarn`` ...)."""

    name: str
    version: str = ""


def package_manager_from_user_agent(user_agent: str | None) -> PackageManagerInfo | None:
    """Parse the ``npm_config_user_agent`` value set by the invoking manager.

    Examples::

        "pnpm/8.6.0 npm/? node/v20.5.0 linux x64" -> PackageManagerInfo("pnpm", "8.6.0")
        "yarn/1.22.19 npm/? node/v18.17.0"        -> PackageManagerInfo("yarn", "1.22.19")
    """
    if not user_agent:
        return None
    token = user_agent.split(" ")[0]
    name, _, version = token.partition("/")
    return PackageManagerInfo(name=name, version=version)


class ScaffoldConfig(BaseModel):
    """Settings for a single scaffold run.

    Instances are created once by the CLI entry point and passed to the
    orchestrator and the template provider.
    """

    default_target_dir: str = Field(default="my-app")
    template: str = Field(default="typezero", min_length=1)
    manifest_name: str = Field(default="package.json")
    initial_version: str = Field(default="0.1.0")
    staging_root: Path = Field(default_factory=Path.home)
    fetch_timeout: int = Field(
        default=600, ge=1, description="Template install timeout in seconds"
    )
    user_agent: str | None = Field(
        default=None, description="Raw npm_config_user_agent of the invoking manager"
    )

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def package_manager(self) -> str:
        """Name of the invoking package manager, ``npm`` when unknown."""
        info = package_manager_from_user_agent(self.user_agent)
        return info.name if info else DEFAULT_PACKAGE_MANAGER

    def staging_dir_for(self, template: str) -> Path:
        """Staging directory that receives the installed *template*."""
        return self.staging_root / f".tmp-{template}"

    def template_dir_for(self, template: str) -> Path:
        """Location of the template files inside its staging directory."""
        return self.staging_dir_for(template) / "node_modules" / template

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            TYPEZERO_TEMPLATE, TYPEZERO_STAGING_ROOT, TYPEZERO_FETCH_TIMEOUT,
            npm_config_user_agent.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so CLI flags that were not given fall through.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TYPEZERO_TEMPLATE"):
            kwargs["template"] = os.environ["TYPEZERO_TEMPLATE"]
        if os.environ.get("TYPEZERO_STAGING_ROOT"):
            kwargs["staging_root"] = Path(os.environ["TYPEZERO_STAGING_ROOT"])
        if os.environ.get("TYPEZERO_FETCH_TIMEOUT"):
            kwargs["fetch_timeout"] = int(os.environ["TYPEZERO_FETCH_TIMEOUT"])
        if os.environ.get("npm_config_user_agent"):
            kwargs["user_agent"] = os.environ["npm_config_user_agent"]

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)
