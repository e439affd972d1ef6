"""Rewrite the template's ``package.json`` for the new project."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .materializer import MaterializationError

MANIFEST_NAME = "package.json"
INITIAL_VERSION = "0.1.0"


@dataclass
class ManifestDocument:
    """A parsed manifest.  Key order is preserved through :meth:`dumps`."""

    data: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    @name.setter
    def name(self, value: str) -> None:
        self.data["name"] = value

    @property
    def version(self) -> str | None:
        return self.data.get("version")

    @version.setter
    def version(self, value: str) -> None:
        self.data["version"] = value

    @classmethod
    def loads(cls, text: str) -> "ManifestDocument":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("manifest must be a JSON object")
        return cls(data)

    def dumps(self) -> str:
        """Tab-indented JSON with a trailing newline."""
        return json.dumps(self.data, indent="\t", ensure_ascii=False) + "\n"


class ManifestRewriter:
    """Stamp the package name and initial version onto a template manifest."""

    def __init__(self, version: str = INITIAL_VERSION, manifest_name: str = MANIFEST_NAME) -> None:
        self.version = version
        self.manifest_name = manifest_name

    def load(self, template_root: str | Path) -> ManifestDocument:
        source = Path(template_root) / self.manifest_name
        try:
            return ManifestDocument.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise MaterializationError(
                f"Cannot read template manifest {source}: {exc}", path=source
            ) from exc

    def rewrite(
        self,
        template_root: str | Path,
        target_root: str | Path,
        package_name: str,
    ) -> Path:
        """Write the adjusted manifest into *target_root* and return its path."""
        document = self.load(template_root)
        document.name = package_name
        document.version = self.version

        destination = Path(target_root) / self.manifest_name
        try:
            destination.write_text(document.dumps(), encoding="utf-8")
        except OSError as exc:
            raise MaterializationError(
                f"Cannot write manifest {destination}: {exc}", path=destination
            ) from exc
        return destination
