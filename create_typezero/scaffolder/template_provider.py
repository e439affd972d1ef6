"""Fetch a template package into a private staging directory.

The template is installed with the invoking package manager into
``~/.tmp-<template>``; its files end up under ``node_modules/<template>``.
:meth:`TemplateProvider.fetch` is an async context manager, so the staging
directory is removed on every exit path once the fetch has started.
"""

from __future__ import annotations

import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from create_typezero.config import ScaffoldConfig
from create_typezero.utils import console, print_warning, run_command

NPM_IGNORE = ".npmignore"
GIT_IGNORE = ".gitignore"


class FetchError(Exception):
    """Raised when the template could not be installed."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


@dataclass(frozen=True)
class TemplateBundle:
    """A fetched template, valid until the owning ``fetch`` context exits."""

    staging_root: Path
    template_root: Path
    file_list: tuple[str, ...]


def install_command(package_manager: str, template: str) -> list[str]:
    """Command that installs the latest *template* with *package_manager*."""
    verb = "install" if package_manager == "npm" else "add"
    return [package_manager, verb, f"{template}@latest"]


def list_files(root: Path) -> tuple[str, ...]:
    """Sorted POSIX paths of every file below *root*."""
    return tuple(
        sorted(path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file())
    )


class TemplateProvider:
    """Installs templates through the package manager named in the config."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config

    @asynccontextmanager
    async def fetch(self, template: str | None = None) -> AsyncIterator[TemplateBundle]:
        """Install *template* and yield its :class:`TemplateBundle`.

        Raises:
            FetchError: If the install command fails or times out, or the
                template directory is missing afterwards.  Not retried.
        """
        template = template or self.config.template
        staging_root = self.config.staging_dir_for(template)
        template_root = self.config.template_dir_for(template)

        _remove_tree(staging_root)
        try:
            try:
                staging_root.mkdir(parents=True, exist_ok=True)
                # placeholder manifest so the install lands in this directory
                (staging_root / "package.json").write_text("{}", encoding="utf-8")
            except OSError as exc:
                raise FetchError(
                    f"Cannot prepare staging directory {staging_root}: {exc}"
                ) from exc

            await self._install(template, staging_root)

            if not template_root.is_dir():
                raise FetchError(
                    f"Template '{template}' was installed but {template_root} does not exist"
                )
            _rename_npm_ignore(template_root)

            yield TemplateBundle(
                staging_root=staging_root,
                template_root=template_root,
                file_list=list_files(template_root),
            )
        finally:
            _remove_tree(staging_root)

    async def _install(self, template: str, staging_root: Path) -> None:
        cmd = install_command(self.config.package_manager, template)
        cmd_str = " ".join(cmd)
        console.print(f"[dim]$ {escape(cmd_str)}[/dim]")

        try:
            returncode, _stdout, stderr = await run_command(
                cmd, cwd=staging_root, timeout=self.config.fetch_timeout
            )
        except OSError as exc:
            raise FetchError(f"Could not run {cmd_str}: {exc}", command=cmd_str) from exc

        if returncode != 0:
            raise FetchError(
                f"Template install failed (exit {returncode}): {cmd_str}\n{stderr}",
                command=cmd_str,
                stderr=stderr,
            )


def _rename_npm_ignore(template_root: Path) -> None:
    # npm publishes .gitignore as .npmignore
    npm_ignore = template_root / NPM_IGNORE
    if npm_ignore.exists():
        npm_ignore.replace(template_root / GIT_IGNORE)


def _remove_tree(path: Path) -> None:
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as exc:
        print_warning(f"Could not remove staging directory {path}: {exc}")
