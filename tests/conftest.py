"""Shared pytest fixtures for the create-typezero test suite.

Provides reusable fixtures for:
- A sample template tree as the package manager would install it
- Configuration pointing the staging directory into ``tmp_path``
- A scripted prompter that replays canned answers
- A fake template provider that skips the package manager
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_typezero.config import ScaffoldConfig
from create_typezero.scaffolder.template_provider import TemplateBundle, list_files
from create_typezero.workflow.prompts import CANCELLED, Cancellation, Choice


# ---------------------------------------------------------------------------
# Template fixtures
# ---------------------------------------------------------------------------

TEMPLATE_MANIFEST: dict[str, Any] = {
    "name": "typezero",
    "private": True,
    "version": "3.2.1",
    "type": "module",
    "scripts": {"dev": "vite", "build": "tsc && vite build"},
    "devDependencies": {"typescript": "^5.4.0", "vite": "^5.2.0"},
}


def write_template(root: Path, *, npm_ignore: bool = False) -> Path:
    """Create a small TypeZero-like template under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=2), encoding="utf-8")
    (root / "README.md").write_text("# TypeZero\n", encoding="utf-8")
    (root / "index.html").write_text("<!doctype html>\n", encoding="utf-8")
    (root / "src" / "lib").mkdir(parents=True)
    (root / "src" / "main.ts").write_text("import './lib/util'\n", encoding="utf-8")
    (root / "src" / "lib" / "util.ts").write_text("export const x = 1\n", encoding="utf-8")
    (root / "public").mkdir()
    (root / "public" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01")
    ignore_name = ".npmignore" if npm_ignore else ".gitignore"
    (root / ignore_name).write_text("node_modules\ndist\n", encoding="utf-8")
    return root


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """An installed template tree (already normalised, ships ``.gitignore``)."""
    return write_template(tmp_path / "template")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory used as the current working directory of a run."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path: Path) -> ScaffoldConfig:
    """Config whose staging directory lives inside ``tmp_path``."""
    return ScaffoldConfig(staging_root=tmp_path / "home", user_agent=None)


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Prompter that replays *answers* in order.

    Running out of answers behaves like the user pressing Ctrl-C.  Every
    message asked is recorded in :attr:`messages`.
    """

    def __init__(self, answers: Sequence[Any] = ()) -> None:
        self.answers = list(answers)
        self.messages: list[str] = []
        self.defaults: list[str] = []
        self.choices: list[list[str]] = []
        self.rejected: list[str] = []

    def _next(self) -> Any:
        if not self.answers:
            return CANCELLED
        return self.answers.pop(0)

    async def text(self, message: str, *, default: str = "", validate=None) -> str | Cancellation:
        self.messages.append(message)
        self.defaults.append(default)
        while True:
            answer = self._next()
            if answer is CANCELLED:
                return CANCELLED
            if validate is None or validate(answer) is True:
                return answer
            self.rejected.append(answer)

    async def select(self, message: str, choices: Sequence[Choice], *, initial: int = 0) -> Any:
        self.messages.append(message)
        self.choices.append([choice.title for choice in choices])
        return self._next()


@pytest.fixture
def scripted_prompter():
    """Factory for :class:`ScriptedPrompter` instances.

    Usage:
        def test_flow(scripted_prompter):
            prompter = scripted_prompter(["my-app"])
    """
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Template provider
# ---------------------------------------------------------------------------


class FakeTemplateProvider:
    """Yields a prepared template directory instead of running a package manager."""

    def __init__(self, template_root: Path, error: Exception | None = None) -> None:
        self.template_root = template_root
        self.error = error
        self.fetched: list[str | None] = []
        self.released = 0

    @asynccontextmanager
    async def fetch(self, template: str | None = None) -> AsyncIterator[TemplateBundle]:
        self.fetched.append(template)
        try:
            if self.error is not None:
                raise self.error
            yield TemplateBundle(
                staging_root=self.template_root.parent,
                template_root=self.template_root,
                file_list=list_files(self.template_root),
            )
        finally:
            self.released += 1


@pytest.fixture
def fake_provider(template_dir: Path) -> FakeTemplateProvider:
    return FakeTemplateProvider(template_dir)


@pytest.fixture
def failing_provider(template_dir: Path):
    """Factory for providers whose fetch raises *error*."""

    def factory(error: Exception) -> FakeTemplateProvider:
        return FakeTemplateProvider(template_dir, error=error)

    return factory


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_install():
    """Side effect for a patched ``run_command`` that mimics ``npm install``.

    The returned coroutine function writes a template into
    ``<cwd>/node_modules/<name>`` and records each command it was given.
    """
    calls: list[list[str]] = []

    async def _install(cmd: list[str], cwd=None, timeout=None, env=None):
        calls.append(list(cmd))
        name = cmd[-1].rsplit("@", 1)[0]
        write_template(Path(cwd) / "node_modules" / name, npm_ignore=True)
        return 0, "added 1 package", ""

    _install.calls = calls
    return _install
