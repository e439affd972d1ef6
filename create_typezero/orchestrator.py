"""create-typezero scaffold orchestrator.

Runs one scaffold in order:

1. TARGET    -- normalise the directory argument or ask for a project name.
2. CONFLICT  -- decide how to treat a non-empty target.
3. NAME      -- make sure the package name is valid, asking if it is not.
4. FETCH     -- install the template into a staging directory.
5. PREPARE   -- create or clean the target root.
6. WRITE     -- copy template files, then write the rewritten manifest.
7. NEXT STEPS

A cancelled prompt at any step yields :attr:`ScaffoldOutcome.CANCELLED` and
nothing further runs.  Fetch and write failures propagate as
:class:`~create_typezero.scaffolder.FetchError` /
:class:`~create_typezero.scaffolder.MaterializationError`.
"""

from __future__ import annotations

import enum
import os
from pathlib import Path

from create_typezero.config import ScaffoldConfig
from create_typezero.scaffolder import ManifestRewriter, TemplateProvider, materialize_async
from create_typezero.utils import console, print_cancelled, print_info, print_success
from create_typezero.workflow import (
    CANCELLED,
    Cancellation,
    ConflictDecision,
    Prompter,
    TargetSpec,
    is_valid_package_name,
    prepare_target_root,
    resolve_conflict,
    to_valid_package_name,
)

INVALID_PACKAGE_NAME = "Invalid package.json name"


class ScaffoldOutcome(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def suggested_package_name(target: TargetSpec, cwd: str | Path) -> str:
    """Default answer for the package name prompt, derived from *target*."""
    return to_valid_package_name(target.project_name(cwd))


def validate_package_name(answer: str) -> bool | str:
    return is_valid_package_name(answer) or INVALID_PACKAGE_NAME


def next_steps(root: Path, cwd: Path, package_manager: str) -> list[str]:
    """Commands the user should run after scaffolding."""
    lines: list[str] = []
    relative = os.path.relpath(root, cwd)
    if relative != os.curdir:
        if any(char.isspace() for char in relative):
            relative = f'"{relative}"'
        lines.append(f"cd {relative}")

    if package_manager == "yarn":
        lines.extend(["yarn", "yarn dev"])
    else:
        lines.extend([f"{package_manager} install", f"{package_manager} run dev"])
    return lines


class ScaffoldOrchestrator:
    """Drives a single scaffold run.

    Attributes:
        config: Run configuration.
        prompter: Answers the interactive questions.
        provider: Fetches the template.
        cwd: Directory relative targets are resolved against.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Prompter,
        provider: TemplateProvider | None = None,
        *,
        cwd: str | Path | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.provider = provider or TemplateProvider(config)
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.rewriter = ManifestRewriter(
            version=config.initial_version, manifest_name=config.manifest_name
        )

    # ------------------------------------------------------------------
    # Interactive steps
    # ------------------------------------------------------------------

    async def resolve_target(self, target_input: str | None) -> TargetSpec | Cancellation:
        """Use the supplied directory, or ask for a project name."""
        default = self.config.default_target_dir
        target = TargetSpec.from_input(target_input, default)
        if target.supplied:
            return target

        answer = await self.prompter.text("Project name:", default=default)
        if answer is CANCELLED:
            return CANCELLED
        return target.with_answer(answer, default)

    async def resolve_package_name(self, target: TargetSpec) -> str | Cancellation:
        """Package name from the target's base name, asking when it is invalid."""
        project_name = target.project_name(self.cwd)
        if is_valid_package_name(project_name):
            return project_name

        return await self.prompter.text(
            "Package name:",
            default=suggested_package_name(target, self.cwd),
            validate=validate_package_name,
        )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, target_input: str | None = None) -> ScaffoldOutcome:
        target = await self.resolve_target(target_input)
        if target is CANCELLED:
            return self._cancel()

        decision = await resolve_conflict(target, self.prompter, cwd=self.cwd)
        if decision is ConflictDecision.CANCEL:
            return self._cancel()

        package_name = await self.resolve_package_name(target)
        if package_name is CANCELLED:
            return self._cancel()

        root = target.root(self.cwd)
        console.print()
        print_info(f"Scaffolding project in {root}")

        async with self.provider.fetch(self.config.template) as bundle:
            # the target is only touched once the template is in hand
            prepare_target_root(root, decision)
            await materialize_async(
                bundle.template_root, root, excluding={self.config.manifest_name}
            )
            self.rewriter.rewrite(bundle.template_root, root, package_name)

        self._print_next_steps(root)
        return ScaffoldOutcome.COMPLETED

    def _cancel(self) -> ScaffoldOutcome:
        print_cancelled()
        return ScaffoldOutcome.CANCELLED

    def _print_next_steps(self, root: Path) -> None:
        console.print()
        print_success("Done. Now run:")
        console.print()
        for line in next_steps(root, self.cwd, self.config.package_manager):
            print_info(f"  {line}")
        console.print()
