"""Decide what to do with a target directory that already has content."""

from __future__ import annotations

import enum
from pathlib import Path

from create_typezero.scaffolder import inspector
from create_typezero.scaffolder.materializer import MaterializationError

from .prompts import CANCELLED, Choice, Prompter
from .target import TargetSpec


class ConflictDecision(enum.Enum):
    """How to treat a non-empty target root."""

    CANCEL = "no"
    OVERWRITE_CLEAN = "yes"
    MERGE_IGNORE_EXISTING = "ignore"


CONFLICT_CHOICES: tuple[Choice[ConflictDecision], ...] = (
    Choice("Cancel operation", ConflictDecision.CANCEL),
    Choice("Remove existing files and continue", ConflictDecision.OVERWRITE_CLEAN),
    Choice("Ignore files and continue", ConflictDecision.MERGE_IGNORE_EXISTING),
)


def needs_decision(root: str | Path) -> bool:
    """``True`` when *root* exists and holds something besides ``.git``."""
    return inspector.exists(root) and not inspector.is_empty_dir(root)


def conflict_message(target: TargetSpec) -> str:
    return f"{target.describe()} is not empty. Please choose how to proceed:"


async def resolve_conflict(
    target: TargetSpec,
    prompter: Prompter,
    *,
    cwd: str | Path,
) -> ConflictDecision | None:
    """Ask how to handle existing content in the target root.

    Returns ``None`` without prompting when the root is missing or empty.
    Aborting the prompt counts as :attr:`ConflictDecision.CANCEL`.
    """
    if not needs_decision(target.root(cwd)):
        return None

    answer = await prompter.select(conflict_message(target), CONFLICT_CHOICES, initial=0)
    if answer is CANCELLED:
        return ConflictDecision.CANCEL
    return answer


def prepare_target_root(root: str | Path, decision: ConflictDecision | None) -> Path:
    """Create or clean *root* according to *decision* and return it.

    Raises:
        ValueError: For :attr:`ConflictDecision.CANCEL`, which must stop the
            run before anything is written.
        MaterializationError: If the directory cannot be cleaned or created.
    """
    root = Path(root)
    if decision is ConflictDecision.CANCEL:
        raise ValueError("a cancelled run must not touch the target directory")

    try:
        if decision is ConflictDecision.OVERWRITE_CLEAN:
            inspector.empty_dir(root)
        elif not root.exists():
            root.mkdir(parents=True)
    except OSError as exc:
        raise MaterializationError(f"Cannot prepare {root}: {exc}", path=root) from exc
    return root
