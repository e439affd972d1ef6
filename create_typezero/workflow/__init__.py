"""Interactive decisions of a scaffold run.

Target directory normalisation, package name validation, conflict resolution
for non-empty targets, and the prompt boundary they share.

Quick usage::

    from create_typezero.workflow import TargetSpec, resolve_conflict

    target = TargetSpec.from_input("my-app/")
    decision = await resolve_conflict(target, prompter, cwd=Path.cwd())
"""

from create_typezero.workflow.conflict import (
    ConflictDecision,
    prepare_target_root,
    resolve_conflict,
)
from create_typezero.workflow.naming import (
    FALLBACK_PACKAGE_NAME,
    format_target_dir,
    is_valid_package_name,
    to_valid_package_name,
)
from create_typezero.workflow.prompts import CANCELLED, Cancellation, Choice, Prompter, RichPrompter
from create_typezero.workflow.target import TargetSpec

__all__ = [
    "CANCELLED",
    "Cancellation",
    "Choice",
    "ConflictDecision",
    "FALLBACK_PACKAGE_NAME",
    "Prompter",
    "RichPrompter",
    "TargetSpec",
    "format_target_dir",
    "is_valid_package_name",
    "prepare_target_root",
    "resolve_conflict",
    "to_valid_package_name",
]
