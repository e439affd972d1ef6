"""The target directory a scaffold run writes into."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .naming import FALLBACK_PACKAGE_NAME, format_target_dir

CURRENT_DIR = "."


@dataclass(frozen=True)
class TargetSpec:
    """Normalised target directory.

    Attributes:
        raw_input: The string as typed on the command line or in the prompt,
            ``None`` when nothing was supplied.
        normalized_path: Trimmed path without trailing slashes; falls back to
            the default directory name when the input is empty.
        is_current_dir: ``True`` when the target is ``.``.
    """

    raw_input: str | None
    normalized_path: str
    is_current_dir: bool

    @classmethod
    def from_input(
        cls, raw_input: str | None, default: str = FALLBACK_PACKAGE_NAME
    ) -> "TargetSpec":
        normalized = format_target_dir(raw_input) or default
        return cls(
            raw_input=raw_input,
            normalized_path=normalized,
            is_current_dir=normalized == CURRENT_DIR,
        )

    @property
    def supplied(self) -> bool:
        """Whether a non-empty target was given rather than defaulted."""
        return bool(format_target_dir(self.raw_input))

    def with_answer(self, answer: str, default: str = FALLBACK_PACKAGE_NAME) -> "TargetSpec":
        """Return a target built from a prompt answer; ``self`` is left untouched."""
        return TargetSpec.from_input(answer, default)

    def root(self, cwd: str | Path) -> Path:
        """Absolute target root for a run started in *cwd*."""
        return Path(os.path.normpath(Path(cwd) / self.normalized_path))

    def project_name(self, cwd: str | Path) -> str:
        """Base name of the resolved target, the source of the package name."""
        return os.path.basename(os.path.abspath(self.root(cwd)))

    def describe(self) -> str:
        if self.is_current_dir:
            return "Current directory"
        return f'Target directory "{self.normalized_path}"'
