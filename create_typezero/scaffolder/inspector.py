"""Read-only checks on a target directory, plus the clean-out used before overwrite."""

from __future__ import annotations

import shutil
from pathlib import Path

GIT_DIR = ".git"


def exists(path: str | Path) -> bool:
    return Path(path).exists()


def is_empty_dir(path: str | Path) -> bool:
    """Return ``True`` if *path* holds no entries, or only a ``.git`` entry.

    Paths that are missing or are not directories are never "empty"; callers
    check :func:`exists` first.
    """
    directory = Path(path)
    if not directory.is_dir():
        return False
    entries = [entry.name for entry in directory.iterdir()]
    return not entries or entries == [GIT_DIR]


def empty_dir(path: str | Path) -> None:
    """Remove every entry of *path* except ``.git``.  A missing path is a no-op."""
    directory = Path(path)
    if not directory.exists():
        return
    for entry in directory.iterdir():
        if entry.name == GIT_DIR:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
