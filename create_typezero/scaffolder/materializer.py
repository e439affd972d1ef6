"""Copy a fetched template tree into the target root.

The template is mirrored file by file: directories are created as needed,
regular files are byte-copied over any same-named file, symlinks are
recreated as links, and anything already in the target that the template does
not mention is left alone.  A target directory where the template has a file
is an error.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path
from typing import AbstractSet


class MaterializationError(Exception):
    """Raised when writing the project into the target root fails."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


def materialize(
    template_root: str | Path,
    target_root: str | Path,
    excluding: AbstractSet[str] = frozenset(),
) -> list[str]:
    """Mirror *template_root* into *target_root*.

    Args:
        template_root: Directory holding the template files.
        target_root: Destination; created if it does not exist.
        excluding: POSIX paths relative to *template_root* that are skipped
            (e.g. ``{"package.json"}``, which is written separately).

    Returns:
        Relative POSIX paths of every file copied, in copy order.

    Raises:
        MaterializationError: On the first filesystem failure.  Files copied
            before the failure stay in place.
    """
    source_root = Path(template_root)
    destination_root = Path(target_root)
    if not source_root.is_dir():
        raise MaterializationError(
            f"Template directory not found: {source_root}", path=source_root
        )

    _make_dir(destination_root)
    copied: list[str] = []
    _copy_dir(source_root, destination_root, source_root, excluding, copied)
    return copied


async def materialize_async(
    template_root: str | Path,
    target_root: str | Path,
    excluding: AbstractSet[str] = frozenset(),
) -> list[str]:
    """Run :func:`materialize` in a worker thread."""
    return await asyncio.to_thread(materialize, template_root, target_root, excluding)


def _copy_dir(
    source_dir: Path,
    destination_dir: Path,
    source_root: Path,
    excluding: AbstractSet[str],
    copied: list[str],
) -> None:
    try:
        entries = sorted(source_dir.iterdir())
    except OSError as exc:
        raise MaterializationError(f"Failed to read {source_dir}: {exc}", path=source_dir) from exc

    for source in entries:
        relative = source.relative_to(source_root).as_posix()
        if relative in excluding:
            continue

        destination = destination_dir / source.name
        if source.is_symlink():
            _copy_link(source, destination, relative)
            copied.append(relative)
            continue
        if source.is_dir():
            _make_dir(destination)
            _copy_dir(source, destination, source_root, excluding, copied)
            continue

        if destination.is_dir():
            raise MaterializationError(
                f"Failed to copy {relative}: {destination} is a directory", path=destination
            )
        try:
            shutil.copy(source, destination)
        except OSError as exc:
            raise MaterializationError(
                f"Failed to copy {relative} to {destination}: {exc}", path=destination
            ) from exc
        copied.append(relative)


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MaterializationError(f"Failed to create directory {path}: {exc}", path=path) from exc


def _copy_link(source: Path, destination: Path, relative: str) -> None:
    # symlinks are recreated, never followed
    try:
        if destination.is_symlink() or destination.is_file():
            destination.unlink()
        os.symlink(os.readlink(source), destination)
    except OSError as exc:
        raise MaterializationError(
            f"Failed to link {relative} to {destination}: {exc}", path=destination
        ) from exc
