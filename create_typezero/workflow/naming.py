"""Target directory and package name normalisation.

``format_target_dir`` cleans up a directory string typed by the user, while
``is_valid_package_name`` / ``to_valid_package_name`` check and derive an
npm-compatible manifest name from an arbitrary directory name.
"""

from __future__ import annotations

import os
import re

__all__ = [
    "FALLBACK_PACKAGE_NAME",
    "format_target_dir",
    "is_valid_package_name",
    "to_valid_package_name",
]

FALLBACK_PACKAGE_NAME = "my-app"

_PACKAGE_NAME = re.compile(
    r"(?:@[a-z0-9\-*~][a-z0-9\-*._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*",
    re.ASCII,
)
_WHITESPACE = re.compile(r"\s+")
_LEADING_DOT_OR_UNDERSCORE = re.compile(r"^[._]")
_INVALID_CHARS = re.compile(r"[^a-z0-9\-~]+")

_TRAILING_SEPARATORS = "/" + (os.sep if os.sep != "/" else "")


def format_target_dir(target_dir: str | None) -> str | None:
    """Trim *target_dir* and strip trailing path separators.

    ``None`` passes through unchanged so callers can tell "not supplied" apart
    from an empty answer.

    Examples::

        format_target_dir("  my-app/ ") -> "my-app"
        format_target_dir("a/b//")      -> "a/b"
        format_target_dir("/")          -> ""
    """
    if target_dir is None:
        return None
    return target_dir.strip().rstrip(_TRAILING_SEPARATORS)


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` if *name* is acceptable as a ``package.json`` name."""
    return _PACKAGE_NAME.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """Derive a valid package name from an arbitrary directory name.

    * Trims and lowercases the input.
    * Replaces whitespace runs with a single hyphen.
    * Drops one leading ``.`` or ``_``.
    * Replaces every run of other disallowed characters with a single hyphen.

    An input that reduces to nothing (``"."``, ``"_"``, blanks) yields
    :data:`FALLBACK_PACKAGE_NAME`, so the result always passes
    :func:`is_valid_package_name`.

    Examples::

        to_valid_package_name("My App")  -> "my-app"
        to_valid_package_name(".hidden") -> "hidden"
        to_valid_package_name("foo@bar") -> "foo-bar"
    """
    candidate = name.strip().lower()
    candidate = _WHITESPACE.sub("-", candidate)
    candidate = _LEADING_DOT_OR_UNDERSCORE.sub("", candidate, count=1)
    candidate = _INVALID_CHARS.sub("-", candidate)
    return candidate or FALLBACK_PACKAGE_NAME
