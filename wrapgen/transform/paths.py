"""Import path rewriting helpers."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import Iterable, Optional

from ..config import SourceRewrite


def replace_extension(path: str, extension: str) -> str:
    """Swap the last extension of ``path`` for ``extension``."""
    directory, base = posixpath.split(path)
    stem, _ = posixpath.splitext(base)
    if not directory:
        return stem + extension
    return f"{directory}/{stem}{extension}"


def replace_extension_relative(source: str, extension: str) -> str:
    """Swap the extension of a relative import specifier, keeping it relative.

    Bare package specifiers are returned unchanged. ``./foo`` stays
    ``./foo.js`` rather than collapsing to the bare ``foo.js``, and paths
    with a directory component keep that prefix as written.
    """
    if not source.startswith("."):
        return source
    directory = posixpath.dirname(source)
    if directory in ("", "."):
        return "./" + replace_extension(posixpath.basename(source), extension)
    return replace_extension(source, extension)


def rewrite_source(source: str, rewrites: Iterable[SourceRewrite]) -> str:
    for rewrite in rewrites:
        source = rewrite.apply(source)
    return source


def resolve_in_tree(source: str, filename: str, components_root: Path) -> Optional[str]:
    """Return ``source`` if, resolved against ``filename``, it stays inside ``components_root``."""
    base = os.path.dirname(os.path.abspath(filename))
    target = os.path.normpath(os.path.join(base, source))
    try:
        relative = os.path.relpath(target, os.path.abspath(components_root))
    except ValueError:
        # different drives on Windows
        return None
    if os.path.isabs(relative) or relative.startswith(".."):
        return None
    return source


def custom_element_source(
    filename: str, components_root: Path, prefix: str, extension: str
) -> str:
    """Path of the original custom element module as seen from the generated wrapper."""
    relative = os.path.relpath(os.path.abspath(filename), os.path.abspath(components_root))
    return prefix + replace_extension(Path(relative).as_posix(), extension)


__all__ = [
    "custom_element_source",
    "replace_extension",
    "replace_extension_relative",
    "resolve_in_tree",
    "rewrite_source",
]
