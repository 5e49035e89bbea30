"""Escape relative paths into flat, collision-free file names."""

from __future__ import annotations

from pathlib import PurePath

SEPARATOR = "_"


def escape_path_component(component: str) -> str:
    """Double every underscore in a single path segment.

    After escaping, a lone underscore can only come from a joined
    separator, so ``a_b/c`` and ``a/b_c`` never produce the same name.
    """
    return component.replace(SEPARATOR, SEPARATOR * 2)


def flat_name_for(rel_path: PurePath | str) -> str:
    """Build the flat file name for a path relative to the source root.

    >>> flat_name_for("subdir/file_1.txt")
    'subdir_file__1.txt'
    """
    parts = PurePath(rel_path).parts
    return SEPARATOR.join(escape_path_component(part) for part in parts)
