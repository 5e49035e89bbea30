"""Build a logical directory tree from a flat list of relative paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from flattendir.exceptions import TreeConflictError
from flattendir.schemas import DirectoryNode, FileNode, FileTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A discovered file: its posix path under the root and where to read it."""

    rel_path: str
    src_path: Path


def entries_for(files: Iterable[Path], root: Path) -> list[FileEntry]:
    """Pair absolute file paths with their posix paths relative to ``root``.

    This is the only place separators are normalized.
    """
    return [FileEntry(rel_path=path.relative_to(root).as_posix(), src_path=path) for path in files]


def build_tree(entries: Iterable[FileEntry]) -> FileTree:
    """Insert every entry into a fresh tree, creating directories on demand.

    Raises:
        TreeConflictError: If a path needs a directory where a file with the
            same name exists, or the other way round.
    """
    tree = FileTree()
    for entry in entries:
        _insert(tree, entry)
    return tree


def _insert(tree: FileTree, entry: FileEntry) -> None:
    *dir_parts, file_name = entry.rel_path.split("/")
    node = tree.root
    for part in dir_parts:
        child_id = node.children.get(part)
        if child_id is None:
            node = tree.add_directory(node, part)
            continue
        child = tree.node(child_id)
        if not isinstance(child, DirectoryNode):
            raise TreeConflictError(
                f"Path {entry.rel_path!r} needs directory {child.rel_path!r}, "
                "but a file with that name already exists"
            )
        node = child

    existing_id = node.children.get(file_name)
    if existing_id is not None:
        existing = tree.node(existing_id)
        if not isinstance(existing, FileNode):
            raise TreeConflictError(
                f"File {entry.rel_path!r} collides with an existing directory"
            )
        logger.warning(
            "Duplicate path %s: %s replaces %s",
            entry.rel_path,
            entry.src_path,
            existing.src_path,
        )
        existing.src_path = entry.src_path
        return

    tree.add_file(node, file_name, entry.rel_path, entry.src_path)
