"""Find the files to flatten, honouring .gitignore files and extra patterns."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable

import pathspec

from flattendir.config import DEFAULT_IGNORES
from flattendir.exceptions import FileOperationError

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


@dataclass
class DiscoveryResult:
    """Files found under a root, plus the directories that were searched.

    Attributes:
        files: Absolute file paths, sorted.
        directories: Absolute paths of every subdirectory walked, in walk order.
    """

    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)


def discover_files(
    root: Path,
    *,
    ignore_patterns: Iterable[str] = (),
    respect_gitignore: bool = True,
    exclude: Iterable[Path] = (),
) -> DiscoveryResult:
    """Walk ``root`` and return every file that no ignore rule matches.

    Args:
        root: Absolute directory to search.
        ignore_patterns: Extra gitignore-style patterns, relative to ``root``.
        respect_gitignore: If True, apply every ``.gitignore`` found in the
            tree to the paths below it.
        exclude: Absolute paths to leave out (files, or directories that are
            not descended into), e.g. the output target.

    Symlinked directories are followed, except where a link points back
    at one of its own ancestors.

    Returns:
        The discovered files and the directories searched.

    Raises:
        FileOperationError: If a directory cannot be listed or a
            ``.gitignore`` cannot be read.
    """
    base_spec = pathspec.GitIgnoreSpec.from_lines([*DEFAULT_IGNORES, *ignore_patterns])
    gitignores: dict[PurePosixPath, pathspec.GitIgnoreSpec] = {}
    excluded = {Path(path) for path in exclude}
    result = DiscoveryResult()

    # Real paths of each walked directory and its ancestors, to stop symlink loops.
    chains: dict[Path, frozenset[str]] = {root: frozenset({os.path.realpath(root)})}

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error, followlinks=True):
        current = Path(dirpath)
        chain = chains.pop(current)
        rel_dir = PurePosixPath(current.relative_to(root).as_posix())
        if current != root:
            result.directories.append(current)

        if respect_gitignore and GITIGNORE_NAME in filenames:
            gitignores[rel_dir] = _load_gitignore(current / GITIGNORE_NAME)

        kept: list[str] = []
        for name in sorted(dirnames):
            if current / name in excluded:
                logger.debug("Skipping excluded directory %s", current / name)
                continue
            if _is_ignored(rel_dir / name, True, base_spec, gitignores):
                continue
            real = os.path.realpath(current / name)
            if real in chain:
                logger.warning("Skipping symlink loop at %s", current / name)
                continue
            chains[current / name] = chain | {real}
            kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            path = current / name
            if path in excluded:
                logger.debug("Skipping excluded file %s", path)
                continue
            if _is_ignored(rel_dir / name, False, base_spec, gitignores):
                continue
            result.files.append(path)

    result.files.sort()
    return result


def _raise_walk_error(exc: OSError) -> None:
    raise FileOperationError(f"Failed to list {exc.filename}: {exc}") from exc


def _load_gitignore(path: Path) -> pathspec.GitIgnoreSpec:
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        raise FileOperationError(f"Failed to read {path}: {exc}") from exc
    return pathspec.GitIgnoreSpec.from_lines(lines)


def _is_ignored(
    rel_path: PurePosixPath,
    is_dir: bool,
    base_spec: pathspec.GitIgnoreSpec,
    gitignores: dict[PurePosixPath, pathspec.GitIgnoreSpec],
) -> bool:
    suffix = "/" if is_dir else ""
    if base_spec.match_file(f"{rel_path}{suffix}"):
        return True
    # A .gitignore only applies below the directory that contains it.
    for base in reversed(rel_path.parents):
        spec = gitignores.get(base)
        if spec is not None and spec.match_file(f"{rel_path.relative_to(base)}{suffix}"):
            return True
    return False
