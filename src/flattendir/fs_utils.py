"""Filesystem helpers that run blocking calls in a thread pool."""

from __future__ import annotations

import asyncio
import errno
import os
import shutil
from pathlib import Path

from flattendir.config import FLATTENDIR_ENCODING
from flattendir.exceptions import FileOperationError


async def read_text_async(path: Path, encoding: str = FLATTENDIR_ENCODING) -> str:
    """Read text from a file asynchronously using a thread pool.

    Undecodable bytes are replaced rather than raising, so a single
    non-text file cannot abort the whole document.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.

    Raises:
        FileOperationError: If the file cannot be read.
    """
    try:
        return await asyncio.to_thread(path.read_text, encoding=encoding, errors="replace")
    except OSError as exc:
        raise FileOperationError(f"Failed to read {path}: {exc}") from exc


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.

    Raises:
        FileOperationError: If the directory cannot be created, e.g. because
            a file already exists at ``path``.
    """
    try:
        await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)
    except OSError as exc:
        raise FileOperationError(f"Failed to create directory {path}: {exc}") from exc


async def path_exists_async(path: Path) -> bool:
    """Check whether anything exists at ``path``.

    Only "does not exist" counts as a negative answer; every other stat
    failure (permissions, I/O) is raised.

    Raises:
        FileOperationError: If the path cannot be inspected.
    """
    try:
        await asyncio.to_thread(os.stat, path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise FileOperationError(f"Failed to inspect {path}: {exc}") from exc
    return True


async def copy_file_async(src: Path, dst: Path) -> None:
    """Copy file bytes from ``src`` to ``dst``, replacing ``dst`` if present."""
    try:
        await asyncio.to_thread(shutil.copyfile, src, dst)
    except OSError as exc:
        raise FileOperationError(f"Failed to copy {src} to {dst}: {exc}") from exc


async def move_file_async(src: Path, dst: Path) -> None:
    """Rename ``src`` to ``dst``.

    Falls back to copy-then-delete when the two paths are on different
    filesystems.
    """
    try:
        await asyncio.to_thread(_move_file, src, dst)
    except OSError as exc:
        raise FileOperationError(f"Failed to move {src} to {dst}: {exc}") from exc


def _move_file(src: Path, dst: Path) -> None:
    try:
        os.replace(src, dst)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.copy2(src, dst)
        os.remove(src)


async def remove_file_async(path: Path) -> None:
    """Delete a file; a file that is already gone is not an error."""
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError as exc:
        raise FileOperationError(f"Failed to remove {path}: {exc}") from exc


async def remove_empty_dirs_async(root: Path) -> list[Path]:
    """Remove every empty directory below ``root``, deepest first.

    ``root`` itself is kept. A directory whose only contents are empty
    directories is removed too.

    Returns:
        The directories that were removed.
    """
    try:
        return await asyncio.to_thread(_remove_empty_dirs, root)
    except OSError as exc:
        raise FileOperationError(f"Failed to prune directories under {root}: {exc}") from exc


def _remove_empty_dirs(root: Path) -> list[Path]:
    removed: list[Path] = []
    for dirpath, _dirnames, _filenames in os.walk(root, topdown=False):
        directory = Path(dirpath)
        if directory == root:
            continue
        with os.scandir(directory) as entries:
            if any(True for _ in entries):
                continue
        directory.rmdir()
        removed.append(directory)
    return removed
