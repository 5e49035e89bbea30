"""Copy or move every file into one flat target directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from flattendir.escaping import flat_name_for
from flattendir.exceptions import TargetConflictError
from flattendir.fs_utils import (
    copy_file_async,
    mkdir_async,
    move_file_async,
    path_exists_async,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlatEntry:
    """Where one source file ends up in the flat target directory."""

    src_path: Path
    rel_path: str
    tgt_path: Path


@dataclass
class FlattenToDirectoryReport:
    """Files written by ``flatten_to_directory`` and the ones it replaced."""

    written: list[FlatEntry]
    overwritten: list[Path]


def plan_flat_entries(files: list[Path], source: Path, target: Path) -> list[FlatEntry]:
    """Compute the escaped target name for each file under ``source``."""
    entries: list[FlatEntry] = []
    for src_path in sorted(files):
        rel = src_path.relative_to(source)
        entries.append(
            FlatEntry(
                src_path=src_path,
                rel_path=rel.as_posix(),
                tgt_path=target / flat_name_for(rel),
            )
        )
    return entries


async def flatten_to_directory(
    files: list[Path],
    source: Path,
    target: Path,
    *,
    move: bool = False,
    overwrite: bool = False,
) -> FlattenToDirectoryReport:
    """Copy (or move) each file to ``target`` under its flat, escaped name.

    Files are handled one at a time. A file whose target name already
    exists is skipped unless ``overwrite`` is set; the remaining files are
    still processed and a single ``TargetConflictError`` listing every
    skipped entry is raised at the end.

    Args:
        files: Absolute paths of the files to flatten.
        source: Absolute source root the files live under.
        target: Absolute target directory, created if missing.
        move: If True, rename files instead of copying them.
        overwrite: If True, replace existing target entries.

    Returns:
        A report of written and overwritten entries.

    Raises:
        TargetConflictError: If any target entry existed without ``overwrite``.
        FileOperationError: If a stat, copy or rename fails.
    """
    await mkdir_async(target, parents=True, exist_ok=True)

    report = FlattenToDirectoryReport(written=[], overwritten=[])
    conflicts: list[Path] = []

    for entry in plan_flat_entries(files, source, target):
        if await path_exists_async(entry.tgt_path):
            if not overwrite:
                conflicts.append(entry.tgt_path)
                continue
            logger.warning("Overwriting existing file: %s", entry.tgt_path)
            report.overwritten.append(entry.tgt_path)

        if move:
            await move_file_async(entry.src_path, entry.tgt_path)
        else:
            await copy_file_async(entry.src_path, entry.tgt_path)
        report.written.append(entry)

    if conflicts:
        names = ", ".join(f'"{path}"' for path in conflicts)
        raise TargetConflictError(
            f"Target file(s) {names} already exist. Use --overwrite to force."
        )

    return report
