"""Flatten pipeline: discover files, then merge them or copy them flat."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from flattendir.config import BINARY_EXTENSIONS
from flattendir.discovery import discover_files
from flattendir.exceptions import SourceNotFoundError
from flattendir.flatten_to_directory import flatten_to_directory, plan_flat_entries
from flattendir.fs_utils import (
    path_exists_async,
    read_text_async,
    remove_empty_dirs_async,
    remove_file_async,
)
from flattendir.merge import merge_to_markdown
from flattendir.schemas import FlattenResult
from flattendir.schemas.result import OutputMode
from flattendir.summary import format_summary, token_counting_available

logger = logging.getLogger(__name__)


@dataclass
class FlattenOptions:
    """Options for a flatten run.

    Attributes:
        move: If True, remove the originals once they are written to the target.
        overwrite: If True, replace existing target entries instead of failing.
        ignore_patterns: Extra gitignore-style patterns to skip.
        respect_gitignore: If True, honour ``.gitignore`` files in the source tree.
        flatten_to_directory: If True, copy files into a flat directory instead
            of merging them into one Markdown document.
        dry_run: If True, log what would happen without touching the filesystem.
        verbose: If True, log the search at INFO instead of DEBUG.
    """

    move: bool = False
    overwrite: bool = False
    ignore_patterns: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    flatten_to_directory: bool = False
    dry_run: bool = False
    verbose: bool = False


async def flatten_directory(
    source: str | Path,
    target: str | Path,
    options: FlattenOptions | None = None,
) -> FlattenResult:
    """Flatten the tree under ``source`` into ``target``.

    In the default merge mode ``target`` is a Markdown file holding a
    linked outline of the tree followed by every file's content. With
    ``flatten_to_directory`` it is a directory receiving one file per
    source file, named by joining its escaped path segments.

    Args:
        source: Directory to flatten.
        target: Markdown file or directory to write.
        options: Processing options. Uses defaults if None.

    Returns:
        What was processed, and a printable summary.

    Raises:
        SourceNotFoundError: If ``source`` is missing or not a directory.
        TargetConflictError: If a target entry exists and overwrite is off.
        TreeConflictError: If the discovered paths do not form a valid tree.
        FileOperationError: If a filesystem operation fails.
    """
    opts = options or FlattenOptions()
    abs_source = Path(source).expanduser().resolve()
    abs_target = Path(target).expanduser().resolve()
    mode: OutputMode = "directory" if opts.flatten_to_directory else "markdown"

    if abs_source == abs_target:
        logger.info("Source and target are the same; skipping.")
        return FlattenResult(
            mode=mode,
            source=abs_source,
            target=abs_target,
            skipped=True,
            summary="Source and target are the same; nothing to do.",
        )

    await _ensure_source_directory(abs_source)

    ignore_patterns = list(opts.ignore_patterns)
    if not opts.flatten_to_directory:
        ignore_patterns.extend(f"*.{ext}" for ext in BINARY_EXTENSIONS)

    search_level = logging.INFO if opts.verbose else logging.DEBUG
    logger.log(search_level, "Searching recursively from: %s", abs_source)
    discovery = await asyncio.to_thread(
        discover_files,
        abs_source,
        ignore_patterns=ignore_patterns,
        respect_gitignore=opts.respect_gitignore,
        exclude=[abs_target],
    )
    logger.log(search_level, "Directories searched:")
    for directory in discovery.directories:
        logger.log(search_level, "%s", directory)

    files = discovery.files

    if opts.dry_run:
        return _dry_run(files, abs_source, abs_target, mode, opts)

    document: str | None = None
    if opts.flatten_to_directory:
        report = await flatten_to_directory(
            files, abs_source, abs_target, move=opts.move, overwrite=opts.overwrite
        )
        processed = [entry.rel_path for entry in report.written]
        overwritten = report.overwritten
    else:
        merge_report = await merge_to_markdown(
            files, abs_source, abs_target, overwrite=opts.overwrite
        )
        processed = [s.rel_path for s in merge_report.sections if s.kind == "file"]
        overwritten = [abs_target] if merge_report.overwritten else []
        if opts.move:
            for src_path in files:
                await remove_file_async(src_path)
        if token_counting_available():
            document = await read_text_async(abs_target)

    if opts.move:
        removed = await remove_empty_dirs_async(abs_source)
        logger.debug("Removed %d empty directories under %s", len(removed), abs_source)

    summary = format_summary(
        mode=mode,
        source=abs_source,
        target=abs_target,
        file_count=len(processed),
        moved=opts.move,
        document=document,
    )
    return FlattenResult(
        mode=mode,
        source=abs_source,
        target=abs_target,
        files=processed,
        overwritten=overwritten,
        moved=opts.move,
        summary=summary,
    )


async def _ensure_source_directory(source: Path) -> None:
    if not await path_exists_async(source):
        raise SourceNotFoundError(f'Source directory "{source}" does not exist.')
    if not await asyncio.to_thread(source.is_dir):
        raise SourceNotFoundError(f'Source "{source}" is not a directory.')


def _dry_run(
    files: list[Path],
    source: Path,
    target: Path,
    mode: OutputMode,
    opts: FlattenOptions,
) -> FlattenResult:
    action = "Move" if opts.move else "Copy"
    logger.info("Dry run mode: no files will be modified.")
    logger.info("Would process %d files", len(files))

    if opts.flatten_to_directory:
        for entry in plan_flat_entries(files, source, target):
            logger.info("%s: %s -> %s", action, entry.src_path, entry.tgt_path)
    else:
        for src_path in files:
            logger.info("%s: %s -> %s", action, src_path, target)
        logger.info("Would merge contents into Markdown file: %s", target)

    return FlattenResult(
        mode=mode,
        source=source,
        target=target,
        files=[path.relative_to(source).as_posix() for path in files],
        moved=opts.move,
        dry_run=True,
        summary=format_summary(
            mode=mode,
            source=source,
            target=target,
            file_count=len(files),
            moved=opts.move,
            dry_run=True,
        ),
    )
