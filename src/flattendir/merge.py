"""Merge a set of files into one navigable Markdown document."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from flattendir.anchors import assign_anchors
from flattendir.config import FLATTENDIR_ENCODING
from flattendir.document import write_document
from flattendir.exceptions import FileOperationError, TargetConflictError
from flattendir.fs_utils import mkdir_async, path_exists_async
from flattendir.schemas import Section
from flattendir.tree_builder import build_tree, entries_for

logger = logging.getLogger(__name__)


@dataclass
class MergeReport:
    """Sections written by ``merge_to_markdown`` and whether the target was replaced."""

    sections: list[Section]
    overwritten: bool


async def merge_to_markdown(
    files: list[Path],
    source: Path,
    target: Path,
    *,
    overwrite: bool = False,
) -> MergeReport:
    """Write the outline and contents of ``files`` to the Markdown file ``target``.

    The document is written to a temporary file beside ``target`` and moved
    into place only once complete, so a failure never leaves a partial
    document at ``target``.

    Args:
        files: Absolute paths of the files to merge.
        source: Absolute source root the files live under.
        target: Absolute path of the document to write.
        overwrite: If True, replace an existing ``target``.

    Returns:
        The sections written, in document order, and whether an existing
        target was replaced.

    Raises:
        TargetConflictError: If ``target`` exists and ``overwrite`` is False.
        TreeConflictError: If the file paths do not form a valid tree.
        FileOperationError: If reading a file or writing the document fails.
    """
    overwritten = await path_exists_async(target)
    if overwritten:
        if not overwrite:
            raise TargetConflictError(
                f'Target file "{target}" already exists. Use --overwrite to force.'
            )
        logger.warning("Overwriting existing file: %s", target)

    tree = build_tree(entries_for(sorted(files), source))
    slugged, sections = assign_anchors(tree)

    await mkdir_async(target.parent, parents=True, exist_ok=True)
    tmp_path: Path | None = None
    finalized = False
    try:
        tmp_path = await asyncio.to_thread(_create_temp_file, target)
        with open(tmp_path, "w", encoding=FLATTENDIR_ENCODING, newline="") as sink:
            await write_document(slugged, sections, sink)
        await asyncio.to_thread(os.replace, tmp_path, target)
        finalized = True
    except OSError as exc:
        raise FileOperationError(f"Failed to write {target}: {exc}") from exc
    finally:
        if not finalized and tmp_path is not None:
            tmp_path.unlink(missing_ok=True)

    logger.debug("Wrote %d sections to %s", len(sections), target)
    return MergeReport(sections=sections, overwritten=overwritten)


def _create_temp_file(target: Path) -> Path:
    fd, name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    os.close(fd)
    os.chmod(name, 0o644)
    return Path(name)
