"""Flatten operation output model."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

OutputMode = Literal["markdown", "directory"]


class FlattenResult(BaseModel):
    """What a single flatten invocation did.

    Attributes:
        mode: "markdown" for merge mode, "directory" for flatten-to-directory.
        source: Absolute source directory.
        target: Absolute target file or directory.
        files: Processed paths relative to the source, in processing order.
        overwritten: Target entries that existed and were replaced.
        moved: True if the originals were removed.
        dry_run: True if nothing was written.
        skipped: True if source and target were the same.
        summary: Human-readable report of the operation.
    """

    mode: OutputMode
    source: Path
    target: Path
    files: list[str] = Field(default_factory=list)
    overwritten: list[Path] = Field(default_factory=list)
    moved: bool = False
    dry_run: bool = False
    skipped: bool = False
    summary: str = ""
