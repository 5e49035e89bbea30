"""Local configuration for flattendir."""

from __future__ import annotations

import os


DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MARKDOWN_TARGET = "flattened.md"

# Always skipped, in both output modes.
DEFAULT_IGNORES = (".git",)

# Skipped by default when merging into a single document.
BINARY_EXTENSIONS = (
    "gif",
    "png",
    "jpg",
    "jpeg",
    "webp",
    "svg",
    "bmp",
    "ico",
    "pdf",
    "zip",
    "tar",
    "gz",
    "xz",
    "7z",
    "mp3",
    "mp4",
    "webm",
    "ogg",
    "wav",
    "exe",
    "dll",
    "so",
    "dylib",
    "bin",
)

MARKDOWN_EXTENSIONS = ("md", "markdown")

ROOT_SECTION_TITLE = "Project File Tree"
TREE_LABEL = "File Tree"

FLATTENDIR_ENCODING = os.getenv("FLATTENDIR_ENCODING", DEFAULT_ENCODING)
FLATTENDIR_LOG_LEVEL = os.getenv("FLATTENDIR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
