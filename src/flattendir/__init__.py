"""flattendir: flatten a directory tree into one Markdown file or one flat folder."""

from flattendir.exceptions import (
    FileOperationError,
    FlattendirError,
    SourceNotFoundError,
    TargetConflictError,
    TreeConflictError,
)
from flattendir.flatten import FlattenOptions, flatten_directory
from flattendir.schemas import FlattenResult

__version__ = "1.1.0"

__all__ = [
    "FileOperationError",
    "FlattenOptions",
    "FlattenResult",
    "FlattendirError",
    "SourceNotFoundError",
    "TargetConflictError",
    "TreeConflictError",
    "flatten_directory",
]
