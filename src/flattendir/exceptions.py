"""Custom exceptions for flattendir."""


class FlattendirError(Exception):
    """Base exception for flattendir operations."""


class SourceNotFoundError(FlattendirError):
    """Source directory does not exist or is not a directory."""


class TargetConflictError(FlattendirError):
    """Target entry already exists and overwrite was not requested."""


class TreeConflictError(FlattendirError):
    """A path implies both a file and a directory with the same name."""


class FileOperationError(FlattendirError):
    """Error while reading, copying, moving or inspecting a file."""
