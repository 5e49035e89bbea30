"""Shared schemas for flattendir."""

from flattendir.schemas.result import FlattenResult
from flattendir.schemas.sections import Section
from flattendir.schemas.tree import DirectoryNode, FileNode, FileTree

__all__ = ["DirectoryNode", "FileNode", "FileTree", "FlattenResult", "Section"]
