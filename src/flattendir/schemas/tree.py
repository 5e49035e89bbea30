"""File tree models.

Nodes live in a ``FileTree`` arena and point at each other by integer id.
``parent`` is a lookup key into the arena, never an owning reference.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

FamilyType = Literal["root", "descendant"]

ROOT_ID = 0


class DirectoryNode(BaseModel):
    """A directory in the logical tree."""

    type: Literal["directory"] = "directory"
    id: int
    name: str
    rel_path: str
    family_type: FamilyType = "descendant"
    parent: int | None = None
    slug: str | None = None
    children: dict[str, int] = Field(default_factory=dict)
    ordered_children: list[int] = Field(default_factory=list)


class FileNode(BaseModel):
    """A file leaf carrying the location its content is read from."""

    type: Literal["file"] = "file"
    id: int
    name: str
    rel_path: str
    family_type: FamilyType = "descendant"
    parent: int
    slug: str | None = None
    src_path: Path


Node = Annotated[Union[DirectoryNode, FileNode], Field(discriminator="type")]


class FileTree(BaseModel):
    """Arena of nodes; ``nodes[0]`` is always the root directory."""

    nodes: list[Node] = Field(
        default_factory=lambda: [
            DirectoryNode(id=ROOT_ID, name="", rel_path="", family_type="root")
        ]
    )

    @property
    def root(self) -> DirectoryNode:
        return self.directory(ROOT_ID)

    def node(self, node_id: int) -> DirectoryNode | FileNode:
        return self.nodes[node_id]

    def directory(self, node_id: int) -> DirectoryNode:
        node = self.nodes[node_id]
        if not isinstance(node, DirectoryNode):
            raise TypeError(f"Node {node_id} ({node.rel_path}) is not a directory")
        return node

    def file(self, node_id: int) -> FileNode:
        node = self.nodes[node_id]
        if not isinstance(node, FileNode):
            raise TypeError(f"Node {node_id} ({node.rel_path}) is not a file")
        return node

    def parent_of(self, node: DirectoryNode | FileNode) -> DirectoryNode | None:
        if node.parent is None:
            return None
        return self.directory(node.parent)

    def add_directory(self, parent: DirectoryNode, name: str) -> DirectoryNode:
        rel_path = f"{parent.rel_path}/{name}" if parent.rel_path else name
        node = DirectoryNode(
            id=len(self.nodes), name=name, rel_path=rel_path, parent=parent.id
        )
        self.nodes.append(node)
        parent.children[name] = node.id
        return node

    def add_file(
        self, parent: DirectoryNode, name: str, rel_path: str, src_path: Path
    ) -> FileNode:
        node = FileNode(
            id=len(self.nodes),
            name=name,
            rel_path=rel_path,
            parent=parent.id,
            src_path=src_path,
        )
        self.nodes.append(node)
        parent.children[name] = node.id
        return node

    def file_leaves(self) -> list[FileNode]:
        """Return every file reachable from the root."""
        leaves: list[FileNode] = []
        stack = [self.root]
        while stack:
            directory = stack.pop()
            for child_id in directory.children.values():
                child = self.node(child_id)
                if isinstance(child, DirectoryNode):
                    stack.append(child)
                else:
                    leaves.append(child)
        return leaves
