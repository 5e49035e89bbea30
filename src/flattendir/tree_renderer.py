"""Render a slugged directory as a nested outline of anchor links."""

from __future__ import annotations

from flattendir.schemas import DirectoryNode, FileTree

PARENT_LINK_TEXT = ".."


def render_tree(tree: FileTree, directory: DirectoryNode, depth: int = 0) -> list[str]:
    """Return one ``- [name](#slug)`` line per descendant of ``directory``.

    Subdirectories are shown with a trailing ``/`` and expanded right below
    their own line, two spaces deeper. When rendering a non-root directory
    at depth 0 the first line links back to its parent.
    """
    indent = "  " * depth
    lines: list[str] = []

    if directory.family_type == "descendant" and depth == 0:
        parent = tree.parent_of(directory)
        parent_slug = parent.slug if parent is not None and parent.slug else ""
        lines.append(f"{indent}- [{PARENT_LINK_TEXT}](#{parent_slug})")

    for child_id in directory.ordered_children:
        child = tree.node(child_id)
        if isinstance(child, DirectoryNode):
            lines.append(f"{indent}- [{child.name}/](#{child.slug})")
            lines.extend(render_tree(tree, child, depth + 1))
        else:
            lines.append(f"{indent}- [{child.name}](#{child.slug})")

    return lines
