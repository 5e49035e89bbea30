"""Assign anchors to every node and lay the tree out as document sections."""

from __future__ import annotations

from flattendir.config import ROOT_SECTION_TITLE
from flattendir.schemas import DirectoryNode, FileNode, FileTree, Section
from flattendir.slugger import Slugger


def canonical_order(tree: FileTree, directory: DirectoryNode) -> list[int]:
    """Order a directory's children: directories first, then files, each by name ignoring case."""

    def sort_key(child_id: int) -> tuple[bool, str, str]:
        child = tree.node(child_id)
        return (isinstance(child, FileNode), child.name.lower(), child.name)

    return sorted(directory.children.values(), key=sort_key)


def assign_anchors(tree: FileTree) -> tuple[FileTree, list[Section]]:
    """Slug every node and return the slugged copy with its section list.

    The input tree is left untouched. Slugs are handed out in section
    order, so the first of several identical headings keeps the plain slug.
    The root section always comes first; every other directory section
    follows the sections of its subdirectories and precedes its own files.
    """
    slugged = tree.model_copy(deep=True)
    slugger = Slugger()
    sections: list[Section] = []

    root = slugged.root
    root.slug = slugger.slug(ROOT_SECTION_TITLE)
    sections.append(
        Section(
            kind="root",
            node_id=root.id,
            rel_path=root.rel_path,
            heading=ROOT_SECTION_TITLE,
            slug=root.slug,
        )
    )
    _collect_sections(slugged, root, slugger, sections)
    return slugged, sections


def _collect_sections(
    tree: FileTree,
    directory: DirectoryNode,
    slugger: Slugger,
    sections: list[Section],
) -> None:
    directory.ordered_children = canonical_order(tree, directory)
    children = [tree.node(child_id) for child_id in directory.ordered_children]

    for child in children:
        if isinstance(child, DirectoryNode):
            _collect_sections(tree, child, slugger, sections)

    if directory.family_type == "descendant":
        directory.slug = slugger.slug(directory.rel_path)
        sections.append(
            Section(
                kind="directory",
                node_id=directory.id,
                rel_path=directory.rel_path,
                heading=directory.rel_path,
                slug=directory.slug,
            )
        )

    for child in children:
        if isinstance(child, FileNode):
            child.slug = slugger.slug(child.rel_path)
            sections.append(
                Section(
                    kind="file",
                    node_id=child.id,
                    rel_path=child.rel_path,
                    heading=child.rel_path,
                    slug=child.slug,
                )
            )
