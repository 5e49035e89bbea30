"""Stream the merged Markdown document section by section."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import TextIO

from flattendir.config import MARKDOWN_EXTENSIONS, TREE_LABEL
from flattendir.fs_utils import read_text_async
from flattendir.schemas import FileTree, Section
from flattendir.tree_renderer import render_tree

DEFAULT_FENCE_LENGTH = 3
MIN_MARKDOWN_FENCE_LENGTH = 4
DEFAULT_LANGUAGE = "text"

_BACKTICK_RUN_RE = re.compile(r"`+")


def language_for(rel_path: str) -> str:
    """Return the file extension without its dot, or ``text`` if there is none."""
    return PurePosixPath(rel_path).suffix[1:] or DEFAULT_LANGUAGE


def fence_for(rel_path: str, content: str) -> str:
    """Pick a backtick fence that the file's own content cannot close.

    Markdown files get a fence one backtick longer than their longest
    backtick run (never fewer than four); everything else gets three.
    """
    if language_for(rel_path).lower() not in MARKDOWN_EXTENSIONS:
        return "`" * DEFAULT_FENCE_LENGTH
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(content)), default=0)
    return "`" * max(MIN_MARKDOWN_FENCE_LENGTH, longest + 1)


def _anchor(slug: str) -> str:
    return f'<a id="{slug}"></a>\n'


def render_directory_section(tree: FileTree, section: Section) -> str:
    """Render the heading and local outline for the root or a directory."""
    directory = tree.directory(section.node_id)
    outline = "".join(f"{line}\n" for line in render_tree(tree, directory))
    return (
        _anchor(section.slug)
        + f"# {section.heading}\n\n"
        + f"{TREE_LABEL}\n\n"
        + outline
        + "\n"
    )


def render_file_section(section: Section, content: str) -> str:
    """Render the heading and fenced content block for one file."""
    fence = fence_for(section.rel_path, content)
    language = language_for(section.rel_path)
    return (
        _anchor(section.slug)
        + f"# {section.heading}\n\n"
        + f"{fence}{language}\n"
        + content
        + f"\n{fence}\n\n"
    )


async def write_document(tree: FileTree, sections: list[Section], sink: TextIO) -> None:
    """Write every section to ``sink`` in order.

    File contents are read one at a time, in section order, right before
    their section is written.
    """
    for section in sections:
        if section.kind == "file":
            node = tree.file(section.node_id)
            content = await read_text_async(node.src_path)
            sink.write(render_file_section(section, content))
        else:
            sink.write(render_directory_section(tree, section))
