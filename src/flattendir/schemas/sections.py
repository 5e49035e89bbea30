"""Document section models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

SectionKind = Literal["root", "directory", "file"]


class Section(BaseModel):
    """One addressable unit of the merged document."""

    kind: SectionKind
    node_id: int
    rel_path: str
    heading: str
    slug: str
