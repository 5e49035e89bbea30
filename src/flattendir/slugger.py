"""GitHub-style heading slugs with a per-document collision counter."""

from __future__ import annotations

import re

_STRIP_RE = re.compile(r"[^\w\s-]")
_SPACE_RE = re.compile(r"\s")

EMPTY_SLUG = "section"


def slugify(text: str) -> str:
    """Lowercase ``text``, drop punctuation and turn each space into a hyphen.

    >>> slugify("src/Main File.py")
    'srcmain-filepy'
    """
    slug = _STRIP_RE.sub("", text.lower())
    return _SPACE_RE.sub("-", slug)


class Slugger:
    """Hand out unique slugs for one document.

    The first heading to claim a base slug keeps it; later ones get
    ``-1``, ``-2`` and so on, skipping any suffix already taken.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, text: str) -> str:
        base = slugify(text) or EMPTY_SLUG
        slug = base
        while slug in self._occurrences:
            self._occurrences[base] += 1
            slug = f"{base}-{self._occurrences[base]}"
        self._occurrences[slug] = 0
        return slug
