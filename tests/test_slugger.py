"""Tests for heading slugs."""

from __future__ import annotations

import pytest

from flattendir.slugger import Slugger, slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Project File Tree", "project-file-tree"),
        ("subdir", "subdir"),
        ("subdir/file.txt", "subdirfiletxt"),
        ("src/my_module.py", "srcmy_modulepy"),
        ("Docs/Read Me.MD", "docsread-memd"),
        ("a-b/c", "a-bc"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


class TestSlugger:
    """Tests for the Slugger collision counter."""

    def test_first_occurrence_keeps_plain_slug(self) -> None:
        """Later duplicates get increasing numeric suffixes."""
        slugger = Slugger()

        assert slugger.slug("ab") == "ab"
        assert slugger.slug("a.b") == "ab-1"
        assert slugger.slug("a/b") == "ab-2"

    def test_skips_suffix_already_taken(self) -> None:
        """A suffixed slug claimed by a literal heading is not reused."""
        slugger = Slugger()

        assert slugger.slug("a-1") == "a-1"
        assert slugger.slug("a") == "a"
        assert slugger.slug("a") == "a-2"

    def test_empty_slug_falls_back(self) -> None:
        """Headings with no slug characters still get a usable anchor."""
        slugger = Slugger()

        assert slugger.slug("!!!") == "section"
        assert slugger.slug("???") == "section-1"

    def test_fresh_slugger_per_document(self) -> None:
        """Separate sluggers do not share state."""
        assert Slugger().slug("x") == "x"
        assert Slugger().slug("x") == "x"
