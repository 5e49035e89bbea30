"""End-to-end tests for merging into a Markdown document."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from flattendir.exceptions import FileOperationError, TargetConflictError
from flattendir.flatten import FlattenOptions, flatten_directory

EXPECTED_DOCUMENT = (
    '<a id="project-file-tree"></a>\n'
    "# Project File Tree\n\n"
    "File Tree\n\n"
    "- [subdir/](#subdir)\n"
    "  - [file.txt](#subdirfiletxt)\n"
    "- [file.txt](#filetxt)\n"
    "\n"
    '<a id="subdir"></a>\n'
    "# subdir\n\n"
    "File Tree\n\n"
    "- [..](#project-file-tree)\n"
    "- [file.txt](#subdirfiletxt)\n"
    "\n"
    '<a id="subdirfiletxt"></a>\n'
    "# subdir/file.txt\n\n"
    "```txt\n"
    "content2\n"
    "```\n\n"
    '<a id="filetxt"></a>\n'
    "# file.txt\n\n"
    "```txt\n"
    "content1\n"
    "```\n\n"
)


@pytest.fixture
def md_target(tmp_path: Path) -> Path:
    return tmp_path.resolve() / "output.md"


class TestMergeToMarkdown:
    """Tests for flatten_directory in the default merge mode."""

    @pytest.mark.asyncio
    async def test_merges_without_move(self, source_dir: Path, md_target: Path, write_files) -> None:
        """The document links every section and the source is left alone."""
        write_files({"file.txt": "content1", "subdir/file.txt": "content2"})

        result = await flatten_directory(source_dir, md_target)

        assert md_target.read_text(encoding="utf-8") == EXPECTED_DOCUMENT
        assert sorted(os.listdir(source_dir)) == ["file.txt", "subdir"]
        assert result.mode == "markdown"
        assert result.files == ["subdir/file.txt", "file.txt"]
        assert "Files: 2" in result.summary

    @pytest.mark.asyncio
    async def test_merges_with_move(self, source_dir: Path, md_target: Path, write_files) -> None:
        """Moving removes every merged original and the emptied directories."""
        write_files({"file.txt": "content1", "subdir/file.txt": "content2"})

        result = await flatten_directory(source_dir, md_target, FlattenOptions(move=True))

        assert md_target.read_text(encoding="utf-8") == EXPECTED_DOCUMENT
        assert os.listdir(source_dir) == []
        assert result.moved

    @pytest.mark.asyncio
    async def test_nested_code_blocks_in_markdown(
        self, source_dir: Path, md_target: Path, write_files
    ) -> None:
        content = "# Test Markdown\n\n```\nnormal code\n```\n\n`````\ncode with 5 ticks\n`````\n\nSome text.\n"
        write_files({"file1.txt": "content1", "subdir/test.md": content})

        await flatten_directory(source_dir, md_target)

        document = md_target.read_text(encoding="utf-8")
        assert f"``````md\n{content}\n``````\n" in document
        assert "```txt\ncontent1\n```\n" in document

    @pytest.mark.asyncio
    async def test_conflict_without_overwrite(
        self, source_dir: Path, md_target: Path, write_files
    ) -> None:
        """An existing target fails the run before anything is written."""
        write_files({"file.txt": "content"})
        md_target.write_text("existing")

        with pytest.raises(TargetConflictError, match="already exists"):
            await flatten_directory(source_dir, md_target, FlattenOptions(move=True))

        assert md_target.read_text() == "existing"
        assert (source_dir / "file.txt").exists()

    @pytest.mark.asyncio
    async def test_overwrite_replaces_target(
        self, source_dir: Path, md_target: Path, write_files, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_files({"file.txt": "new content"})
        md_target.write_text("existing")

        with caplog.at_level(logging.WARNING, logger="flattendir"):
            result = await flatten_directory(
                source_dir, md_target, FlattenOptions(overwrite=True)
            )

        document = md_target.read_text(encoding="utf-8")
        assert "new content" in document
        assert "existing" not in document
        assert result.overwritten == [md_target]
        assert f"Overwriting existing file: {md_target}" in caplog.text

    @pytest.mark.asyncio
    async def test_respects_gitignore(self, source_dir: Path, md_target: Path, write_files) -> None:
        write_files({".gitignore": "ignore.txt", "ignore.txt": "ignored", "keep.txt": "kept"})

        await flatten_directory(source_dir, md_target)

        document = md_target.read_text(encoding="utf-8")
        assert "# keep.txt" in document
        assert "ignore.txt](" not in document
        assert "ignored\n" not in document

    @pytest.mark.asyncio
    async def test_excludes_binary_files(self, source_dir: Path, md_target: Path, write_files) -> None:
        """Binary extensions are skipped by default, at any depth."""
        write_files({"text.txt": "text content", "doc.pdf": "pdf", "archive.zip": "zip", "img/a.gif": "gif"})

        await flatten_directory(source_dir, md_target)

        document = md_target.read_text(encoding="utf-8")
        assert "text.txt" in document
        assert "doc.pdf" not in document
        assert "archive.zip" not in document
        assert "a.gif" not in document

    @pytest.mark.asyncio
    async def test_empty_source(self, source_dir: Path, md_target: Path) -> None:
        """An empty source still yields a root outline."""
        await flatten_directory(source_dir, md_target)

        assert md_target.read_text(encoding="utf-8") == (
            '<a id="project-file-tree"></a>\n# Project File Tree\n\nFile Tree\n\n\n'
        )

    @pytest.mark.asyncio
    async def test_target_inside_source_is_ignored(self, source_dir: Path, write_files) -> None:
        """The document never includes a previous version of itself."""
        write_files({"file1.txt": "content1", "output.md": "existing md content"})
        target = source_dir / "output.md"

        await flatten_directory(source_dir, target, FlattenOptions(overwrite=True))

        document = target.read_text(encoding="utf-8")
        assert "content1" in document
        assert "existing md content" not in document
        assert "output.md" not in document

    @pytest.mark.asyncio
    async def test_failed_read_leaves_no_partial_target(
        self, source_dir: Path, md_target: Path, write_files
    ) -> None:
        """A failure mid-document leaves neither the target nor a temp file behind."""
        write_files({"a.txt": "a"})

        with patch(
            "flattendir.document.read_text_async",
            AsyncMock(side_effect=FileOperationError("Failed to read a.txt")),
        ):
            with pytest.raises(FileOperationError):
                await flatten_directory(source_dir, md_target)

        assert not md_target.exists()
        assert os.listdir(md_target.parent) == ["source"]

    @pytest.mark.asyncio
    async def test_temp_file_creation_failure_is_wrapped(
        self, source_dir: Path, md_target: Path, write_files
    ) -> None:
        write_files({"a.txt": "a"})

        with patch("flattendir.merge._create_temp_file", side_effect=PermissionError("denied")):
            with pytest.raises(FileOperationError, match="Failed to write"):
                await flatten_directory(source_dir, md_target)

        assert not md_target.exists()

    @pytest.mark.asyncio
    async def test_dry_run(
        self, source_dir: Path, md_target: Path, write_files, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Dry run logs the plan without writing or removing anything."""
        write_files({"file1.txt": "content1", "subdir/file2.txt": "content2"})

        with caplog.at_level(logging.INFO, logger="flattendir"):
            result = await flatten_directory(
                source_dir, md_target, FlattenOptions(dry_run=True, move=True)
            )

        assert "Dry run mode" in caplog.text
        assert "Would process 2 files" in caplog.text
        assert "Move:" in caplog.text
        assert "Would merge contents into Markdown file" in caplog.text
        assert not md_target.exists()
        assert sorted(os.listdir(source_dir)) == ["file1.txt", "subdir"]
        assert result.dry_run
        assert result.files == ["file1.txt", "subdir/file2.txt"]

    @pytest.mark.asyncio
    async def test_verbose_logs_directories_searched(
        self, source_dir: Path, md_target: Path, write_files, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_files({"file1.txt": "content1", "subdir/file2.txt": "content2"})

        with caplog.at_level(logging.INFO, logger="flattendir"):
            await flatten_directory(source_dir, md_target, FlattenOptions(verbose=True))

        messages = [record.getMessage() for record in caplog.records]
        assert f"Searching recursively from: {source_dir}" in messages
        assert "Directories searched:" in messages
        assert str(source_dir / "subdir") in messages
