"""Test setup for flattendir."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source directory to populate per test."""
    path = tmp_path.resolve() / "source"
    path.mkdir()
    return path


@pytest.fixture
def write_files(source_dir: Path):
    """Create files under the source directory from a {relative path: content} map."""

    def _write(files: dict[str, str]) -> None:
        for rel_path, content in files.items():
            path = source_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    return _write
