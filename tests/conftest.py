from __future__ import annotations

from pathlib import Path

import pytest

from csssync.index.file_index import FileIndex
from csssync.service import SyncService


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_css():
    """Write a stylesheet below a root, creating directories as needed."""

    def _write(root: Path, relative: str, content: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def index() -> FileIndex:
    return FileIndex(max_workers=2)


@pytest.fixture
def service() -> SyncService:
    return SyncService()
