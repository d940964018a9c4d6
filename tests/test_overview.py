"""Tests for the Memory Bank overview."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from memorybank.errors import NotFoundError, UnreadableFile
from memorybank.index.storage import IndexStore
from memorybank.overview import build_overview


def _touch(path: Path, text: str, mtime: float) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    os.utime(path, (mtime, mtime))


@pytest.fixture
def bank(tmp_path: Path) -> Path:
    root = tmp_path / "memory-bank"
    brief = "\n".join(["# Project"] + [f"line {n}" if n % 2 else "" for n in range(1, 15)])
    _touch(root / "projectBrief.md", brief, 1_000)
    _touch(root / "api" / "a.md", "# A", 2_000)
    _touch(root / "api" / "nested" / "b.md", "# B", 3_000)
    _touch(root / "api" / "notes.txt", "text", 9_000)
    _touch(root / "context" / "active.md", "# Active", 86_400 * 2)
    (root / "empty").mkdir()
    return root


class TestBuildOverview:
    def test_brief_head_without_blank_lines(self, bank: Path) -> None:
        overview = build_overview(bank)

        assert overview.brief == ["# Project", "line 1", "line 3", "line 5", "line 7", "line 9"]

    def test_category_counts_recursive(self, bank: Path) -> None:
        overview = build_overview(bank)

        assert overview.categories == {"api": 2, "context": 1, "empty": 0}

    def test_recent_newest_first(self, bank: Path) -> None:
        overview = build_overview(bank, recent=3)

        assert overview.recent == [
            ("1970-01-03", "context/active.md"),
            ("1970-01-01", "api/nested/b.md"),
            ("1970-01-01", "api/a.md"),
        ]

    def test_missing_brief(self, bank: Path) -> None:
        (bank / "projectBrief.md").unlink()

        assert build_overview(bank).brief == []

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            build_overview(tmp_path / "missing")


class TestIndexStamp:
    def test_no_index(self, bank: Path) -> None:
        assert build_overview(bank).index_updated is None

    def test_reports_stored_index(self, bank: Path) -> None:
        IndexStore(bank / ".index.json").save({"updated": "2024-05-01T00:00:00.000Z", "files": {}})

        assert build_overview(bank).index_updated == "2024-05-01T00:00:00.000Z"

    def test_corrupt_index(self, bank: Path) -> None:
        (bank / ".index.json").write_text("{oops")

        with pytest.raises(UnreadableFile):
            build_overview(bank)


def test_crlf_brief_lines_trimmed(bank: Path) -> None:
    (bank / "projectBrief.md").write_bytes(b"# Project\r\n\r\nBody\r\n")

    assert build_overview(bank).brief == ["# Project", "Body"]
