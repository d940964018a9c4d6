"""Memory Bank index builder."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from memorybank.errors import NotFoundError, UnreadableFile
from memorybank.index.storage import IndexStore
from memorybank.models import DocumentMetadata
from memorybank.utils.files import (
    isoformat_mtime,
    iter_directories,
    iter_markdown_paths,
    read_text,
    relative_posix,
)
from memorybank.utils.text import first_match, match_summary, match_tags, match_title, truncate

LOGGER = logging.getLogger(__name__)


def extract_metadata(content: str, fallback_title: str, *, summary_chars: int = 200) -> Tuple[str, List[str], str]:
    """Return (title, tags, summary) for Markdown content."""
    lines = content.split("\n")
    title = first_match(lines, match_title) or fallback_title
    tags = first_match(lines, match_tags) or []
    summary = first_match(lines, match_summary) or ""
    return title, tags, truncate(summary, summary_chars)


@dataclass(slots=True)
class IndexStats:
    files: int = 0
    categories: int = 0
    tags: int = 0

    @classmethod
    def from_index(cls, index: Dict[str, Any]) -> "IndexStats":
        return cls(
            files=len(index["files"]),
            categories=len(index["categories"]),
            tags=len(index["tags"]),
        )


class Indexer:
    """Walks a Memory Bank and derives its index."""

    def __init__(self, root: Path, *, summary_chars: int = 200) -> None:
        self.root = Path(root)
        self.summary_chars = summary_chars

    def describe(self, path: Path) -> DocumentMetadata:
        """Read one Markdown file and extract its metadata."""
        content = read_text(path)
        stat = path.stat()
        relative = relative_posix(path, self.root)
        parts = relative.split("/")
        title, tags, summary = extract_metadata(content, path.stem, summary_chars=self.summary_chars)
        return DocumentMetadata(
            path=relative,
            category=parts[0] if len(parts) > 1 else "",
            title=title,
            tags=tags,
            summary=summary,
            modified=isoformat_mtime(stat.st_mtime),
            size=stat.st_size,
        )

    def build(self) -> Dict[str, Any]:
        """Build the index document; raises UnreadableFile listing every failed read."""
        if not self.root.is_dir():
            raise NotFoundError("Memory Bank directory", self.root)

        files: Dict[str, Any] = {}
        categories: Dict[str, List[str]] = {directory.name: [] for directory in iter_directories(self.root)}
        tags: Dict[str, List[str]] = {}
        unreadable: List[Path] = []

        for path in iter_markdown_paths(self.root):
            try:
                document = self.describe(path)
            except UnreadableFile as exc:
                LOGGER.error("Failed to read %s: %s", path, exc)
                unreadable.append(path)
                continue

            LOGGER.debug("Indexed %s", document.path)
            files[document.path] = document.to_dict()
            if document.category:
                categories.setdefault(document.category, []).append(document.path)
            for tag in document.tags:
                tags.setdefault(tag, []).append(document.path)

        if unreadable:
            raise UnreadableFile(unreadable)

        return {
            "updated": isoformat_mtime(time.time()),
            "files": files,
            "categories": categories,
            "tags": tags,
        }

    def update(self, store: IndexStore) -> IndexStats:
        """Rebuild the index and overwrite the stored copy."""
        index = self.build()
        store.save(index)
        stats = IndexStats.from_index(index)
        LOGGER.info(
            "Indexed %d files in %d categories with %d tags",
            stats.files,
            stats.categories,
            stats.tags,
        )
        return stats
