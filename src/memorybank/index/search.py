"""Keyword search over Memory Bank documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from memorybank.errors import InvalidArgument, NotFoundError
from memorybank.models import SearchMatch
from memorybank.utils.files import iter_markdown_paths, read_text, relative_posix

LOGGER = logging.getLogger(__name__)

SEARCH_USAGE = "memory-bank search <keyword>"


def search_text(content: str, query: str, path: str) -> List[SearchMatch]:
    """Return every line of content containing query, ignoring case."""
    needle = query.lower()
    return [
        SearchMatch(path=path, line=number, text=line.strip())
        for number, line in enumerate(content.split("\n"), start=1)
        if needle in line.lower()
    ]


class Searcher:
    """Linear scan of every Markdown file under a root."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def search(self, query: str | None) -> List[SearchMatch]:
        if not query or not query.strip():
            raise InvalidArgument("keyword", usage=SEARCH_USAGE)
        if not self.root.is_dir():
            raise NotFoundError("Memory Bank directory", self.root)

        results: List[SearchMatch] = []
        for path in iter_markdown_paths(self.root):
            matches = search_text(read_text(path), query, relative_posix(path, self.root))
            if matches:
                LOGGER.debug("%d matches in %s", len(matches), path)
            results.extend(matches)
        return results
