"""Summary view of a Memory Bank: brief, category sizes and recent edits."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from memorybank.errors import NotFoundError
from memorybank.index.storage import IndexStore
from memorybank.utils.files import (
    isoformat_mtime,
    iter_directories,
    iter_markdown_paths,
    read_text,
    relative_posix,
)


@dataclass(slots=True)
class Overview:
    brief: List[str] = field(default_factory=list)
    categories: Dict[str, int] = field(default_factory=dict)
    recent: List[Tuple[str, str]] = field(default_factory=list)
    index_updated: Optional[str] = None


def build_overview(
    root: Path,
    *,
    brief_name: str = "projectBrief.md",
    index_name: str = ".index.json",
    brief_lines: int = 10,
    recent: int = 5,
) -> Overview:
    if not root.is_dir():
        raise NotFoundError("Memory Bank directory", root)

    overview = Overview()

    brief_path = root / brief_name
    if brief_path.is_file():
        head = read_text(brief_path).split("\n")[:brief_lines]
        overview.brief = [line.rstrip() for line in head if line.strip()]

    for directory in iter_directories(root):
        overview.categories[directory.name] = sum(1 for _ in iter_markdown_paths(directory))

    documents = [(path.stat().st_mtime, relative_posix(path, root)) for path in iter_markdown_paths(root)]
    # newest first, ties broken by path
    documents.sort(key=lambda item: (-item[0], item[1]))
    overview.recent = [(isoformat_mtime(mtime)[:10], path) for mtime, path in documents[:recent]]

    store = IndexStore(root / index_name)
    if store.exists():
        overview.index_updated = store.load().get("updated")
    return overview
