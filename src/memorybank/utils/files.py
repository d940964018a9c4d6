"""Utility helpers for working with files."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from memorybank.errors import UnreadableFile

MARKDOWN_SUFFIX = ".md"
TEXT_SUFFIXES = (".md", ".json")


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def is_markdown(path: Path) -> bool:
    return path.name.endswith(MARKDOWN_SUFFIX)


def iter_markdown_paths(root: Path) -> Iterator[Path]:
    """Yield Markdown files depth-first in name order, skipping hidden directories."""
    for child in sorted(root.iterdir(), key=lambda item: item.name):
        if child.is_dir():
            if not is_hidden(child):
                yield from iter_markdown_paths(child)
        elif child.is_file() and is_markdown(child):
            yield child


def iter_directories(root: Path) -> Iterator[Path]:
    """Yield the non-hidden first-level directories of root in name order."""
    for child in sorted(root.iterdir(), key=lambda item: item.name):
        if child.is_dir() and not is_hidden(child):
            yield child


def relative_posix(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def read_text(path: Path) -> str:
    """Read a UTF-8 text file verbatim, raising UnreadableFile on any failure.

    Line endings are not translated: ``\\r\\n`` and lone ``\\r`` survive as-is.
    """
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFile([path], reason=str(exc)) from exc


def write_text(path: Path, text: str) -> None:
    """Write text as UTF-8 without translating line endings."""
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def isoformat_mtime(mtime: float) -> str:
    """Format a modification time the way the index stores it (UTC, millisecond precision)."""
    moment = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
