"""Line-oriented metadata matchers for Markdown documents.

Each matcher inspects a single line and returns a value or ``None``; the
first line producing a value wins.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

TITLE_PATTERN = re.compile(r"^#\s+(.+)$")
TAGS_PATTERN = re.compile(r"tags:\s*\[([^\]]+)\]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def match_title(line: str) -> Optional[str]:
    match = TITLE_PATTERN.match(line.rstrip())
    if match:
        return match.group(1).strip()
    return None


def match_tags(line: str) -> Optional[List[str]]:
    match = TAGS_PATTERN.search(line)
    if not match:
        return None
    tags = [tag.strip() for tag in match.group(1).split(",")]
    return [tag for tag in tags if tag]


def is_heading(line: str) -> bool:
    return line.lstrip().startswith("#")


def match_summary(line: str) -> Optional[str]:
    """Accept the first line of prose: not blank, not a heading, not a tags line."""
    if not line.strip() or is_heading(line) or TAGS_PATTERN.search(line):
        return None
    return collapse_whitespace(line)


def first_match(lines: Iterable[str], matcher: Callable[[str], Optional[T]]) -> Optional[T]:
    for line in lines:
        value = matcher(line)
        if value is not None:
            return value
    return None


def collapse_whitespace(text: str) -> str:
    """Collapse newlines and runs of whitespace to single spaces."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def truncate(text: str, max_chars: int) -> str:
    return text[:max_chars]
