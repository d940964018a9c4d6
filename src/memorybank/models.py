"""Core Memory Bank data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class DocumentMetadata:
    """Metadata extracted from a single Markdown document."""

    path: str
    category: str
    title: str
    tags: List[str]
    summary: str
    modified: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "size": self.size,
            "modified": self.modified,
            "title": self.title,
            "tags": list(self.tags),
            "summary": self.summary,
        }


@dataclass(slots=True)
class SearchMatch:
    """A line of a document containing the query."""

    path: str
    line: int
    text: str


@dataclass(slots=True)
class CategoryNode:
    """A directory in a browse tree."""

    name: str
    children: List["CategoryNode"] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
