"""Category browsing for a Memory Bank."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from rich.markup import escape
from rich.tree import Tree

from memorybank.errors import InvalidArgument, NotFoundError
from memorybank.models import CategoryNode
from memorybank.utils.files import is_hidden, is_markdown, iter_directories

BROWSE_USAGE = "memory-bank browse <category>"
FOLDER_MARKER = "📁"
FILE_MARKER = "📄"


def list_categories(root: Path) -> List[str]:
    if not root.is_dir():
        return []
    return [directory.name for directory in iter_directories(root)]


def _walk(directory: Path) -> CategoryNode:
    node = CategoryNode(name=directory.name)
    for child in sorted(directory.iterdir(), key=lambda item: item.name):
        if child.is_dir():
            if not is_hidden(child):
                node.children.append(_walk(child))
        elif child.is_file() and is_markdown(child):
            node.files.append(child.name)
    return node


def walk_category(root: Path, category: str | None) -> CategoryNode:
    """Collect the directory tree of one category.

    Only names returned by ``list_categories`` are accepted, so paths,
    ``.``/``..`` and hidden directories are rejected as unknown.
    """
    if not category:
        raise InvalidArgument("category", usage=BROWSE_USAGE)
    available = list_categories(root)
    if category not in available:
        raise NotFoundError("Category", category, available=available)
    return _walk(root / category)


def count_entries(node: CategoryNode) -> Tuple[int, int]:
    """Return (files, folders) below node, recursively."""
    files = len(node.files)
    folders = len(node.children)
    for child in node.children:
        child_files, child_folders = count_entries(child)
        files += child_files
        folders += child_folders
    return files, folders


def _fill(tree: Tree, node: CategoryNode) -> None:
    for child in node.children:
        branch = tree.add(f"{FOLDER_MARKER} {escape(child.name)}/")
        _fill(branch, child)
    for name in node.files:
        tree.add(f"{FILE_MARKER} {escape(name)}")


def render_tree(node: CategoryNode) -> Tree:
    """Render a category as a rich tree: folders first, then files."""
    tree = Tree(f"📂 [bold]{escape(node.name)}[/bold]", guide_style="dim")
    _fill(tree, node)
    return tree
