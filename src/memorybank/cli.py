"""Command line interface for the Memory Bank tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from memorybank.browse import BROWSE_USAGE, count_entries, list_categories, render_tree, walk_category
from memorybank.config import TEMPLATE_DIR, AppConfig
from memorybank.errors import InvalidArgument, MemoryBankError, NotFoundError
from memorybank.index.indexer import Indexer
from memorybank.index.search import SEARCH_USAGE, Searcher
from memorybank.index.storage import IndexStore
from memorybank.overview import build_overview
from memorybank.scaffold import ProjectInfo, is_populated, scaffold


console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Memory Bank - Markdown project memory for AI coding assistants")

ROOT_HELP = "Memory Bank directory (defaults to $MEMORY_BANK_DIR or ./memory-bank)"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_root(root: Path | None) -> Path:
    return AppConfig(root=root).resolve_root(Path.cwd())


def _fail(exc: MemoryBankError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(code=1)


def _print_categories(categories: list[str]) -> None:
    console.print("\nAvailable categories:")
    if not categories:
        console.print("  (none)")
    for name in categories:
        console.print(f"  - {escape(name)}")


@app.command()
def init(
    destination: Path = typer.Option(None, "--destination", "-d", help="Directory to create"),
    template: Path = typer.Option(TEMPLATE_DIR, "--template", help="Template directory to copy"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing destination"),
    name: str = typer.Option(..., "--name", prompt="Project name"),
    description: str = typer.Option("", "--description", prompt="Project description", show_default=False),
    architecture: str = typer.Option(
        "", "--architecture", prompt="Architecture type (e.g., monolith, microservices, modular-monolith)", show_default=False
    ),
    framework: str = typer.Option(
        "", "--framework", prompt="Primary framework (e.g., Next.js, Express, FastAPI)", show_default=False
    ),
    language: str = typer.Option(
        "", "--language", prompt="Primary language (e.g., TypeScript, Python, Go)", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Initialise a Memory Bank from the template."""
    _setup_logging(verbose)
    target = _resolve_root(destination)

    if not template.is_dir():
        _fail(NotFoundError("Template directory", template))

    overwrite = force
    if is_populated(target) and not force:
        overwrite = typer.confirm(f"{target} already exists. Overwrite?", default=False)
        if not overwrite:
            err_console.print("[yellow]Initialization cancelled.[/yellow]")
            raise typer.Exit(code=1)

    info = ProjectInfo(
        name=name,
        description=description,
        architecture=architecture,
        framework=framework,
        language=language,
    )
    try:
        result = scaffold(template, target, info, overwrite=overwrite)
    except MemoryBankError as exc:
        _fail(exc)

    console.print(f"[green]Memory Bank initialized at[/green] [bold]{escape(str(result.destination))}[/bold]")
    console.print("\nNext steps:")
    console.print("1. Review and update projectBrief.md")
    console.print("2. Add your architecture decisions to architecture/decisions/")
    console.print("3. Document your API endpoints in api/")
    console.print("4. Run `memory-bank update` to build the index")


@app.command()
def update(
    root: Path = typer.Option(None, "--root", help=ROOT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rebuild the Memory Bank index."""
    _setup_logging(verbose)
    config = AppConfig(root=root)
    resolved = _resolve_root(root)
    index_path = config.index_path(Path.cwd())

    console.print(f"Updating index for [bold]{escape(str(resolved))}[/bold]...")
    indexer = Indexer(resolved, summary_chars=config.summary_chars)
    try:
        stats = indexer.update(IndexStore(index_path))
    except MemoryBankError as exc:
        _fail(exc)

    console.print(f"Indexed {stats.files} files")
    console.print(f"Found {stats.categories} categories")
    console.print(f"Found {stats.tags} unique tags")
    console.print(f"Index saved to {escape(str(index_path))}")


@app.command()
def search(
    keyword: Optional[str] = typer.Argument(None, help="Text to look for (case-insensitive)"),
    root: Path = typer.Option(None, "--root", help=ROOT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search Memory Bank documents line by line."""
    _setup_logging(verbose)
    searcher = Searcher(_resolve_root(root))
    try:
        results = searcher.search(keyword)
    except InvalidArgument:
        err_console.print(f"Usage: {SEARCH_USAGE}")
        raise typer.Exit(code=1)
    except MemoryBankError as exc:
        _fail(exc)

    console.print(f'\n🔍 Searching for: "{escape(keyword or "")}"\n')
    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(f"Found {len(results)} matches:\n")
    for match in results:
        console.print(f"📄 {escape(match.path)}:{match.line}", soft_wrap=True)
        console.print(f"   {escape(match.text)}\n", soft_wrap=True)


@app.command()
def browse(
    category: Optional[str] = typer.Argument(None, help="Top-level category to show"),
    root: Path = typer.Option(None, "--root", help=ROOT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the document tree of one category."""
    _setup_logging(verbose)
    resolved = _resolve_root(root)
    try:
        node = walk_category(resolved, category)
    except InvalidArgument:
        err_console.print(f"Usage: {BROWSE_USAGE}")
        _print_categories(list_categories(resolved))
        raise typer.Exit(code=1)
    except NotFoundError as exc:
        err_console.print(f"[red]Category '{escape(category or '')}' not found[/red]")
        _print_categories(exc.available)
        raise typer.Exit(code=1)

    files, folders = count_entries(node)
    console.print(render_tree(node))
    console.print(f"\n{files} documents in {folders} folders. Use `memory-bank search` to search within files.", soft_wrap=True)


@app.command()
def overview(
    root: Path = typer.Option(None, "--root", help=ROOT_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the project brief, category sizes and recent updates."""
    _setup_logging(verbose)
    config = AppConfig(root=root)
    try:
        summary = build_overview(
            _resolve_root(root),
            brief_name=config.brief_name,
            index_name=config.index_name,
            brief_lines=config.brief_lines,
            recent=config.recent_limit,
        )
    except MemoryBankError as exc:
        _fail(exc)

    console.print("\n🧠 [bold]Memory Bank Overview[/bold]")
    console.rule()
    if summary.brief:
        console.print("\n📋 Project Brief:")
        for line in summary.brief:
            console.print(f"  {escape(line)}", soft_wrap=True)

    console.print("\n📁 Structure:")
    for name, count in summary.categories.items():
        console.print(f"  📂 {escape(name)}/ ({count} files)")

    console.print("\n🕐 Recent Updates:")
    for day, path in summary.recent:
        console.print(f"  📝 {day} - {escape(path)}", soft_wrap=True)

    if summary.index_updated:
        console.print(f"\n🗂  Index updated: {escape(summary.index_updated)}")
    else:
        console.print("\n🗂  Index not built yet. Run `memory-bank update`.")
