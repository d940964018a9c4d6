"""Create a new Memory Bank from a template directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Mapping, Sequence, Tuple

from memorybank.errors import AlreadyExistsError, NotFoundError
from memorybank.utils.files import TEXT_SUFFIXES, read_text, write_text

LOGGER = logging.getLogger(__name__)

Replacements = Sequence[Tuple[str, str]]

DEFAULT_PORT = "3000"
DEFAULT_DOMAIN = "api.example.com"
ACTIVE_CONTEXT = "context/active.md"


@dataclass(slots=True)
class ProjectInfo:
    """Answers collected when a Memory Bank is initialised."""

    name: str
    description: str = ""
    architecture: str = ""
    framework: str = ""
    language: str = ""
    created: date = field(default_factory=date.today)

    @property
    def date_text(self) -> str:
        return self.created.isoformat()

    def replacements(self) -> List[Tuple[str, str]]:
        return [
            ("[PROJECT_NAME]", self.name),
            ("[PROJECT_DESCRIPTION]", self.description),
            ("[Your Architecture Type]", self.architecture),
            ("[Your architecture type]", self.architecture.lower()),
            ("[Your framework]", self.framework),
            ("[Primary language]", self.language),
            ("[DATE]", self.date_text),
            ("[YYYY-MM-DD]", self.date_text),
            ("[PORT]", DEFAULT_PORT),
            ("[YOUR_DOMAIN]", DEFAULT_DOMAIN),
        ]


@dataclass(slots=True)
class ScaffoldResult:
    destination: Path
    substituted: int = 0


def is_populated(path: Path) -> bool:
    if not path.exists():
        return False
    if path.is_dir():
        return any(path.iterdir())
    return True


def substitute(text: str, replacements: Replacements) -> str:
    """Replace every literal occurrence of each token, in order."""
    for token, value in replacements:
        text = text.replace(token, value)
    return text


def replace_in_directory(directory: Path, replacements: Replacements) -> int:
    """Rewrite Markdown and JSON files under directory; returns the number of files changed."""
    changed = 0
    for path in sorted(directory.rglob("*")):
        if not path.is_file() or not path.name.endswith(TEXT_SUFFIXES):
            continue
        original = read_text(path)
        updated = substitute(original, replacements)
        if updated != original:
            write_text(path, updated)
            changed += 1
            LOGGER.debug("Substituted placeholders in %s", path)
    return changed


def _remove(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_template(
    source: Path,
    destination: Path,
    replacements: Replacements,
    *,
    overwrite: bool = False,
    extra_files: Mapping[str, str] | None = None,
) -> int:
    """Copy source to destination and substitute placeholders.

    The copy is assembled in a hidden sibling directory and moved into place
    only once every file has been substituted, so a failure leaves the
    destination as it was. ``extra_files`` maps relative paths to content
    written into the copy after substitution.
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_dir():
        raise NotFoundError("Template directory", source)
    if is_populated(destination) and not overwrite:
        raise AlreadyExistsError(destination)

    destination.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{destination.name}-", dir=destination.parent))
    try:
        shutil.copytree(source, staging, dirs_exist_ok=True)
        changed = replace_in_directory(staging, replacements)
        for relative, content in (extra_files or {}).items():
            path = staging / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            write_text(path, content)
    except Exception:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    if destination.exists():
        LOGGER.info("Removing existing %s", destination)
        _remove(destination)
    staging.rename(destination)
    return changed


def render_active_context(info: ProjectInfo) -> str:
    today = info.date_text
    return f"""# Active Development Context

## Current Sprint
- Sprint: 1
- Start Date: {today}
- Focus: Initial setup and foundation

## Current Tasks
- Set up development environment
- Define initial architecture
- Create basic project structure

## Recent Decisions
- Chose {info.architecture} architecture
- Selected {info.framework} as primary framework
- Using {info.language} as primary language

## Notes
- Project initialized on {today}
- See projectBrief.md for full project details

---

*Last Updated: {today}*
"""


def scaffold(
    source: Path,
    destination: Path,
    info: ProjectInfo,
    *,
    overwrite: bool = False,
) -> ScaffoldResult:
    """Initialise a Memory Bank for the given project."""
    substituted = copy_template(
        source,
        destination,
        info.replacements(),
        overwrite=overwrite,
        extra_files={ACTIVE_CONTEXT: render_active_context(info)},
    )
    LOGGER.info("Initialised Memory Bank at %s (%d files substituted)", destination, substituted)
    return ScaffoldResult(destination=Path(destination), substituted=substituted)
