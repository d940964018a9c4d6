"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ROOT_ENV_VAR = "MEMORY_BANK_DIR"
DEFAULT_ROOT = Path("memory-bank")
TEMPLATE_DIR = Path(__file__).parent / "template"


def _get_default_root() -> Path:
    """Get the default Memory Bank directory, honouring the environment override."""
    override = os.environ.get(ROOT_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_ROOT


@dataclass(slots=True)
class AppConfig:
    root: Path | None = None
    index_name: str = ".index.json"
    brief_name: str = "projectBrief.md"
    summary_chars: int = 200
    recent_limit: int = 5
    brief_lines: int = 10

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = _get_default_root()

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        if self.root is None:
            self.root = _get_default_root()
        if Path(self.root).is_absolute() or base_dir is None:
            return Path(self.root)
        return base_dir / self.root

    def index_path(self, base_dir: Path | None = None) -> Path:
        return self.resolve_root(base_dir) / self.index_name
