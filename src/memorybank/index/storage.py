"""JSON persistence for the Memory Bank index."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from memorybank.errors import NotFoundError, UnreadableFile

LOGGER = logging.getLogger(__name__)


class IndexStore:
    """Reads and writes the hidden index file at the root of a Memory Bank."""

    def __init__(self, index_path: Path) -> None:
        self.index_path = Path(index_path)

    def exists(self) -> bool:
        return self.index_path.is_file()

    def save(self, index: Dict[str, Any]) -> Path:
        """Overwrite the index file; no merge with any previous content."""
        payload = json.dumps(index, indent=2, ensure_ascii=False)
        self.index_path.write_text(payload, encoding="utf-8")
        LOGGER.debug("Wrote index to %s", self.index_path)
        return self.index_path

    def load(self) -> Dict[str, Any]:
        if not self.exists():
            raise NotFoundError("Index file", self.index_path)
        try:
            return json.loads(self.index_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UnreadableFile([self.index_path], reason=str(exc)) from exc
