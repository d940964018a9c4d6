"""Error types raised by Memory Bank operations."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

ExtraInfoType = dict[str, str | None]


class MemoryBankError(Exception):
    """Base class for every failure surfaced by the Memory Bank tools."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None) -> None:
        msg = message
        if extra_info:
            details = ", ".join(f"{key}: {value}" for key, value in extra_info.items() if value is not None)
            if details:
                msg += f" ({details})"
        super().__init__(msg)


class NotFoundError(MemoryBankError):
    """A required path or category does not exist."""

    def __init__(self, what: str, path: Path | str, available: Sequence[str] | None = None) -> None:
        self.path = Path(path)
        self.available = list(available or [])
        super().__init__(f"{what} not found: {path}")


class AlreadyExistsError(MemoryBankError):
    """The scaffold destination is populated and overwrite was not authorised."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Destination already exists: {path}")


class InvalidArgument(MemoryBankError):
    """A required argument was omitted or empty."""

    def __init__(self, name: str, usage: str | None = None) -> None:
        self.name = name
        self.usage = usage
        super().__init__(f"Missing required argument: {name}", extra_info={"usage": usage})


class UnreadableFile(MemoryBankError):
    """One or more files could not be read."""

    def __init__(self, paths: Iterable[Path | str], reason: str | None = None) -> None:
        self.paths = [Path(path) for path in paths]
        listing = ", ".join(str(path) for path in self.paths)
        super().__init__(f"Unreadable file(s): {listing}", extra_info={"reason": reason})
