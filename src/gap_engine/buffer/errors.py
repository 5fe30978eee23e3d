"""Exceptions raised by buffers and buffer persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GapEngineError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidArgumentError(GapEngineError, ValueError):
    """Raised for negative lengths and out-of-range indices."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        super().__init__(message)
        self.value = value


class BufferFileNotFoundError(GapEngineError, FileNotFoundError):
    """Raised when opening a missing file without ``create_if_missing``."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No such file: '{path}'")
        self.path = path


class BufferIOError(GapEngineError, OSError):
    """Wraps an ``OSError`` hit while reading, writing, or moving files."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class RenameConflictError(GapEngineError, FileExistsError):
    """Raised when a rename target exists and overwrite was not requested."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Can't rename to existing file '{path}' without overwrite")
        self.path = path


__all__ = [
    "GapEngineError",
    "InvalidArgumentError",
    "BufferFileNotFoundError",
    "BufferIOError",
    "RenameConflictError",
]
