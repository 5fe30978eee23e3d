"""Buffer configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_CAPACITY = 65536


@dataclass(frozen=True, slots=True)
class BufferConfig:
    """Tunables shared by buffers, persistence, and the registry."""

    default_capacity: int = DEFAULT_CAPACITY
    backup_suffix: str = ".BAK"
    rename_suffix: str = ".OLD"
    encoding: str = "utf-8"
    newline: str = os.linesep

    def __post_init__(self) -> None:
        if self.default_capacity <= 0:
            raise ValueError("default_capacity must be positive")
        if not self.backup_suffix:
            raise ValueError("backup_suffix cannot be empty")
        if not self.rename_suffix:
            raise ValueError("rename_suffix cannot be empty")
        if not self.newline:
            raise ValueError("newline cannot be empty")

    def with_overrides(self, **changes: object) -> "BufferConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = BufferConfig()

__all__ = ["BufferConfig", "DEFAULT_CAPACITY", "DEFAULT_CONFIG"]
