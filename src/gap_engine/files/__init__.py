"""File persistence and the per-path buffer registry."""

from .persistence import (
    move_file,
    open_buffer,
    read_buffer,
    rename_buffer,
    rotate_backup,
    write_buffer,
    write_buffer_to,
)
from .registry import BufferRegistry, RegistryStats

__all__ = [
    "BufferRegistry",
    "RegistryStats",
    "move_file",
    "open_buffer",
    "read_buffer",
    "rename_buffer",
    "rotate_backup",
    "write_buffer",
    "write_buffer_to",
]
