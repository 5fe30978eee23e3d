"""Gap-buffer storage, cursor model, and undo log."""

from .buffer import Buffer
from .errors import (
    BufferFileNotFoundError,
    BufferIOError,
    GapEngineError,
    InvalidArgumentError,
    RenameConflictError,
)
from .state import Coordinates, CursorState, LINE_TERMINATOR
from .storage import GapStorage
from .undo import DeleteRecord, InsertRecord, UndoLog, UndoRecord, apply_inverse

__all__ = [
    "Buffer",
    "BufferFileNotFoundError",
    "BufferIOError",
    "Coordinates",
    "CursorState",
    "DeleteRecord",
    "GapEngineError",
    "GapStorage",
    "InsertRecord",
    "InvalidArgumentError",
    "LINE_TERMINATOR",
    "RenameConflictError",
    "UndoLog",
    "UndoRecord",
    "apply_inverse",
]
