"""Inverse-operation undo log for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Union

from gap_engine.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from .buffer import Buffer


@dataclass(frozen=True, slots=True)
class InsertRecord:
    """``length`` characters were inserted at ``position``."""

    position: int
    length: int


@dataclass(frozen=True, slots=True)
class DeleteRecord:
    """``chars`` were removed starting at ``position``."""

    position: int
    chars: str


UndoRecord = Union[InsertRecord, DeleteRecord]


def apply_inverse(record: UndoRecord, buffer: "Buffer") -> None:
    """Undo ``record`` on ``buffer`` without recording anything new."""

    if isinstance(record, InsertRecord):
        buffer.cut_range(record.position, record.length, record=False)
    elif isinstance(record, DeleteRecord):
        buffer.insert_chars_at(record.position, record.chars, record=False)
    else:  # pragma: no cover - closed union
        raise TypeError(f"Unknown undo record {record!r}")


class UndoLog:
    """Stack of inverse operations. Undone entries are dropped; there is no redo."""

    def __init__(self) -> None:
        self._entries: List[UndoRecord] = []

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, entry: UndoRecord) -> None:
        self._entries.append(entry)

    def can_undo(self) -> bool:
        return bool(self._entries)

    def peek(self) -> Optional[UndoRecord]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def undo(self, buffer: "Buffer") -> bool:
        if not self._entries:
            return False
        entry = self._entries.pop()
        apply_inverse(entry, buffer)
        telemetry.record_event(
            "buffer.undo",
            level="debug",
            data={
                "kind": type(entry).__name__,
                "position": entry.position,
                "remaining": len(self._entries),
            },
        )
        return True


__all__ = ["DeleteRecord", "InsertRecord", "UndoLog", "UndoRecord", "apply_inverse"]
