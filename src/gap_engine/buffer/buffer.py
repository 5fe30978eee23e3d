"""Cursor-relative editing on top of gap storage."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from gap_engine.config import DEFAULT_CONFIG, BufferConfig

from .state import LINE_TERMINATOR, Coordinates, CursorState
from .storage import GapStorage
from .undo import DeleteRecord, InsertRecord, UndoLog
from .validation import ensure_char, ensure_index, ensure_length, ensure_range


class Buffer:
    """Editable text with a cursor, incremental line/column and undo.

    Every mutating method accepts ``record=False`` to skip the undo log; the
    undo executor replays inverses through that path so undoing never records
    anything itself. Cursor placement after :meth:`undo` is unspecified, so
    callers that care should :meth:`move_to` afterwards.
    """

    def __init__(
        self,
        *,
        path: Optional[Path | str] = None,
        capacity: Optional[int] = None,
        config: Optional[BufferConfig] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.path = Path(path) if path is not None else None
        self.storage = GapStorage(
            self.config.default_capacity if capacity is None else capacity
        )
        self.state = CursorState()
        self.history = UndoLog()
        self.modified = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        path: Optional[Path | str] = None,
        config: Optional[BufferConfig] = None,
    ) -> "Buffer":
        buffer = cls(path=path, config=config)
        buffer.insert(text, record=False)
        buffer.move_to(0)
        buffer.modified = False
        return buffer

    def __len__(self) -> int:
        return len(self.storage)

    def __repr__(self) -> str:
        return (
            f"Buffer(path={self.path!s}, length={len(self)}, "
            f"position={self.position}, line={self.line}, column={self.column})"
        )

    # -- read-only views -------------------------------------------------

    def length(self) -> int:
        return len(self.storage)

    @property
    def position(self) -> int:
        return self.storage.pre_count

    @property
    def line(self) -> int:
        return self.state.line

    @property
    def column(self) -> int:
        return self.state.column

    def coordinates(self) -> Coordinates:
        return self.state.coordinates()

    def text(self) -> str:
        return self.storage.pre_text() + self.storage.post_text()

    def pre_text(self) -> str:
        return self.storage.pre_text()

    def post_text(self) -> str:
        return self.storage.post_text()

    def debug_string(self) -> str:
        return f"{{{self.pre_text()}}}GAP{{{self.post_text()}}}"

    def char_at(self, pos: int) -> str:
        """Return the character at ``pos``; ``pos == length()`` yields ``""``."""

        length = len(self.storage)
        ensure_index(pos, length)
        if pos == length:
            return ""
        prepos = self.storage.pre_count
        if pos < prepos:
            return self.storage.pre_at(pos)
        return self.storage.post_at(pos - prepos)

    def copy(self, length: int) -> str:
        ensure_length(length, operation="copy")
        count = min(length, self.storage.post_count)
        return "".join(self.storage.post_at(offset) for offset in range(count))

    def copy_range(self, pos: int, length: int) -> str:
        self.move_to(pos)
        return self.copy(length)

    def get_range(self, start: int, end: int) -> str:
        ensure_range(start, end, len(self.storage))
        return self.text()[start:end]

    # -- cursor motion ---------------------------------------------------

    def step_forward(self) -> bool:
        if not self.storage.post_count:
            return False
        self._step_forward()
        return True

    def step_backward(self) -> bool:
        if not self.storage.pre_count:
            return False
        self._step_backward()
        return True

    def move_by(self, dist: int) -> None:
        if dist > 0:
            for _ in range(min(dist, self.storage.post_count)):
                self._step_forward()
        elif dist < 0:
            for _ in range(min(-dist, self.storage.pre_count)):
                self._step_backward()

    def move_to(self, pos: int) -> None:
        self.move_by(pos - self.position)

    def move_to_line(self, target: int) -> None:
        """Put the cursor on the first character of line ``target``.

        Lands at the end of the buffer when there are fewer lines.
        """

        self.move_to(0)
        while self.storage.post_count and self.state.line < target:
            self._step_forward()

    def move_by_line(self, count: int) -> None:
        self.move_to_line(self.state.line + count)

    def move_to_column(self, column: int) -> None:
        """Move within the current line, stopping at its end."""

        column = max(column, 0)
        if column <= self.state.column:
            self.move_by(column - self.state.column)
            return
        while (
            self.state.column < column
            and self.storage.post_count
            and self.storage.post_at(0) != LINE_TERMINATOR
        ):
            self._step_forward()

    def get_line_and_column_of(self, pos: int) -> Coordinates:
        saved = self.position
        self.move_to(pos)
        result = self.state.coordinates()
        self.move_to(saved)
        return result

    def get_position_of_line(self, target: int) -> Optional[int]:
        """Index of the first character of line ``target``, or ``None``."""

        if target == 1:
            return 0
        line = 1
        for index in range(len(self.storage)):
            if self.char_at(index) == LINE_TERMINATOR:
                line += 1
                if line == target:
                    return index + 1
        return None

    def get_position_of_line_and_column(self, line: int, column: int) -> Optional[int]:
        start = self.get_position_of_line(line)
        if start is None or column < 0:
            return None
        text = self.text()
        end = start + column
        if end > len(text) or LINE_TERMINATOR in text[start:end]:
            return None
        return end

    # -- mutation --------------------------------------------------------

    def clear(self) -> None:
        if len(self.storage):
            self.modified = True
        self.storage.clear()
        self.state.reset()

    def insert(self, text: str, *, record: bool = True) -> None:
        pos = self.position
        for char in text:
            self._put(char)
        if record:
            self.history.record(InsertRecord(pos, len(text)))

    def insert_char(self, char: str, *, record: bool = True) -> None:
        ensure_char(char)
        pos = self.position
        self._put(char)
        if record:
            self.history.record(InsertRecord(pos, 1))

    def insert_chars(self, chars: Iterable[str], *, record: bool = True) -> None:
        self.insert("".join(chars), record=record)

    def insert_at(self, pos: int, text: str, *, record: bool = True) -> None:
        self.move_to(pos)
        self.insert(text, record=record)

    def insert_chars_at(
        self, pos: int, chars: Iterable[str], *, record: bool = True
    ) -> None:
        self.move_to(pos)
        self.insert_chars(chars, record=record)

    def cut(self, length: int, *, record: bool = True) -> str:
        ensure_length(length, operation="cut")
        pos = self.position
        count = min(length, self.storage.post_count)
        removed = "".join(self.storage.pop_post() for _ in range(count))
        if count:
            self.modified = True
        if record:
            self.history.record(DeleteRecord(pos, removed))
        return removed

    def cut_range(self, pos: int, length: int, *, record: bool = True) -> str:
        self.move_to(pos)
        return self.cut(length, record=record)

    def delete_range(self, start: int, end: int, *, record: bool = True) -> str:
        ensure_range(start, end, len(self.storage))
        return self.cut_range(start, end - start, record=record)

    def undo(self) -> bool:
        """Revert the most recent recorded change; False when there is none."""

        return self.history.undo(self)

    # -- single steps ----------------------------------------------------

    def _put(self, char: str) -> None:
        self.storage.push_pre(char)
        self.state.advance_over(char)
        self.modified = True

    def _step_forward(self) -> None:
        char = self.storage.pop_post()
        self.storage.push_pre(char)
        self.state.advance_over(char)

    def _step_backward(self) -> None:
        char = self.storage.pop_pre()
        self.storage.push_post(char)
        self.state.retreat_over(char, self._measure_line)

    def _measure_line(self) -> int:
        # Characters between the cursor and the previous terminator.
        index = self.storage.pre_count
        count = 0
        while index > 0 and self.storage.pre_at(index - 1) != LINE_TERMINATOR:
            index -= 1
            count += 1
        return count


__all__ = ["Buffer"]
