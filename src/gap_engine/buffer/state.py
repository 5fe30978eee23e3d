"""Line and column bookkeeping for the buffer cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple

LINE_TERMINATOR = "\n"


class Coordinates(NamedTuple):
    line: int  # 1-based
    column: int  # 0-based


@dataclass(slots=True)
class CursorState:
    """Line/column of the cursor, kept in step with single-character moves."""

    line: int = 1
    column: int = 0

    def reset(self) -> None:
        self.line = 1
        self.column = 0

    def advance_over(self, char: str) -> None:
        if char == LINE_TERMINATOR:
            self.line += 1
            self.column = 0
        else:
            self.column += 1

    def retreat_over(self, char: str, measure_line: Callable[[], int]) -> None:
        """Step back over ``char``.

        Crossing a terminator lands on the end of the previous line, whose
        length is only known by scanning, so ``measure_line`` is asked for it.
        """

        if char == LINE_TERMINATOR:
            self.line -= 1
            self.column = measure_line()
        else:
            self.column -= 1

    def coordinates(self) -> Coordinates:
        return Coordinates(self.line, self.column)


__all__ = ["Coordinates", "CursorState", "LINE_TERMINATOR"]
