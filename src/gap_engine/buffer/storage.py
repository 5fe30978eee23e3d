"""Two-array gap storage backing every buffer."""

from __future__ import annotations

from typing import List

from gap_engine.config import DEFAULT_CAPACITY
from gap_engine.runtime import telemetry


class GapStorage:
    """Character storage split at the cursor into ``pre`` and ``post`` arrays.

    ``pre`` holds the characters before the cursor in reading order. ``post``
    holds the characters after the cursor reversed, so the character right
    after the cursor sits at ``post[post_count - 1]``. Moving the cursor is a
    pop from one side and a push onto the other.

    Both arrays always share one capacity: whichever side overflows, both are
    doubled together. Moving the cursor to either end therefore never needs to
    reallocate halfway through the walk.
    """

    __slots__ = ("_pre", "_post", "_prepos", "_postpos")

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._pre: List[str] = [""] * capacity
        self._post: List[str] = [""] * capacity
        self._prepos = 0
        self._postpos = 0

    @property
    def pre_count(self) -> int:
        return self._prepos

    @property
    def post_count(self) -> int:
        return self._postpos

    @property
    def capacity(self) -> int:
        return len(self._pre)

    @property
    def capacities(self) -> tuple[int, int]:
        return len(self._pre), len(self._post)

    def __len__(self) -> int:
        return self._prepos + self._postpos

    def clear(self) -> None:
        self._prepos = 0
        self._postpos = 0

    # Pops are unchecked; callers must not pop an empty side.

    def push_pre(self, char: str) -> None:
        if self._prepos == len(self._pre):
            self._grow()
        self._pre[self._prepos] = char
        self._prepos += 1

    def push_post(self, char: str) -> None:
        if self._postpos == len(self._post):
            self._grow()
        self._post[self._postpos] = char
        self._postpos += 1

    def pop_pre(self) -> str:
        self._prepos -= 1
        return self._pre[self._prepos]

    def pop_post(self) -> str:
        self._postpos -= 1
        return self._post[self._postpos]

    def pre_at(self, index: int) -> str:
        """Character at ``index`` counted from the start of the buffer."""

        return self._pre[index]

    def post_at(self, offset: int) -> str:
        """Character ``offset`` places after the cursor."""

        return self._post[self._postpos - offset - 1]

    def pre_text(self) -> str:
        return "".join(self._pre[: self._prepos])

    def post_text(self) -> str:
        return "".join(reversed(self._post[: self._postpos]))

    def _grow(self) -> None:
        size = max(1, 2 * len(self._pre))
        pre: List[str] = [""] * size
        pre[: self._prepos] = self._pre[: self._prepos]
        post: List[str] = [""] * size
        post[: self._postpos] = self._post[: self._postpos]
        self._pre = pre
        self._post = post
        telemetry.record_event(
            "storage.grow",
            level="debug",
            data={"capacity": size, "pre": self._prepos, "post": self._postpos},
        )


__all__ = ["GapStorage"]
