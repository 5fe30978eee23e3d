"""Argument checks shared by buffer operations."""

from __future__ import annotations

from .errors import InvalidArgumentError


def ensure_length(length: int, *, operation: str) -> int:
    if length < 0:
        raise InvalidArgumentError(
            f"{operation} length must not be negative", value=length
        )
    return length


def ensure_index(index: int, length: int) -> int:
    if index < 0:
        raise InvalidArgumentError("character index must be >= 0", value=index)
    if index > length:
        raise InvalidArgumentError("character index past buffer end", value=index)
    return index


def ensure_range(start: int, end: int, length: int) -> tuple[int, int]:
    if start < 0 or end < start or end > length:
        raise InvalidArgumentError(
            f"invalid range [{start}, {end}) for buffer of length {length}",
            value=(start, end),
        )
    return start, end


def ensure_char(char: str) -> str:
    if len(char) != 1:
        raise InvalidArgumentError("expected a single character", value=char)
    return char
