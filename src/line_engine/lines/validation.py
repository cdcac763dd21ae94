"""Bounds checks shared by the collection accessors."""

from __future__ import annotations


class LineRangeError(IndexError):
    """Raised when a direct accessor receives a position outside the sequence."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


def in_range(position: int, count: int) -> bool:
    return 0 <= position < count


def ensure_position(position: int, count: int) -> int:
    if not in_range(position, count):
        raise LineRangeError(
            f"Line position {position} out of range (0..{count - 1})",
            position=position,
        )
    return position


__all__ = ["LineRangeError", "ensure_position", "in_range"]
