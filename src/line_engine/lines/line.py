"""Single line of text tracked by a LineCollection."""

from __future__ import annotations

from typing import FrozenSet, Tuple


def split_words(content: str) -> FrozenSet[str]:
    """Lowercase whitespace-separated tokens used as index keys."""

    return frozenset(content.lower().split())


class Line:
    """Read-only content bound to a mutable position.

    ``serial`` is assigned by the owning collection and never changes, so index
    buckets can key on it while ``position`` moves around during a sort.
    """

    __slots__ = ("_content", "_words", "_serial", "position")

    def __init__(self, content: str, position: int, serial: int = 0) -> None:
        self._content = content
        self._words = split_words(content)
        self._serial = serial
        self.position = position

    @property
    def content(self) -> str:
        return self._content

    @property
    def serial(self) -> int:
        return self._serial

    @property
    def display_number(self) -> int:
        return self.position + 1

    def __repr__(self) -> str:
        return f"Line(content={self._content!r}, position={self.position})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._content == other._content and self.position == other.position

    def __lt__(self, other: "Line") -> bool:
        return line_order(self) < line_order(other)

    __hash__ = None  # type: ignore[assignment]


def line_order(line: Line) -> Tuple[str, int]:
    """Sort key: content first, original position breaks ties."""

    return (line.content, line.position)


__all__ = ["Line", "line_order", "split_words"]
