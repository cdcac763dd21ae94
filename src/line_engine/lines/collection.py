"""Ordered line storage with an inverted word index kept in lockstep."""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

from .line import Line, line_order
from .validation import ensure_position, in_range

# word -> {line serial -> line}
WordIndex = Dict[str, Dict[int, Line]]


class LineCollection:
    """Owns the line sequence, its content cache, and the word index.

    The index holds ``Line`` references rather than positions, so ``sort``
    only has to rewrite each line's position for ``search`` to stay correct.
    ``remove`` does not renumber the lines after the removed one; their
    positions become authoritative again after the next ``sort``.
    """

    def __init__(self) -> None:
        self._lines: List[Line] = []
        self._index: WordIndex = {}
        self._contents: List[str] = []
        self._next_serial = 0

    def __len__(self) -> int:
        return len(self._lines)

    def count(self) -> int:
        return len(self._lines)

    def clear(self) -> None:
        self._lines = []
        self._index = {}
        self._contents = []

    def add(self, text: str) -> int:
        """Append ``text`` (right-trimmed) and return its position."""

        position = len(self._lines)
        line = Line(text.rstrip(), position, serial=self._next_serial)
        self._next_serial += 1

        self._lines.append(line)
        self._index_words(line)
        self._contents.append(line.content)
        return position

    def remove(self, position: int) -> Optional[str]:
        """Drop the line at ``position``; ``None`` when there is no such line."""

        if not in_range(position, len(self._lines)):
            return None
        line = self._lines.pop(position)
        del self._contents[position]
        self._unindex_words(line)
        return line.content

    def get_all(self) -> Tuple[str, ...]:
        return tuple(self._contents)

    def get(self, position: int) -> str:
        return self._contents[ensure_position(position, len(self._contents))]

    def get_line(self, position: int) -> Line:
        return self._lines[ensure_position(position, len(self._lines))]

    def search(self, word: str) -> Optional[FrozenSet[int]]:
        """Positions of every line containing ``word`` (case-insensitive).

        Returns ``None`` when the word is not indexed at all.
        """

        bucket = self._index.get(word.lower())
        if bucket is None:
            return None
        return frozenset(line.position for line in bucket.values())

    def search_lines(self, word: str) -> Optional[Tuple[Line, ...]]:
        bucket = self._index.get(word.lower())
        if bucket is None:
            return None
        return tuple(sorted(bucket.values(), key=lambda line: line.position))

    def sort(self) -> None:
        self._lines.sort(key=line_order)
        for position, line in enumerate(self._lines):
            line.position = position
        self._contents = [line.content for line in self._lines]

    def _index_words(self, line: Line) -> None:
        for word in line._words:
            self._index.setdefault(word, {})[line.serial] = line

    def _unindex_words(self, line: Line) -> None:
        for word in line._words:
            bucket = self._index.get(word)
            if bucket is None:
                continue
            bucket.pop(line.serial, None)
            if not bucket:
                del self._index[word]


__all__ = ["LineCollection", "WordIndex"]
