"""Indexed line storage: the line sequence plus its inverted word index."""

from .collection import LineCollection, WordIndex
from .line import Line, line_order, split_words
from .validation import LineRangeError, ensure_position, in_range

__all__ = [
    "Line",
    "LineCollection",
    "LineRangeError",
    "WordIndex",
    "ensure_position",
    "in_range",
    "line_order",
    "split_words",
]
