"""Output sinks the session reports through.

``Display`` is the protocol a host implements. ``ConsoleDisplay`` drives a
pair of text streams (stdin/stdout by default) and colours status prefixes
with ANSI escapes.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional, Protocol, Sequence, TextIO

from line_engine.lines import Line

ANSI_RESET = "\033[0m"
ANSI_RED = "\033[31m"
ANSI_GREEN = "\033[32m"
ANSI_CYAN = "\033[36m"

FLAG_ERROR = "ERROR: "
FLAG_SUCCESS = "DONE: "
FLAG_INFO = "INFO: "


class Display(Protocol):
    """Everything a session needs from its host to talk to the user."""

    def prompt_line(self, prompt: str) -> str:
        """Show ``prompt`` and return the next input line.

        Raises ``EOFError`` when input is exhausted.
        """
        ...

    def line(self, text: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def ordered_list(self, contents: Sequence[str]) -> None: ...

    def numbered_lines(self, lines: Iterable[Line]) -> None: ...


def numbered(number: int, content: str) -> str:
    return f"{number}. {content}"


def join_numbers(numbers: Sequence[int]) -> str:
    """Render ``[1, 3, 5]`` as ``"1, 3 and 5"``."""

    rendered = [str(number) for number in numbers]
    if len(rendered) < 2:
        return "".join(rendered)
    return f"{', '.join(rendered[:-1])} and {rendered[-1]}"


class ConsoleDisplay:
    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        *,
        color: bool = True,
    ) -> None:
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self.color = color

    def prompt_line(self, prompt: str) -> str:
        self.text(prompt)
        raw = self._input.readline()
        if not raw:
            raise EOFError("input exhausted")
        return raw.rstrip("\r\n")

    def text(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def line(self, text: str) -> None:
        self.text(f"{text}\n")

    def error(self, message: str) -> None:
        self._flagged(ANSI_RED, FLAG_ERROR, message)

    def success(self, message: str) -> None:
        self._flagged(ANSI_GREEN, FLAG_SUCCESS, message)

    def info(self, message: str) -> None:
        self._flagged(ANSI_CYAN, FLAG_INFO, message)

    def ordered_list(self, contents: Sequence[str]) -> None:
        for number, content in enumerate(contents, start=1):
            self.line(numbered(number, content))

    def numbered_lines(self, lines: Iterable[Line]) -> None:
        for line in lines:
            self.line(numbered(line.display_number, line.content))

    def _flagged(self, colour: str, flag: str, message: str) -> None:
        if self.color:
            self.line(f"{colour}{flag}{ANSI_RESET}{message}")
        else:
            self.line(f"{flag}{message}")


__all__ = [
    "ConsoleDisplay",
    "Display",
    "FLAG_ERROR",
    "FLAG_INFO",
    "FLAG_SUCCESS",
    "join_numbers",
    "numbered",
]
