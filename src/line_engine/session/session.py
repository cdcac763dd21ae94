"""Command loop binding interpreted input to the file store."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from line_engine.commands import Command, CommandType, interpret
from line_engine.lines import Line
from line_engine.runtime import telemetry
from line_engine.runtime.settings import EditorSettings, load_settings
from line_engine.store import FileStore

from .bus import SessionBus
from .display import Display, join_numbers

MESSAGE_WELCOME = "Welcome to {app}. {path} is ready for use"
MESSAGE_ADD = "Added new line to {path}: {text}"
MESSAGE_ADD_EMPTY = "Added an empty line to {path}"
MESSAGE_DELETE = "Deleted from {path}: {text}"
MESSAGE_CLEAR = "Cleared all lines from {path}"
MESSAGE_SORT = "All lines in {path} are sorted in alphabetical order"
MESSAGE_EMPTY = "{path} is empty"
MESSAGE_FOUND = "Found {word} in {path} on lines {numbers}"
MESSAGE_NOT_FOUND = "No occurrences of {word} found in {path}"

ERROR_LINE_NUMBER_INVALID = "Invalid line number"
ERROR_MISSING_SEARCH_QUERY = "Search query missing"
ERROR_COMMAND_UNRECOGNISED = "Unrecognised command"
ERROR_FILE_SAVE = "Cannot save to file"

_LINE_NUMBER = re.compile(r"[+-]?[0-9]+")


class CommandError(ValueError):
    """A command the user typed cannot be carried out as given."""


@dataclass(slots=True)
class SessionResult:
    """Outcome of one handled command."""

    command: Command
    status: str = "ok"
    message: Optional[str] = None
    lines: Tuple[Line, ...] = field(default_factory=tuple)

    @property
    def exit_requested(self) -> bool:
        return self.command.type is CommandType.EXIT


CommandHandler = Callable[["Session", Command], SessionResult]


class Session:
    """Owns one store/display pair and runs commands against it."""

    def __init__(
        self,
        store: FileStore,
        display: Display,
        *,
        bus: Optional[SessionBus] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self.store = store
        self.display = display
        self.bus = bus or SessionBus()
        self.settings = settings or load_settings()
        self._closed = False

    @property
    def path(self) -> str:
        return self.store.file_path

    def welcome(self) -> None:
        self.display.line(
            MESSAGE_WELCOME.format(app=self.settings.app_name, path=self.path)
        )

    def run(self) -> None:
        """Prompt and execute commands until ``exit`` or end of input."""

        self.welcome()
        while True:
            try:
                raw = self.display.prompt_line(self.settings.prompt)
            except EOFError:
                break
            if self.handle(raw).exit_requested:
                break
        self.close()

    def handle(self, raw: str) -> SessionResult:
        command = interpret(raw)
        self.bus.emit("session.command", command)

        if command.is_unrecognised:
            telemetry.record_event(
                "command.unrecognised",
                level="warning",
                data={"raw": raw},
                logger_name="line_engine.session",
            )
            self.display.error(ERROR_COMMAND_UNRECOGNISED)
            return SessionResult(
                command, status="unrecognised", message=ERROR_COMMAND_UNRECOGNISED
            )

        handler = _HANDLERS[command.type]
        with telemetry.span(
            f"session::{command.type.value}",
            logger_name="line_engine.session",
            component="session",
            metadata={"path": self.path},
        ) as span_handle:
            try:
                result = handler(self, command)
            except CommandError as exc:
                span_handle.add_metadata("error", str(exc))
                self.display.error(str(exc))
                return SessionResult(command, status="error", message=str(exc))

        if command.type in _MUTATING:
            self.bus.emit("lines.changed", self.store.all_lines())
        return result

    def close(self) -> bool:
        """Save once on the way out; a failed save is reported, not raised."""

        if self._closed:
            return False
        self._closed = True
        self.bus.emit("session.exit", self.path)
        try:
            saved = self.store.save()
        except OSError as exc:
            telemetry.record_event(
                "store.save_failed",
                level="error",
                data={"path": self.path, "reason": str(exc)},
                logger_name="line_engine.session",
            )
            self.display.error(ERROR_FILE_SAVE)
            return False
        if saved:
            self.bus.emit("store.saved", self.path)
        return saved


def _execute_add(session: Session, command: Command) -> SessionResult:
    text = command.parameter or ""
    session.store.add_line(text)
    if text:
        message = MESSAGE_ADD.format(path=session.path, text=text)
    else:
        message = MESSAGE_ADD_EMPTY.format(path=session.path)
    session.display.success(message)
    return SessionResult(command, message=message)


def _execute_display(session: Session, command: Command) -> SessionResult:
    contents = session.store.all_lines()
    if not contents:
        message = MESSAGE_EMPTY.format(path=session.path)
        session.display.info(message)
        return SessionResult(command, status="empty", message=message)
    session.display.ordered_list(contents)
    return SessionResult(command)


def _line_number(parameter: Optional[str]) -> int:
    if parameter is None:
        raise CommandError(ERROR_LINE_NUMBER_INVALID)
    if not _LINE_NUMBER.fullmatch(parameter):
        raise CommandError(ERROR_LINE_NUMBER_INVALID)
    return int(parameter)


def _execute_delete(session: Session, command: Command) -> SessionResult:
    number = _line_number(command.parameter)
    removed = session.store.remove_line(number - 1)
    if removed is None:
        raise CommandError(ERROR_LINE_NUMBER_INVALID)
    message = MESSAGE_DELETE.format(path=session.path, text=removed)
    session.display.success(message)
    return SessionResult(command, message=message)


def _execute_clear(session: Session, command: Command) -> SessionResult:
    session.store.clear_lines()
    message = MESSAGE_CLEAR.format(path=session.path)
    session.display.success(message)
    return SessionResult(command, message=message)


def _execute_sort(session: Session, command: Command) -> SessionResult:
    session.store.sort_lines()
    message = MESSAGE_SORT.format(path=session.path)
    session.display.success(message)
    return SessionResult(command, message=message)


def _execute_search(session: Session, command: Command) -> SessionResult:
    query = (command.parameter or "").split()
    if not query:
        raise CommandError(ERROR_MISSING_SEARCH_QUERY)
    word = query[0]

    hits = session.store.search_lines(word)
    if hits is None:
        message = MESSAGE_NOT_FOUND.format(word=word, path=session.path)
        session.display.info(message)
        return SessionResult(command, status="not_found", message=message)

    numbers = join_numbers([line.display_number for line in hits])
    message = MESSAGE_FOUND.format(word=word, path=session.path, numbers=numbers)
    session.display.success(message)
    session.display.numbered_lines(hits)
    return SessionResult(command, message=message, lines=hits)


def _execute_exit(session: Session, command: Command) -> SessionResult:
    return SessionResult(command, status="exit")


_HANDLERS: Dict[CommandType, CommandHandler] = {
    CommandType.ADD: _execute_add,
    CommandType.DISPLAY: _execute_display,
    CommandType.DELETE: _execute_delete,
    CommandType.CLEAR: _execute_clear,
    CommandType.SORT: _execute_sort,
    CommandType.SEARCH: _execute_search,
    CommandType.EXIT: _execute_exit,
}

_MUTATING = frozenset(
    {CommandType.ADD, CommandType.DELETE, CommandType.CLEAR, CommandType.SORT}
)


__all__ = [
    "CommandError",
    "CommandHandler",
    "Session",
    "SessionResult",
]
