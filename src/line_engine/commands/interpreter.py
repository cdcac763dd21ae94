"""Turn one raw input line into a typed editor command."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class CommandType(str, Enum):
    """Instructions the editor understands."""

    ADD = "add"
    DISPLAY = "display"
    DELETE = "delete"
    CLEAR = "clear"
    SORT = "sort"
    SEARCH = "search"
    EXIT = "exit"
    UNRECOGNISED = "unrecognised"


# UNRECOGNISED is never matched by name.
_INSTRUCTIONS: Dict[str, CommandType] = {
    command.value: command
    for command in CommandType
    if command is not CommandType.UNRECOGNISED
}


@dataclass(frozen=True, slots=True)
class Command:
    type: CommandType
    parameter: Optional[str] = None

    @property
    def is_unrecognised(self) -> bool:
        return self.type is CommandType.UNRECOGNISED


def interpret(raw: str) -> Command:
    """Split ``raw`` into instruction and optional parameter.

    The instruction is matched case-insensitively; the parameter keeps any
    whitespace inside it.
    """

    parts = raw.strip().split(None, 1)
    if not parts:
        return Command(CommandType.UNRECOGNISED)
    command_type = _INSTRUCTIONS.get(parts[0].lower(), CommandType.UNRECOGNISED)
    parameter = parts[1] if len(parts) > 1 else None
    return Command(command_type, parameter)


def instructions() -> tuple[str, ...]:
    return tuple(_INSTRUCTIONS)


__all__ = ["Command", "CommandType", "instructions", "interpret"]
