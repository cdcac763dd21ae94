"""Interactive session: the command loop and its output sinks."""

from .bus import SessionBus
from .display import ConsoleDisplay, Display, join_numbers, numbered
from .session import CommandError, Session, SessionResult

__all__ = [
    "CommandError",
    "ConsoleDisplay",
    "Display",
    "Session",
    "SessionBus",
    "SessionResult",
    "join_numbers",
    "numbered",
]
