"""Textual-agnostic controller wiring a Session into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from line_engine.lines import Line
from line_engine.runtime.settings import EditorSettings
from line_engine.session import (
    Session,
    SessionBus,
    SessionResult,
    numbered,
)
from line_engine.session.display import FLAG_ERROR, FLAG_INFO, FLAG_SUCCESS
from line_engine.store import FileStore


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_lines: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    show_output: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class HookDisplay:
    """Display that forwards every session message to ``hooks.show_output``."""

    def __init__(self, hooks: TextualUIHooks) -> None:
        self.hooks = hooks

    def prompt_line(self, prompt: str) -> str:
        raise EOFError("Textual hosts feed input through TextualSessionAdapter.submit")

    def line(self, text: str) -> None:
        self.hooks.show_output(text)

    def error(self, message: str) -> None:
        self.hooks.show_output(f"{FLAG_ERROR}{message}")

    def success(self, message: str) -> None:
        self.hooks.show_output(f"{FLAG_SUCCESS}{message}")

    def info(self, message: str) -> None:
        self.hooks.show_output(f"{FLAG_INFO}{message}")

    def ordered_list(self, contents: Sequence[str]) -> None:
        for number, content in enumerate(contents, start=1):
            self.line(numbered(number, content))

    def numbered_lines(self, lines: Iterable[Line]) -> None:
        for line in lines:
            self.line(numbered(line.display_number, line.content))


class TextualSessionAdapter:
    """Bridges a Session and its bus events to a Textual-friendly surface."""

    EVENTS = ("session.command", "lines.changed", "store.saved", "session.exit")

    def __init__(
        self,
        store: FileStore,
        hooks: TextualUIHooks,
        *,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self.hooks = hooks
        self._finished = False
        self.session = Session(
            store, HookDisplay(hooks), bus=SessionBus(), settings=settings
        )
        self._subscribe_events()
        self.session.welcome()
        self._refresh_lines()

    @property
    def finished(self) -> bool:
        return self._finished

    def submit(self, raw: str) -> SessionResult:
        """Run one command line typed into the host's input widget."""

        self._log_state("input ->", raw=raw)
        result = self.session.handle(raw)
        self.hooks.update_status(result.message or result.status)
        self._refresh_lines()
        self._log_state("result <-", status=result.status, message=result.message)
        if result.exit_requested:
            self.shutdown()
        return result

    def shutdown(self) -> bool:
        """Save (if needed) and ask the host to close."""

        if self._finished:
            return False
        self._finished = True
        saved = self.session.close()
        self.hooks.request_exit()
        return saved

    def _subscribe_events(self) -> None:
        for event in self.EVENTS:
            self.session.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "store.saved":
            self.hooks.update_status(f"saved {payload}")

    def _refresh_lines(self) -> None:
        contents = self.session.store.all_lines()
        self.hooks.update_lines(
            [numbered(number, content) for number, content in enumerate(contents, 1)]
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        store = self.session.store
        return {
            "path": store.file_path,
            "lines": store.line_count(),
            "dirty": store.dirty,
        }


__all__ = ["HookDisplay", "TextualSessionAdapter", "TextualUIHooks"]
