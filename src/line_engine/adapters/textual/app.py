"""Executable Textual app that hosts an editing session."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the TUI is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_engine.adapters.textual.app"
    ) from exc

from line_engine.runtime import telemetry
from line_engine.runtime.settings import EditorSettings, load_settings
from line_engine.store import FileStore

from .controller import TextualSessionAdapter, TextualUIHooks


@dataclass
class UIState:
    lines_text: str = ""
    status_text: str = ""


class LineEngineApp(App[None]):
    """Line list on top, message log below, command input at the bottom."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#lines-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#output-log {
		height: 8;
		border: round $surface-lighten-1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "save_and_quit", "Save & quit"),
    ]

    def __init__(
        self,
        path: str,
        *,
        debug: bool = False,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._debug_store = debug
        self._settings = settings or load_settings()
        self._state = UIState()
        self.adapter: TextualSessionAdapter | None = None
        self._lines_widget: Static | None = None
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._lines_widget = Static("", id="lines-view", markup=False)
        self._output_widget = RichLog(id="output-log", wrap=True)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._lines_widget
        yield self._output_widget
        yield self._status_widget
        yield Input(placeholder=self._settings.prompt.strip(), id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self._settings.app_name
        self.sub_title = self._path
        try:
            store = FileStore.open(
                self._path, debug=self._debug_store, encoding=self._settings.encoding
            )
        except OSError as exc:
            self._show_output(f"Cannot open file for reading: {exc}")
            self._update_status("read-only: no file loaded")
            return
        hooks = TextualUIHooks(
            update_lines=self._update_lines,
            update_status=self._update_status,
            show_output=self._show_output,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualSessionAdapter(store, hooks, settings=self._settings)
        self.query_one("#command-line", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.input.value = ""
        if self.adapter is None:
            return
        self.adapter.submit(event.value)

    def action_save_and_quit(self) -> None:
        if self.adapter is None:
            self.exit()
            return
        self.adapter.shutdown()

    def _update_lines(self, lines: Sequence[str]) -> None:
        self._state.lines_text = "\n".join(lines)
        if self._lines_widget:
            self._lines_widget.update(self._state.lines_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_output(self, text: str) -> None:
        if self._output_widget:
            self._output_widget.write(text)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("line_engine.tui").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file in the terminal UI.")
    parser.add_argument("path", help="File to edit (created if missing)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Work on an in-memory copy; never read or write the file",
    )
    return parser.parse_args(argv)


def run(path: str, *, debug: bool = False, settings: Optional[EditorSettings] = None) -> None:
    LineEngineApp(path, debug=debug, settings=settings).run()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    run(args.path, debug=args.debug)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
