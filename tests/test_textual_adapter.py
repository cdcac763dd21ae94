from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from line_engine.adapters.textual import TextualSessionAdapter, TextualUIHooks
from line_engine.runtime.settings import EditorSettings
from line_engine.store import FileStore


def make_adapter(
    store: FileStore, **hook_overrides: object
) -> Tuple[TextualSessionAdapter, List[Sequence[str]]]:
    views: List[Sequence[str]] = []
    hooks = TextualUIHooks(update_lines=views.append, **hook_overrides)  # type: ignore[arg-type]
    adapter = TextualSessionAdapter(store, hooks, settings=EditorSettings(color=False))
    return adapter, views


def test_adapter_shows_welcome_and_initial_lines(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("existing\n")
    output: List[str] = []

    _, views = make_adapter(FileStore.open(path), show_output=output.append)

    assert output == [f"Welcome to line-engine. {path} is ready for use"]
    assert views[-1] == ["1. existing"]


def test_adapter_updates_lines_and_status(tmp_path: Path) -> None:
    statuses: List[str] = []
    adapter, views = make_adapter(
        FileStore.open(tmp_path / "notes.txt", debug=True),
        update_status=statuses.append,
    )

    adapter.submit("add zeta")
    adapter.submit("add alpha")
    adapter.submit("sort")

    assert views[-1] == ["1. alpha", "2. zeta"]
    assert statuses[-1].startswith("All lines in")


def test_adapter_prefixes_output_flags(tmp_path: Path) -> None:
    output: List[str] = []
    adapter, _ = make_adapter(
        FileStore.open(tmp_path / "notes.txt", debug=True), show_output=output.append
    )

    adapter.submit("add Red fish")
    adapter.submit("search FISH")
    adapter.submit("bogus")

    assert output[1:] == [
        f"DONE: Added new line to {tmp_path / 'notes.txt'}: Red fish",
        f"DONE: Found FISH in {tmp_path / 'notes.txt'} on lines 1",
        "1. Red fish",
        "ERROR: Unrecognised command",
    ]


def test_adapter_exit_saves_and_requests_close(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    exits: List[bool] = []
    events: List[Tuple[str, object | None]] = []
    adapter, _ = make_adapter(
        FileStore.open(path),
        request_exit=lambda: exits.append(True),
        handle_event=lambda name, payload: events.append((name, payload)),
    )

    adapter.submit("add persisted")
    result = adapter.submit("exit")

    assert result.exit_requested
    assert adapter.finished
    assert exits == [True]
    assert path.read_text().splitlines() == ["persisted"]
    names = [name for name, _ in events]
    assert names.index("session.exit") < names.index("store.saved")
    assert adapter.shutdown() is False


def test_adapter_emits_log_lines(tmp_path: Path) -> None:
    logs: List[str] = []
    adapter, _ = make_adapter(
        FileStore.open(tmp_path / "notes.txt", debug=True), log=logs.append
    )

    adapter.submit("add x")

    assert any(line.startswith("input ->") for line in logs)
    assert any("dirty=True" in line for line in logs)
