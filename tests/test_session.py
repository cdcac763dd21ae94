from __future__ import annotations

import io
from pathlib import Path
from typing import List, Tuple

from line_engine.runtime.settings import EditorSettings
from line_engine.session import ConsoleDisplay, Session, SessionBus, join_numbers
from line_engine.store import FileStore

SETTINGS = EditorSettings(color=False)


def make_session(
    *commands: str, path: str = "notes.txt"
) -> Tuple[Session, io.StringIO]:
    output = io.StringIO()
    display = ConsoleDisplay(
        io.StringIO("".join(f"{command}\n" for command in commands)),
        output,
        color=False,
    )
    store = FileStore.open(path, debug=True)
    return Session(store, display, settings=SETTINGS), output


def output_lines(output: io.StringIO) -> List[str]:
    return output.getvalue().replace("command: ", "").splitlines()


def test_add_reports_and_stores_line() -> None:
    session, output = make_session()

    result = session.handle("add Lorem ipsum")

    assert result.status == "ok"
    assert session.store.all_lines() == ("Lorem ipsum",)
    assert output_lines(output) == ["DONE: Added new line to notes.txt: Lorem ipsum"]


def test_add_without_text_adds_empty_line() -> None:
    session, output = make_session()

    session.handle("add")

    assert session.store.all_lines() == ("",)
    assert output_lines(output) == ["DONE: Added an empty line to notes.txt"]


def test_display_lists_one_based_lines() -> None:
    session, output = make_session()
    session.handle("add first")
    session.handle("add second")
    output.truncate(0)
    output.seek(0)

    session.handle("display")

    assert output_lines(output) == ["1. first", "2. second"]


def test_display_empty_file() -> None:
    session, output = make_session()

    result = session.handle("display")

    assert result.status == "empty"
    assert output_lines(output) == ["INFO: notes.txt is empty"]


def test_delete_uses_one_based_numbers() -> None:
    session, output = make_session()
    session.handle("add keep")
    session.handle("add drop")

    result = session.handle("delete 2")

    assert result.status == "ok"
    assert session.store.all_lines() == ("keep",)
    assert output_lines(output)[-1] == "DONE: Deleted from notes.txt: drop"


def test_delete_rejects_bad_numbers() -> None:
    session, output = make_session()
    session.handle("add only")

    statuses = [
        session.handle(raw).status
        for raw in ("delete", "delete two", "delete 0", "delete 2", "delete -1")
    ]

    assert statuses == ["error"] * 5
    assert session.store.all_lines() == ("only",)
    assert output_lines(output)[-1] == "ERROR: Invalid line number"


def test_clear_and_sort_messages() -> None:
    session, output = make_session()
    session.handle("add b")
    session.handle("add a")

    session.handle("sort")
    assert session.store.all_lines() == ("a", "b")
    session.handle("clear")

    assert session.store.line_count() == 0
    assert output_lines(output)[-2:] == [
        "DONE: All lines in notes.txt are sorted in alphabetical order",
        "DONE: Cleared all lines from notes.txt",
    ]


def test_search_uses_first_token_and_lists_hits() -> None:
    session, output = make_session()
    for text in ("Lorem ipsum", "dolor sit", "LOREM again", "lorem"):
        session.handle(f"add {text}")
    output.truncate(0)
    output.seek(0)

    result = session.handle("search lorem ignored words")

    assert [line.content for line in result.lines] == [
        "Lorem ipsum",
        "LOREM again",
        "lorem",
    ]
    assert output_lines(output) == [
        "DONE: Found lorem in notes.txt on lines 1, 3 and 4",
        "1. Lorem ipsum",
        "3. LOREM again",
        "4. lorem",
    ]


def test_search_not_found_and_missing_query() -> None:
    session, output = make_session()
    session.handle("add something")

    assert session.handle("search zzzzz").status == "not_found"
    assert session.handle("search").status == "error"
    assert output_lines(output)[-2:] == [
        "INFO: No occurrences of zzzzz found in notes.txt",
        "ERROR: Search query missing",
    ]


def test_unrecognised_command() -> None:
    session, output = make_session()

    result = session.handle("undo")

    assert result.status == "unrecognised"
    assert output_lines(output) == ["ERROR: Unrecognised command"]


def test_bus_reports_mutations() -> None:
    bus = SessionBus()
    changes: List[object] = []
    bus.subscribe("lines.changed", changes.append)
    session, _ = make_session()
    session.bus = bus

    session.handle("add one")
    session.handle("display")
    session.handle("delete 9")

    assert changes == [("one",)]


def test_run_loops_until_exit_and_saves(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    output = io.StringIO()
    display = ConsoleDisplay(
        io.StringIO("add zeta\nadd alpha\nsort\nexit\nadd never\n"),
        output,
        color=False,
    )
    session = Session(FileStore.open(path), display, settings=SETTINGS)

    session.run()

    assert path.read_text().splitlines() == ["alpha", "zeta"]
    lines = output.getvalue().splitlines()
    assert lines[0] == f"Welcome to line-engine. {path} is ready for use"
    assert "never" not in output.getvalue()


def test_run_stops_at_end_of_input(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    display = ConsoleDisplay(io.StringIO("add tail"), io.StringIO(), color=False)
    session = Session(FileStore.open(path), display, settings=SETTINGS)

    session.run()

    assert path.read_text().splitlines() == ["tail"]


def test_close_reports_failed_save(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    output = io.StringIO()
    store = FileStore.open(path)
    store.add_line("pending")
    path.unlink()
    path.mkdir()
    session = Session(
        store, ConsoleDisplay(io.StringIO(), output, color=False), settings=SETTINGS
    )

    assert session.close() is False
    assert output.getvalue().splitlines() == ["ERROR: Cannot save to file"]
    assert store.dirty is True


def test_console_display_colours_flags() -> None:
    output = io.StringIO()
    display = ConsoleDisplay(io.StringIO(), output, color=True)

    display.error("boom")

    assert output.getvalue() == "\033[31mERROR: \033[0mboom\n"


def test_join_numbers() -> None:
    assert join_numbers([]) == ""
    assert join_numbers([2]) == "2"
    assert join_numbers([1, 2]) == "1 and 2"
    assert join_numbers([1, 3, 5]) == "1, 3 and 5"


def test_delete_accepts_signed_digits_only() -> None:
    session, output = make_session()
    for number in range(1, 13):
        session.handle(f"add l{number}")

    assert session.handle("delete 1_0").status == "error"
    assert session.handle("delete 0x2").status == "error"
    assert session.handle("delete  3 ").status == "ok"
    assert session.handle("delete +1").status == "ok"

    assert session.store.line_count() == 10
    assert "l10" in session.store.all_lines()
    assert output_lines(output)[-4:] == [
        "ERROR: Invalid line number",
        "ERROR: Invalid line number",
        "DONE: Deleted from notes.txt: l3",
        "DONE: Deleted from notes.txt: l1",
    ]
