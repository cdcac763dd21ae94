"""Persistence of a LineCollection to a newline-delimited text file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import FrozenSet, Optional, Sequence, Tuple

from line_engine.lines import Line, LineCollection
from line_engine.runtime import telemetry


class FileStore:
    """Binds one file path to one collection and tracks unsaved changes.

    In debug mode the store never creates, reads or writes the file, which
    leaves an empty in-memory collection to work against.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        collection: Optional[LineCollection] = None,
        debug: bool = False,
        encoding: Optional[str] = None,
    ) -> None:
        self.path = Path(path)
        self.collection = collection if collection is not None else LineCollection()
        self.debug = debug
        self.encoding = encoding
        self._dirty = False

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        *,
        debug: bool = False,
        encoding: Optional[str] = None,
    ) -> "FileStore":
        store = cls(path, debug=debug, encoding=encoding)
        store.load()
        return store

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def file_path(self) -> str:
        return str(self.path)

    def load(self) -> LineCollection:
        """Replace the collection with the file contents, creating it if missing.

        Undecodable files surface as ``OSError`` like any other read failure.
        """

        if self.debug:
            return self.collection

        with telemetry.span(
            "store::load",
            logger_name="line_engine.store",
            component="store",
            metadata={"path": self.file_path},
        ) as handle:
            if self.path.is_dir():
                raise IsADirectoryError("Cannot edit a directory")
            if not self.path.exists():
                self.path.touch()
                handle.add_metadata("created", True)

            try:
                with self.path.open("r", encoding=self.encoding) as stream:
                    texts = stream.readlines()
            except UnicodeDecodeError as exc:
                raise OSError(f"Cannot decode {self.file_path}: {exc.reason}") from exc

            self.collection.clear()
            for text in texts:
                self.collection.add(text)

            self._trim_blank_tail()
            handle.add_metadata("lines", self.collection.count())
            self._dirty = False
            return self.collection

    def save(self) -> bool:
        """Write every line out if anything changed; report whether it wrote."""

        if not self._dirty or self.debug:
            return False

        lines = self.collection.get_all()
        with telemetry.span(
            "store::save",
            logger_name="line_engine.store",
            component="store",
            metadata={"path": self.file_path, "lines": len(lines)},
        ):
            # text mode translates "\n" into the platform newline
            with self.path.open("w", encoding=self.encoding) as stream:
                for line in lines:
                    stream.write(line)
                    stream.write("\n")
            self._dirty = False
        return True

    def add_line(self, text: str) -> int:
        position = self.collection.add(text)
        self._dirty = True
        return position

    def remove_line(self, position: int) -> Optional[str]:
        removed = self.collection.remove(position)
        if removed is not None:
            self._dirty = True
        return removed

    def clear_lines(self) -> None:
        self.collection.clear()
        self._dirty = True

    def sort_lines(self) -> None:
        self.collection.sort()
        self._dirty = True

    def line_count(self) -> int:
        return self.collection.count()

    def all_lines(self) -> Sequence[str]:
        return self.collection.get_all()

    def get_line_at(self, position: int) -> Line:
        return self.collection.get_line(position)

    def search_for(self, word: str) -> Optional[FrozenSet[int]]:
        return self.collection.search(word)

    def search_lines(self, word: str) -> Optional[Tuple[Line, ...]]:
        return self.collection.search_lines(word)

    def _trim_blank_tail(self) -> None:
        last = self.collection.count() - 1
        while last >= 0 and not self.collection.get(last).strip():
            self.collection.remove(last)
            last -= 1


__all__ = ["FileStore"]
