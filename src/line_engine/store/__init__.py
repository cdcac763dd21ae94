"""File persistence for line collections."""

from .file_store import FileStore

__all__ = ["FileStore"]
