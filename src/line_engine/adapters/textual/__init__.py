"""Textual host for editing sessions."""

from .controller import HookDisplay, TextualSessionAdapter, TextualUIHooks

__all__ = ["HookDisplay", "TextualSessionAdapter", "TextualUIHooks"]
