"""Minimal event bus letting hosts observe session activity."""

from __future__ import annotations

from typing import Callable, Dict

Subscriber = Callable[[object], None]


class SessionBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Subscriber]] = {}

    def subscribe(self, event: str, callback: Subscriber) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["SessionBus", "Subscriber"]
