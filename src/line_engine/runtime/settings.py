"""Environment-driven settings shared by the editor hosts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "LINE_ENGINE_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Knobs a session and its file store read at startup."""

    app_name: str = "line-engine"
    prompt: str = "command: "
    color: bool = True
    encoding: Optional[str] = None  # None keeps the platform default


def load_settings(**overrides: object) -> EditorSettings:
    """Build settings from ``LINE_ENGINE_*`` variables, then apply overrides.

    ``None`` overrides are ignored so CLI flags left unset fall through to the
    environment.
    """

    values = {
        "app_name": env("APP_NAME") or "line-engine",
        "prompt": env("PROMPT", "command: "),
        "color": not env_flag("NO_COLOR", False),
        "encoding": env("ENCODING") or None,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return EditorSettings(**values)  # type: ignore[arg-type]


__all__ = ["ENV_PREFIX", "EditorSettings", "env", "env_flag", "load_settings"]
