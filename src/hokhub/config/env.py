"""Environment variable parsing shared by the config loaders."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def env_text(name: str) -> str | None:
    """Stripped value of ``name``; blank counts as unset."""

    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def env_flag(name: str, *, default: bool = False) -> bool:
    """Parse a boolean environment variable (``true``/``false`` and friends)."""

    value = env_text(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def env_path(name: str) -> Path | None:
    value = env_text(name)
    return Path(value).expanduser().resolve() if value else None
