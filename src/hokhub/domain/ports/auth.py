"""Credential verification port used to attribute submissions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class Principal:
    contributor_id: str
    display_name: str | None = None
    is_moderator: bool = False


@runtime_checkable
class AuthVerifier(Protocol):
    """Return the authenticated principal, or ``None`` for an invalid credential."""

    def verify(self, credential: str) -> Principal | None: ...
