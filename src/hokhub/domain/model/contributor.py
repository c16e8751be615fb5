"""Registered contributors and their approval counters."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


def _new_contributor_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(kw_only=True, eq=False)
class Contributor:
    display_name: str
    email: str | None = None
    contributor_id: str = field(default_factory=_new_contributor_id)
    total_contributions: int = 0
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.display_name.strip():
            raise ValueError("contributor display name must not be blank")

    def record_approval(self) -> int:
        self.total_contributions += 1
        return self.total_contributions
