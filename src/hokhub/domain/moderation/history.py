"""Capped, newest-first moderation log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

HISTORY_LIMIT: Final[int] = 1000


def prepend_record[T](records: Sequence[T], record: T, *, limit: int = HISTORY_LIMIT) -> list[T]:
    """Return ``record`` followed by ``records``, evicting the oldest beyond ``limit``."""

    if limit < 1:
        raise ValueError("history limit must be positive")
    return [record, *records[: limit - 1]]
