"""Time-ordered contribution identifiers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from hokhub.domain.model import ContributionType


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ContributionIdGenerator:
    """Produce ``<prefix>-<epoch millis>`` ids that never repeat within a process.

    When two ids would share a millisecond the later one is bumped forward, so
    ids stay unique and sort in submission order.
    """

    clock: Callable[[], datetime] = utcnow
    _last_millis: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __call__(self, contribution_type: ContributionType) -> str:
        with self._lock:
            millis = int(self.clock().timestamp() * 1000)
            millis = max(millis, self._last_millis + 1)
            self._last_millis = millis
        return f"{contribution_type.id_prefix}-{millis}"
