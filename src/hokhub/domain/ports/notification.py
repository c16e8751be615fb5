"""Outbound notification port."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


class NotificationEvent(StrEnum):
    RECEIVED = "contribution.received"
    APPROVED = "contribution.approved"
    REJECTED = "contribution.rejected"


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget sink; implementations must return promptly and never raise."""

    def notify(self, event: NotificationEvent, payload: Mapping[str, object]) -> None: ...
