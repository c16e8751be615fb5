"""Human-readable notification texts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hokhub.domain.ports import NotificationEvent

if TYPE_CHECKING:
    from collections.abc import Mapping


def render(event: NotificationEvent, payload: Mapping[str, object]) -> tuple[str, str]:
    """Return ``(subject, message)`` for a moderation event."""

    kind = str(payload.get("type", "unknown")).upper()
    contribution_id = payload.get("id", "?")
    match event:
        case NotificationEvent.RECEIVED:
            return "New Contribution", (
                "New Contribution Received!\n\n"
                f"Type: {kind}\nID: {contribution_id}\n\nStatus: Pending Review\n\n"
                "The contribution is now in the admin review queue."
            )
        case NotificationEvent.APPROVED:
            return "Contribution Approved", (
                "Your contribution has been reviewed and approved!\n\n"
                f"Type: {kind}\nID: {contribution_id}\n\n"
                "Your contribution has been merged into the main database.\n"
                "Thank you for helping improve the Honor of Kings Hub!"
            )
        case NotificationEvent.REJECTED:
            return "Contribution Not Approved", (
                "Your contribution was reviewed but could not be approved at this time.\n\n"
                f"Type: {kind}\nID: {contribution_id}\n\n"
                "You can submit a new contribution with corrected information."
            )
