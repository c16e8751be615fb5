"""Contribution records and the moderation history log entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hokhub.domain.errors import InvalidTransitionError

from .enums import ContributionStatus

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import ContributionType, ReviewAction
    from .payloads import ContributionPayload


@dataclass(slots=True, kw_only=True)
class Contribution:
    contribution_id: str
    payload: ContributionPayload
    submitted_at: datetime
    submitter_id: str | None = None
    status: ContributionStatus = ContributionStatus.PENDING
    reviewed_at: datetime | None = None

    @property
    def contribution_type(self) -> ContributionType:
        return self.payload.kind

    def resolve(self, action: ReviewAction, *, reviewed_at: datetime) -> None:
        """Move out of ``pending``; terminal states never change again."""

        if self.status.is_terminal:
            raise InvalidTransitionError(
                f"Contribution {self.contribution_id} is already {self.status}"
            )
        self.status = action.outcome
        self.reviewed_at = reviewed_at


@dataclass(slots=True, kw_only=True, frozen=True)
class HistoryRecord:
    contribution_id: str
    contribution_type: ContributionType
    action: ReviewAction
    submitted_at: datetime
    reviewed_at: datetime
    payload: ContributionPayload

    @classmethod
    def from_contribution(cls, contribution: Contribution, action: ReviewAction) -> HistoryRecord:
        if contribution.reviewed_at is None:
            raise ValueError("history requires a reviewed contribution")
        return cls(
            contribution_id=contribution.contribution_id,
            contribution_type=contribution.contribution_type,
            action=action,
            submitted_at=contribution.submitted_at,
            reviewed_at=contribution.reviewed_at,
            payload=contribution.payload,
        )
