"""Contribution pipeline: submission, review and the audit trail.

Every store-mutating call runs inside one moderation unit of work, which is the
single-writer boundary: load the live store, merge, save, move the
contribution and append history, then commit. A failure anywhere before the
commit leaves store, contribution and history as they were.

Notifications and contributor credit happen after the commit and are
best-effort; their failures are logged and never change the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from hokhub.domain.errors import (
    MergeFailureError,
    ModerationError,
    NotFoundError,
)
from hokhub.domain.model import (
    Contribution,
    ContributionStatus,
    HistoryRecord,
    ReviewAction,
)
from hokhub.domain.ports import NotificationEvent

from .ids import ContributionIdGenerator, utcnow
from .merge import apply_payload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from hokhub.domain.model import ContributionPayload
    from hokhub.domain.ports import (
        ContributorUnitOfWork,
        ModerationRepositories,
        ModerationUnitOfWork,
        Notifier,
    )

log = logging.getLogger(__name__)


class ModerationUnitOfWorkFactory(Protocol):
    def __call__(self, *, read_only: bool = False) -> ModerationUnitOfWork: ...


type ContributorUnitOfWorkFactory = Callable[[], ContributorUnitOfWork]


def _newest_first(contributions: Sequence[Contribution]) -> list[Contribution]:
    return sorted(
        contributions,
        key=lambda item: (item.submitted_at, item.contribution_id),
        reverse=True,
    )


@dataclass(slots=True, kw_only=True, frozen=True)
class ApprovalOutcome:
    contribution: Contribution
    merged: bool = True
    updated: int = 0
    notes: tuple[str, ...] = ()
    success: bool = True


@dataclass(slots=True, kw_only=True, frozen=True)
class RejectionOutcome:
    contribution: Contribution
    success: bool = True


@dataclass(slots=True, kw_only=True, frozen=True)
class BulkItemResult:
    contribution_id: str
    success: bool
    reason: str | None = None


@dataclass(slots=True, kw_only=True, frozen=True)
class BulkOutcome:
    action: ReviewAction
    results: tuple[BulkItemResult, ...]

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.results if item.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded


@dataclass(slots=True, kw_only=True)
class ModerationService:
    unit_of_work: ModerationUnitOfWorkFactory
    notifier: Notifier | None = None
    contributors: ContributorUnitOfWorkFactory | None = None
    clock: Callable[[], datetime] = utcnow
    new_id: Callable[..., str] = field(default_factory=ContributionIdGenerator)

    def submit(
        self,
        payload: ContributionPayload,
        *,
        submitter_id: str | None = None,
    ) -> Contribution:
        """Queue a validated payload as a pending contribution."""

        with self.unit_of_work() as uow:
            contributions = uow.repositories.contributions
            contribution_id = self.new_id(payload.kind)
            while contributions.exists(contribution_id):
                contribution_id = self.new_id(payload.kind)
            contribution = Contribution(
                contribution_id=contribution_id,
                payload=payload,
                submitter_id=submitter_id,
                submitted_at=self.clock(),
            )
            contributions.add(contribution)
            uow.commit()

        log.info("Received %s contribution %s", payload.kind, contribution_id)
        self._notify(NotificationEvent.RECEIVED, contribution)
        return contribution

    def list_pending(self) -> list[Contribution]:
        with self.unit_of_work(read_only=True) as uow:
            pending = uow.repositories.contributions.list_by_status(ContributionStatus.PENDING)
        return _newest_first(pending)

    def list_by_submitter(self, submitter_id: str) -> list[Contribution]:
        """Every contribution of ``submitter_id`` whatever its status, newest first."""

        with self.unit_of_work(read_only=True) as uow:
            contributions = uow.repositories.contributions.list_by_submitter(submitter_id)
        return _newest_first(contributions)

    def approve(self, contribution_id: str) -> ApprovalOutcome:
        """Merge a pending contribution into the store and mark it approved.

        Raises ``NotFoundError``, ``InvalidTransitionError`` or
        ``MergeFailureError``; in every failure case nothing is written.
        """

        with self.unit_of_work() as uow:
            repositories = uow.repositories
            contribution = self._load(repositories, contribution_id)
            contribution.resolve(ReviewAction.APPROVE, reviewed_at=self.clock())

            result = apply_payload(repositories.store.load(), contribution.payload)
            if not result.success or result.store is None:
                raise MergeFailureError(f"Merge failed for {contribution_id}: {result.reason}")

            repositories.store.save(result.store)
            repositories.contributions.update(contribution)
            repositories.history.append(
                HistoryRecord.from_contribution(contribution, ReviewAction.APPROVE)
            )
            uow.commit()

        log.info("Approved contribution %s (%s)", contribution_id, contribution.contribution_type)
        self._credit(contribution)
        self._notify(NotificationEvent.APPROVED, contribution)
        return ApprovalOutcome(
            contribution=contribution,
            updated=result.updated,
            notes=result.notes,
        )

    def reject(self, contribution_id: str) -> RejectionOutcome:
        with self.unit_of_work() as uow:
            repositories = uow.repositories
            contribution = self._load(repositories, contribution_id)
            contribution.resolve(ReviewAction.REJECT, reviewed_at=self.clock())
            repositories.contributions.update(contribution)
            repositories.history.append(
                HistoryRecord.from_contribution(contribution, ReviewAction.REJECT)
            )
            uow.commit()

        log.info("Rejected contribution %s (%s)", contribution_id, contribution.contribution_type)
        self._notify(NotificationEvent.REJECTED, contribution)
        return RejectionOutcome(contribution=contribution)

    def approve_bulk(self, contribution_ids: Sequence[str]) -> BulkOutcome:
        return self._bulk(ReviewAction.APPROVE, contribution_ids)

    def reject_bulk(self, contribution_ids: Sequence[str]) -> BulkOutcome:
        return self._bulk(ReviewAction.REJECT, contribution_ids)

    def get_history(self, *, limit: int | None = None) -> list[HistoryRecord]:
        with self.unit_of_work(read_only=True) as uow:
            records = uow.repositories.history.list()
        return records if limit is None else records[:limit]

    def _bulk(self, action: ReviewAction, contribution_ids: Sequence[str]) -> BulkOutcome:
        operation = self.approve if action is ReviewAction.APPROVE else self.reject
        results: list[BulkItemResult] = []
        # strictly one at a time: each item commits before the next starts
        for contribution_id in contribution_ids:
            try:
                operation(contribution_id)
            except ModerationError as exc:
                log.warning("Bulk %s of %s failed: %s", action, contribution_id, exc.reason)
                results.append(
                    BulkItemResult(
                        contribution_id=contribution_id, success=False, reason=exc.reason
                    )
                )
            else:
                results.append(BulkItemResult(contribution_id=contribution_id, success=True))
        outcome = BulkOutcome(action=action, results=tuple(results))
        log.info(
            "Bulk %s finished: succeeded=%s, failed=%s", action, outcome.succeeded, outcome.failed
        )
        return outcome

    def _load(self, repositories: ModerationRepositories, contribution_id: str) -> Contribution:
        contribution = repositories.contributions.get(contribution_id)
        if contribution is None:
            raise NotFoundError(f"Contribution {contribution_id} not found")
        return contribution

    def _credit(self, contribution: Contribution) -> None:
        if self.contributors is None or contribution.submitter_id is None:
            return
        try:
            with self.contributors() as uow:
                total = uow.repositories.contributors.record_approval(contribution.submitter_id)
                uow.commit()
        except Exception:
            log.exception("Could not credit contributor %s", contribution.submitter_id)
            return
        log.info("Contributor %s now has %s approvals", contribution.submitter_id, total)

    def _notify(self, event: NotificationEvent, contribution: Contribution) -> None:
        if self.notifier is None:
            return
        payload: dict[str, object] = {
            "id": contribution.contribution_id,
            "type": str(contribution.contribution_type),
            "status": str(contribution.status),
            "submitterId": contribution.submitter_id,
        }
        try:
            self.notifier.notify(event, payload)
        except Exception:
            log.exception("Notifier failed for %s %s", event, contribution.contribution_id)
