"""Ports for persisting the merged store, contributions and the contributor ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from hokhub.domain.model import (
        Contribution,
        ContributionStatus,
        HistoryRecord,
        MergedStore,
    )


@runtime_checkable
class MergedStoreRepository(Protocol):
    """Whole-document access to the merged store."""

    def load(self) -> MergedStore: ...

    def save(self, store: MergedStore) -> None: ...


@runtime_checkable
class ContributionRepository(Protocol):
    """Persistence contract for contributions, partitioned by status."""

    def add(self, contribution: Contribution) -> None: ...

    def get(self, contribution_id: str) -> Contribution | None: ...

    def exists(self, contribution_id: str) -> bool: ...

    def list_by_status(self, status: ContributionStatus) -> list[Contribution]: ...

    def list_by_submitter(self, submitter_id: str) -> list[Contribution]:
        """Contributions of one submitter across every status."""
        ...

    def update(self, contribution: Contribution) -> None:
        """Persist ``contribution`` under its current status, removing stale copies."""
        ...


@runtime_checkable
class HistoryRepository(Protocol):
    """Newest-first moderation log."""

    def list(self) -> list[HistoryRecord]: ...

    def append(self, record: HistoryRecord) -> None: ...


@dataclass(slots=True, frozen=True)
class ContributorStanding:
    contributor_id: str
    display_name: str
    total_contributions: int
    joined_at: datetime | None = None

    @property
    def score(self) -> int:
        return self.total_contributions * 5


@runtime_checkable
class ContributorLedger(Protocol):
    """Per-contributor approval counters backed by the relational store."""

    def register(self, *, display_name: str, email: str | None = None) -> str: ...

    def record_approval(self, contributor_id: str) -> int: ...

    def leaderboard(self, *, limit: int = 10) -> list[ContributorStanding]: ...
