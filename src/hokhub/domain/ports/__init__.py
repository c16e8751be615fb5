"""Domain port definitions for adapters."""

from __future__ import annotations

from .auth import AuthVerifier, Principal
from .notification import NotificationEvent, Notifier
from .persistence import (
    ContributionRepository,
    ContributorLedger,
    ContributorStanding,
    HistoryRepository,
    MergedStoreRepository,
)
from .sources import RawSourceDocument, SourceLoader
from .unit_of_work import (
    ContributorRepositories,
    ContributorUnitOfWork,
    ModerationRepositories,
    ModerationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AuthVerifier",
    "ContributionRepository",
    "ContributorLedger",
    "ContributorRepositories",
    "ContributorStanding",
    "ContributorUnitOfWork",
    "HistoryRepository",
    "MergedStoreRepository",
    "ModerationRepositories",
    "ModerationUnitOfWork",
    "NotificationEvent",
    "Notifier",
    "Principal",
    "RawSourceDocument",
    "RepositoryCollection",
    "SourceLoader",
    "UnitOfWork",
]
