"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from hokhub.domain.ports.persistence import (
        ContributionRepository,
        ContributorLedger,
        HistoryRepository,
        MergedStoreRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ModerationRepositories(RepositoryCollection):
    """Everything an approval or rejection writes, committed together."""

    store: MergedStoreRepository
    contributions: ContributionRepository
    history: HistoryRepository


@dataclass(slots=True)
class ContributorRepositories(RepositoryCollection):
    contributors: ContributorLedger


type ModerationUnitOfWork = UnitOfWork[ModerationRepositories]
type ContributorUnitOfWork = UnitOfWork[ContributorRepositories]
