"""File-backed moderation unit of work with a single-writer lock."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Literal

from hokhub.domain.ports.unit_of_work import ModerationRepositories

from .files import WriteBatch
from .repositories import (
    JsonContributionRepository,
    JsonHistoryRepository,
    JsonMergedStoreRepository,
)

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from hokhub.config import StorageConfig


class UnitOfWorkStateError(RuntimeError):
    """Raised when repositories are requested outside a ``with`` block."""


_LOCKS: dict[Path, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def writer_lock(data_dir: Path) -> threading.Lock:
    """Process-wide lock serializing all writers of one data directory."""

    with _LOCKS_GUARD:
        return _LOCKS.setdefault(data_dir, threading.Lock())


class FileModerationUnitOfWork:
    """Stage every write of one moderation step and apply them on ``commit``.

    Writers hold the data directory's lock from ``__enter__`` to ``__exit__``, so
    read-modify-write cycles on the merged store never interleave. Read-only
    units skip the lock and refuse writes.

    ``commit`` applies the staged files one atomic write at a time, in staging
    order with deletions last, not as one transaction. For an approval a crash
    in between can leave the store merged while the contribution still sits in
    ``pending``; approving it again is safe because every merge is idempotent.
    """

    def __init__(self, storage: StorageConfig, *, read_only: bool = False) -> None:
        self.storage = storage
        self.read_only = read_only
        self._lock = writer_lock(storage.resolve_data_dir())
        self._batch: WriteBatch | None = None
        self._repositories: ModerationRepositories | None = None

    def __enter__(self) -> FileModerationUnitOfWork:
        if not self.read_only:
            self._lock.acquire()
        self._batch = WriteBatch(read_only=self.read_only)
        self._repositories = ModerationRepositories(
            store=JsonMergedStoreRepository(self.storage.merged_store_path(), self._batch),
            contributions=JsonContributionRepository(
                self.storage.contributions_dir(), self._batch
            ),
            history=JsonHistoryRepository(self.storage.history_path(), self._batch),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            self.rollback()
        finally:
            self._batch = None
            self._repositories = None
            if not self.read_only:
                self._lock.release()
        return False

    @property
    def repositories(self) -> ModerationRepositories:
        if self._repositories is None:
            raise UnitOfWorkStateError("Unit of work used outside its context")
        return self._repositories

    def commit(self) -> None:
        if self._batch is None:
            raise UnitOfWorkStateError("Unit of work used outside its context")
        self._batch.commit()

    def rollback(self) -> None:
        if self._batch is not None:
            self._batch.clear()

