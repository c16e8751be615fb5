from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from hokhub.adapters.json_store import (
    FileModerationUnitOfWork,
    UnitOfWorkStateError,
    writer_lock,
)
from hokhub.domain.errors import PersistenceError
from tests.helpers.heroes import make_hero, make_store

if TYPE_CHECKING:
    from hokhub.config import StorageConfig


def test_commit_persists_store(storage: StorageConfig) -> None:
    with FileModerationUnitOfWork(storage) as uow:
        uow.repositories.store.save(make_store(make_hero()))
        uow.commit()

    assert storage.merged_store_path().is_file()
    with FileModerationUnitOfWork(storage, read_only=True) as uow:
        assert list(uow.repositories.store.load().heroes) == ["Angela"]


def test_exit_without_commit_discards_writes(storage: StorageConfig) -> None:
    with FileModerationUnitOfWork(storage) as uow:
        uow.repositories.store.save(make_store(make_hero()))

    assert not storage.merged_store_path().exists()


def test_exception_discards_writes_and_releases_lock(storage: StorageConfig) -> None:
    lock = writer_lock(storage.resolve_data_dir())

    with pytest.raises(RuntimeError, match="boom"), FileModerationUnitOfWork(storage) as uow:
        uow.repositories.store.save(make_store(make_hero()))
        assert lock.locked()
        raise RuntimeError("boom")

    assert not lock.locked()
    assert not storage.merged_store_path().exists()


def test_read_only_unit_refuses_writes_and_skips_lock(storage: StorageConfig) -> None:
    lock = writer_lock(storage.resolve_data_dir())

    with FileModerationUnitOfWork(storage, read_only=True) as uow:
        assert not lock.locked()
        with pytest.raises(PersistenceError):
            uow.repositories.store.save(make_store(make_hero()))


def test_repositories_outside_context_raise(storage: StorageConfig) -> None:
    uow = FileModerationUnitOfWork(storage)

    with pytest.raises(UnitOfWorkStateError):
        _ = uow.repositories
    with pytest.raises(UnitOfWorkStateError):
        uow.commit()


def test_writers_are_serialized(storage: StorageConfig) -> None:
    entered = threading.Event()
    release = threading.Event()
    order: list[str] = []

    def first() -> None:
        with FileModerationUnitOfWork(storage):
            order.append("first-start")
            entered.set()
            release.wait(timeout=5)
            order.append("first-end")

    def second() -> None:
        entered.wait(timeout=5)
        with FileModerationUnitOfWork(storage):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for thread in threads:
        thread.start()
    entered.wait(timeout=5)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert order == ["first-start", "first-end", "second"]


def test_same_directory_shares_one_lock(storage: StorageConfig) -> None:
    assert writer_lock(storage.resolve_data_dir()) is writer_lock(storage.resolve_data_dir())
