from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from hokhub.adapters.sqlalchemy import create_all_tables, start_mappers
from hokhub.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyContributorUnitOfWork,
    shutdown,
    startup,
)
from hokhub.config import StorageConfig
from hokhub.domain.moderation import ModerationService
from tests.helpers.moderation import (
    FakeModerationState,
    RecordingNotifier,
    SteppingClock,
    fake_unit_of_work_factory,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("HOKHUB_NOTIFICATIONS_ENABLED", "false")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyContributorUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyContributorUnitOfWork:
        return SqlAlchemyContributorUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def moderation_state() -> FakeModerationState:
    return FakeModerationState()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fake_service(
    moderation_state: FakeModerationState,
    notifier: RecordingNotifier,
) -> ModerationService:
    return ModerationService(
        unit_of_work=fake_unit_of_work_factory(moderation_state),
        notifier=notifier,
        clock=SteppingClock(),
    )
