"""Engine lifecycle and unit of work for the contributor ledger."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from hokhub.config import get_database_config
from hokhub.domain.ports.unit_of_work import ContributorRepositories

from .mappings import create_all_tables, start_mappers
from .repositories import SqlAlchemyContributorLedger

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """The ledger database was used before ``startup`` or bound twice."""


@dataclass(slots=True)
class _LedgerDatabase:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine) -> None:
        if self.engine is not None and self.engine is not engine:
            self.engine.dispose()
        self.engine = engine
        self.sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def reset(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.sessions = None

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError("Contributor ledger not started; call startup() first")
        return self.sessions()


_DATABASE = _LedgerDatabase()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the ledger to ``engine``, or to a new engine for ``database_uri``.

    Tables are created when missing. Rebinding an already started ledger needs
    ``force=True``; the previous engine is disposed.
    """

    if _DATABASE.engine is not None and not force:
        raise StartupError("Contributor ledger already started; pass force=True to rebind")
    bound = engine or create_engine(database_uri or get_database_config().uri)
    start_mappers()
    create_all_tables(bound)
    _DATABASE.bind(bound)


def configured_engine() -> Engine | None:
    return _DATABASE.engine


def is_started() -> bool:
    return _DATABASE.engine is not None


def shutdown() -> None:
    _DATABASE.reset()


class SqlAlchemyContributorUnitOfWork:
    """One session per ``with`` block; anything not committed is discarded on exit."""

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Contributor ledger not started; call startup() first")
        self._session: Session | None = None
        self._repositories: ContributorRepositories | None = None

    def __enter__(self) -> SqlAlchemyContributorUnitOfWork:
        self._session = _DATABASE.open_session()
        self._repositories = ContributorRepositories(
            contributors=SqlAlchemyContributorLedger(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self._active_session()
        self._session = None
        self._repositories = None
        try:
            if exc_type is not None:
                log.debug("Rolling back contributor ledger session after %s", exc_type.__name__)
                session.rollback()
        finally:
            session.close()
        return False

    @property
    def repositories(self) -> ContributorRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its context")
        return self._repositories

    def commit(self) -> None:
        self._active_session().commit()

    def rollback(self) -> None:
        self._active_session().rollback()

    def _active_session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its context")
        return self._session
