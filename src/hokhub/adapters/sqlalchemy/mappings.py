"""Imperative table mapping for the contributor ledger."""

from __future__ import annotations

from datetime import UTC, datetime
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, TypeDecorator, orm

from hokhub.domain.model import Contributor

if TYPE_CHECKING:
    from sqlalchemy import Dialect
    from sqlalchemy.engine import Engine

log = getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class AwareTimestamp(TypeDecorator[datetime]):
    """UTC timestamps; SQLite drops the offset, so it is restored on read."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _as_utc(value)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _as_utc(value)


metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
    }
)
mapper_registry = orm.registry(metadata=metadata)

contributor_table = Table(
    "contributors",
    metadata,
    Column("contributor_id", String(64), primary_key=True),
    Column("display_name", String(120), nullable=False),
    Column("email", String(320), unique=True),
    Column("total_contributions", Integer, nullable=False, default=0),
    Column("created_at", AwareTimestamp(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Map ``Contributor`` onto its table once per process."""

    mapper_registry.map_imperatively(Contributor, contributor_table)
    log.debug("Mapped %s onto %s", Contributor.__name__, contributor_table.name)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
    log.info("Contributor ledger schema ready on %s", engine.url.render_as_string())
