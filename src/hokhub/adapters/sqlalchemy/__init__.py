"""SQLAlchemy adapter package for the hokhub contributor ledger."""

from __future__ import annotations

from .mappings import contributor_table, create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyContributorLedger
from .unit_of_work import (
    SqlAlchemyContributorUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyContributorLedger",
    "SqlAlchemyContributorUnitOfWork",
    "StartupError",
    "configured_engine",
    "contributor_table",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
