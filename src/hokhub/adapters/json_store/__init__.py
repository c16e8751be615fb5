"""JSON file persistence for the merged store and the contribution queue."""

from __future__ import annotations

from .files import WriteBatch, parse_json, read_text, write_atomic
from .repositories import (
    JsonContributionRepository,
    JsonHistoryRepository,
    JsonMergedStoreRepository,
)
from .unit_of_work import FileModerationUnitOfWork, UnitOfWorkStateError, writer_lock

__all__ = [
    "FileModerationUnitOfWork",
    "JsonContributionRepository",
    "JsonHistoryRepository",
    "JsonMergedStoreRepository",
    "UnitOfWorkStateError",
    "WriteBatch",
    "parse_json",
    "read_text",
    "write_atomic",
    "writer_lock",
]
