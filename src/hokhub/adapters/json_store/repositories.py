"""File-backed repositories for the merged store, contributions and history."""

from __future__ import annotations

import re
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from pydantic import ValidationError

from hokhub.adapters.documents import dumps, store_from_document, store_to_document
from hokhub.adapters.submissions import (
    contribution_from_document,
    contribution_to_document,
    history_record_from_document,
    history_record_to_document,
)
from hokhub.domain.errors import PersistenceError, SubmissionValidationError
from hokhub.domain.model import ContributionStatus, MergedStore
from hokhub.domain.moderation.history import HISTORY_LIMIT, prepend_record

from .files import parse_json

if TYPE_CHECKING:
    from hokhub.domain.model import Contribution, HistoryRecord

    from .files import WriteBatch

log = getLogger(__name__)

_SAFE_ID: Final = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class JsonMergedStoreRepository:
    def __init__(self, path: Path, batch: WriteBatch) -> None:
        self.path = path
        self.batch = batch

    def load(self) -> MergedStore:
        text = self.batch.read(self.path)
        if text is None:
            log.info("No merged store at %s yet, starting empty", self.path)
            return MergedStore()
        content = parse_json(text, origin=self.path)
        try:
            return store_from_document(content)
        except (ValidationError, ValueError) as exc:
            raise PersistenceError(f"Invalid merged store {self.path}: {exc}") from exc

    def save(self, store: MergedStore) -> None:
        self.batch.write(self.path, dumps(store_to_document(store)))


class JsonContributionRepository:
    """One file per contribution under ``<root>/<status>/<id>.json``."""

    def __init__(self, root: Path, batch: WriteBatch) -> None:
        self.root = root
        self.batch = batch

    def _path(self, status: ContributionStatus, contribution_id: str) -> Path:
        return self.root / status.value / f"{contribution_id}.json"

    def add(self, contribution: Contribution) -> None:
        if self.exists(contribution.contribution_id):
            raise PersistenceError(f"Contribution {contribution.contribution_id} already exists")
        self._write(contribution)

    def get(self, contribution_id: str) -> Contribution | None:
        if not _SAFE_ID.match(contribution_id):
            return None
        for status in ContributionStatus:
            path = self._path(status, contribution_id)
            text = self.batch.read(path)
            if text is not None:
                return self._decode(text, path)
        return None

    def exists(self, contribution_id: str) -> bool:
        if not _SAFE_ID.match(contribution_id):
            return False
        return any(
            self.batch.exists(self._path(status, contribution_id)) for status in ContributionStatus
        )

    def list_by_status(self, status: ContributionStatus) -> list[Contribution]:
        directory = self.root / status.value
        paths = set(directory.glob("*.json")) if directory.is_dir() else set[Path]()
        paths.update(path for path in self.batch.staged() if path.parent == directory)
        contributions: list[Contribution] = []
        for path in sorted(paths):
            text = self.batch.read(path)
            if text is not None:
                contributions.append(self._decode(text, path))
        return contributions

    def list_by_submitter(self, submitter_id: str) -> list[Contribution]:
        return [
            contribution
            for status in ContributionStatus
            for contribution in self.list_by_status(status)
            if contribution.submitter_id == submitter_id
        ]

    def update(self, contribution: Contribution) -> None:
        for status in ContributionStatus:
            if status is contribution.status:
                continue
            stale = self._path(status, contribution.contribution_id)
            if self.batch.exists(stale):
                self.batch.delete(stale)
        self._write(contribution)

    def _write(self, contribution: Contribution) -> None:
        if not _SAFE_ID.match(contribution.contribution_id):
            raise PersistenceError(f"Unsafe contribution id {contribution.contribution_id!r}")
        path = self._path(contribution.status, contribution.contribution_id)
        self.batch.write(path, dumps(contribution_to_document(contribution)))

    def _decode(self, text: str, path: Path) -> Contribution:
        content = parse_json(text, origin=path)
        try:
            return contribution_from_document(content)
        except (ValidationError, SubmissionValidationError) as exc:
            raise PersistenceError(f"Invalid contribution file {path}: {exc}") from exc


class JsonHistoryRepository:
    """Newest-first list in a single JSON file, capped on every append."""

    def __init__(self, path: Path, batch: WriteBatch, *, limit: int = HISTORY_LIMIT) -> None:
        self.path = path
        self.batch = batch
        self.limit = limit

    def _documents(self) -> list[object]:
        text = self.batch.read(self.path)
        if text is None:
            return []
        content = parse_json(text, origin=self.path)
        if not isinstance(content, list):
            raise PersistenceError(f"History {self.path} is not a list")
        return cast(list[object], content)

    def list(self) -> list[HistoryRecord]:
        records: list[HistoryRecord] = []
        for index, document in enumerate(self._documents()):
            try:
                records.append(history_record_from_document(document))
            except (ValidationError, SubmissionValidationError, ValueError) as exc:
                raise PersistenceError(f"Invalid history entry #{index} in {self.path}") from exc
        return records

    def append(self, record: HistoryRecord) -> None:
        documents = prepend_record(
            self._documents(), history_record_to_document(record), limit=self.limit
        )
        self.batch.write(self.path, dumps(documents))
