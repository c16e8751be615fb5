"""Atomic JSON file access and the staged write batch behind the unit of work."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from logging import getLogger
from typing import TYPE_CHECKING

from hokhub.domain.errors import PersistenceError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


def read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise PersistenceError(f"Cannot read {path}: {exc}") from exc


def parse_json(text: str, *, origin: Path) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Corrupt JSON in {origin}: {exc}") from exc


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` via a temp file in the same directory."""

    temp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = handle.name
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
        raise PersistenceError(f"Cannot write {path}: {exc}") from exc


class WriteBatch:
    """Writes and deletes staged until ``commit``.

    Reads through the batch see staged content, so repositories sharing a batch
    observe each other's pending changes.
    """

    def __init__(self, *, read_only: bool = False) -> None:
        self.read_only = read_only
        self._staged: dict[Path, str | None] = {}

    def __len__(self) -> int:
        return len(self._staged)

    def read(self, path: Path) -> str | None:
        if path in self._staged:
            return self._staged[path]
        return read_text(path)

    def exists(self, path: Path) -> bool:
        if path in self._staged:
            return self._staged[path] is not None
        return path.is_file()

    def staged(self) -> dict[Path, str | None]:
        return dict(self._staged)

    def write(self, path: Path, text: str) -> None:
        self._check_writable()
        self._staged[path] = text

    def delete(self, path: Path) -> None:
        self._check_writable()
        self._staged[path] = None

    def commit(self) -> None:
        """Apply writes in staging order, then deletes."""

        writes = [(path, text) for path, text in self._staged.items() if text is not None]
        deletes = [path for path, text in self._staged.items() if text is None]
        for path, text in writes:
            write_atomic(path, text)
        for path in deletes:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                raise PersistenceError(f"Cannot remove {path}: {exc}") from exc
        log.debug("Committed %s writes and %s deletes", len(writes), len(deletes))
        self._staged.clear()

    def clear(self) -> None:
        self._staged.clear()

    def _check_writable(self) -> None:
        if self.read_only:
            raise PersistenceError("Unit of work is read-only")
