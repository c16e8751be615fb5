"""Data directory layout for the merged store, contributions and ledger."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_path, env_text

APP_DIR_NAME: Final[str] = "hokhub"
DEFAULT_DB_FILENAME: Final[str] = "hokhub.db"
MERGED_STORE_FILENAME: Final[str] = "merged-api.json"
CONTRIBUTIONS_DIRNAME: Final[str] = "contributions"
HISTORY_DIRNAME: Final[str] = "history"
HISTORY_FILENAME: Final[str] = "history.json"
SNAPSHOT_DIRNAME: Final[str] = "snapshots"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    merged_store_filename: str = MERGED_STORE_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def merged_store_path(self) -> Path:
        return self.resolve_data_dir() / self.merged_store_filename

    def contributions_dir(self) -> Path:
        return self.resolve_data_dir() / CONTRIBUTIONS_DIRNAME

    def history_path(self) -> Path:
        return self.contributions_dir() / HISTORY_DIRNAME / HISTORY_FILENAME

    def snapshot_dir(self) -> Path:
        return self.resolve_data_dir() / SNAPSHOT_DIRNAME

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


@dataclass(frozen=True, slots=True)
class SourceConfig:
    snapshot_dir: Path


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = env_path("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
    else:
        base = env_path("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return (base / APP_DIR_NAME).resolve()


def get_storage_config() -> StorageConfig:
    return StorageConfig(data_dir=env_path("HOKHUB_DATA_DIR") or _default_data_dir())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = env_text("DATABASE_URI")
    if uri is None:
        uri = (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri)


def get_source_config(*, storage: StorageConfig | None = None) -> SourceConfig:
    snapshot_dir = env_path("HOKHUB_SNAPSHOT_DIR")
    if snapshot_dir is None:
        snapshot_dir = (storage or get_storage_config()).snapshot_dir()
    return SourceConfig(snapshot_dir=snapshot_dir)
