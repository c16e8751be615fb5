from __future__ import annotations

from typing import TYPE_CHECKING

from hokhub.config import (
    StorageConfig,
    get_database_config,
    get_source_config,
    get_storage_config,
)

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def test_storage_config_uses_env_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("HOKHUB_DATA_DIR", str(tmp_path / "hub"))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "hub").resolve()


def test_storage_config_defaults_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("HOKHUB_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "hokhub").resolve()


def test_storage_layout(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path)
    root = tmp_path.resolve()

    assert config.merged_store_path() == root / "merged-api.json"
    assert config.contributions_dir() == root / "contributions"
    assert config.history_path() == root / "contributions" / "history" / "history.json"
    assert config.database_path() == root / "hokhub.db"


def test_database_uri_prefers_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config(storage=StorageConfig(data_dir=tmp_path)).uri.endswith(":memory:")

    monkeypatch.delenv("DATABASE_URI")

    uri = get_database_config(storage=StorageConfig(data_dir=tmp_path)).uri
    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'hokhub.db'}"


def test_snapshot_dir_defaults_under_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("HOKHUB_SNAPSHOT_DIR", raising=False)

    config = get_source_config(storage=StorageConfig(data_dir=tmp_path))

    assert config.snapshot_dir == tmp_path.resolve() / "snapshots"
