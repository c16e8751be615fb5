from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from hokhub.adapters.snapshots import SNAPSHOT_FILENAMES, SnapshotDirectoryLoader
from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import SourceTag
from tests.helpers.heroes import camp_snapshot, world_snapshot

if TYPE_CHECKING:
    from pathlib import Path


def test_loader_reads_present_snapshots_and_skips_missing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / SNAPSHOT_FILENAMES[SourceTag.WORLD]).write_text(
        json.dumps(world_snapshot()), encoding="utf-8"
    )
    (tmp_path / SNAPSHOT_FILENAMES[SourceTag.CAMP]).write_text(
        json.dumps(camp_snapshot()), encoding="utf-8"
    )

    with caplog.at_level("WARNING"):
        documents = SnapshotDirectoryLoader(tmp_path)()

    assert [document.source for document in documents] == [SourceTag.WORLD, SourceTag.CAMP]
    assert documents[0].origin == str(tmp_path / "world-heroes-data.json")
    assert "skin-backup" in caplog.text


def test_loader_rejects_invalid_json(tmp_path: Path) -> None:
    (tmp_path / SNAPSHOT_FILENAMES[SourceTag.CAMP]).write_text("{not json", encoding="utf-8")

    with pytest.raises(SourceFormatError, match="not valid JSON"):
        SnapshotDirectoryLoader(tmp_path)()
