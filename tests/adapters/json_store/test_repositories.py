from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from hokhub.adapters.json_store import (
    JsonContributionRepository,
    JsonHistoryRepository,
    JsonMergedStoreRepository,
    WriteBatch,
)
from hokhub.adapters.submissions import history_record_to_document
from hokhub.domain.errors import PersistenceError
from hokhub.domain.model import (
    AddSkinPayload,
    Contribution,
    ContributionStatus,
    ContributionType,
    HistoryRecord,
    ReviewAction,
)
from tests.helpers.heroes import make_hero, make_skin, make_store

if TYPE_CHECKING:
    from pathlib import Path

BASE = datetime(2024, 5, 1, tzinfo=UTC)


def _contribution(contribution_id: str = "skin-1") -> Contribution:
    return Contribution(
        contribution_id=contribution_id,
        payload=AddSkinPayload(hero_id=142, skin_name="Swan Princess"),
        submitted_at=BASE,
    )


def _record(index: int) -> HistoryRecord:
    return HistoryRecord(
        contribution_id=f"skin-{index}",
        contribution_type=ContributionType.ADD_SKIN,
        action=ReviewAction.REJECT,
        submitted_at=BASE,
        reviewed_at=BASE + timedelta(seconds=index),
        payload=AddSkinPayload(hero_id=142, skin_name="Swan Princess"),
    )


def test_missing_store_loads_empty(tmp_path: Path) -> None:
    repository = JsonMergedStoreRepository(tmp_path / "merged-api.json", WriteBatch())

    assert len(repository.load()) == 0


def test_store_is_written_on_commit(tmp_path: Path) -> None:
    path = tmp_path / "merged-api.json"
    batch = WriteBatch()
    repository = JsonMergedStoreRepository(path, batch)

    repository.save(make_store(make_hero(skins=[make_skin(cover="https://x/a.png")])))
    batch.commit()

    content = json.loads(path.read_text(encoding="utf-8"))
    assert content["main"]["Angela"]["skins"] == [
        {"skinName": "Swan Princess", "skinCover": "https://x/a.png"}
    ]
    assert JsonMergedStoreRepository(path, WriteBatch()).load().heroes["Angela"].hero_id == 142


def test_corrupt_store_raises_persistence_error(tmp_path: Path) -> None:
    path = tmp_path / "merged-api.json"
    path.write_text(json.dumps({"main": {"Wrong": {"heroId": 1, "name": "Right"}}}))

    with pytest.raises(PersistenceError, match="Invalid merged store"):
        JsonMergedStoreRepository(path, WriteBatch()).load()


def test_contribution_lives_under_its_status(tmp_path: Path) -> None:
    batch = WriteBatch()
    repository = JsonContributionRepository(tmp_path, batch)

    repository.add(_contribution())
    batch.commit()

    assert (tmp_path / "pending" / "skin-1.json").is_file()
    stored = repository.get("skin-1")
    assert stored is not None
    assert stored.status is ContributionStatus.PENDING


def test_duplicate_add_is_refused(tmp_path: Path) -> None:
    repository = JsonContributionRepository(tmp_path, WriteBatch())
    repository.add(_contribution())

    with pytest.raises(PersistenceError, match="already exists"):
        repository.add(_contribution())


def test_update_moves_file_between_status_directories(tmp_path: Path) -> None:
    batch = WriteBatch()
    repository = JsonContributionRepository(tmp_path, batch)
    repository.add(_contribution())
    batch.commit()

    contribution = repository.get("skin-1")
    assert contribution is not None
    contribution.resolve(ReviewAction.APPROVE, reviewed_at=BASE + timedelta(hours=1))
    repository.update(contribution)
    batch.commit()

    assert not (tmp_path / "pending" / "skin-1.json").exists()
    assert (tmp_path / "approved" / "skin-1.json").is_file()
    assert repository.list_by_status(ContributionStatus.PENDING) == []
    (approved,) = repository.list_by_status(ContributionStatus.APPROVED)
    assert approved.reviewed_at == BASE + timedelta(hours=1)


def test_list_by_status_includes_staged_files(tmp_path: Path) -> None:
    repository = JsonContributionRepository(tmp_path, WriteBatch())
    repository.add(_contribution("skin-2"))
    repository.add(_contribution("skin-1"))

    listed = repository.list_by_status(ContributionStatus.PENDING)

    assert [item.contribution_id for item in listed] == ["skin-1", "skin-2"]



def test_list_by_submitter_spans_every_status(tmp_path: Path) -> None:
    batch = WriteBatch()
    repository = JsonContributionRepository(tmp_path, batch)
    mine = _contribution("skin-1")
    mine.submitter_id = "user-1"
    reviewed = _contribution("skin-2")
    reviewed.submitter_id = "user-1"
    reviewed.resolve(ReviewAction.REJECT, reviewed_at=BASE + timedelta(hours=1))
    other = _contribution("skin-3")
    other.submitter_id = "user-2"
    for contribution in (mine, reviewed, other):
        repository.add(contribution)
    batch.commit()

    listed = repository.list_by_submitter("user-1")

    assert sorted(item.contribution_id for item in listed) == ["skin-1", "skin-2"]
    assert repository.list_by_submitter("nobody") == []

@pytest.mark.parametrize("contribution_id", ["../escape", "", "a/b", ".hidden"])
def test_unsafe_ids_are_never_resolved(tmp_path: Path, contribution_id: str) -> None:
    repository = JsonContributionRepository(tmp_path, WriteBatch())

    assert repository.get(contribution_id) is None
    assert repository.exists(contribution_id) is False
    with pytest.raises(PersistenceError, match="Unsafe"):
        repository.add(_contribution(contribution_id))


def test_corrupt_contribution_file_is_reported(tmp_path: Path) -> None:
    (tmp_path / "pending").mkdir()
    (tmp_path / "pending" / "skin-1.json").write_text('{"id": "skin-1"}', encoding="utf-8")

    with pytest.raises(PersistenceError, match="Invalid contribution file"):
        JsonContributionRepository(tmp_path, WriteBatch()).get("skin-1")


def test_history_is_newest_first(tmp_path: Path) -> None:
    repository = JsonHistoryRepository(tmp_path / "history.json", WriteBatch())

    repository.append(_record(1))
    repository.append(_record(2))

    assert [record.contribution_id for record in repository.list()] == ["skin-2", "skin-1"]


def test_history_is_capped(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    seeded = [history_record_to_document(_record(index)) for index in reversed(range(1050))]
    path.write_text(json.dumps(seeded), encoding="utf-8")
    batch = WriteBatch()

    repository = JsonHistoryRepository(path, batch, limit=1000)
    repository.append(_record(1050))
    batch.commit()

    records = repository.list()
    assert len(records) == 1000
    assert records[0].contribution_id == "skin-1050"
    assert records[-1].contribution_id == "skin-51"


def test_history_file_must_hold_a_list(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(PersistenceError, match="not a list"):
        JsonHistoryRepository(path, WriteBatch()).list()
