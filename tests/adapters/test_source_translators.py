from __future__ import annotations

import pytest

from hokhub.adapters.camp import normalize_camp_document
from hokhub.adapters.skin_backup import normalize_skin_backup_document
from hokhub.adapters.world import normalize_world_document
from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import SourceTag
from hokhub.domain.ports import RawSourceDocument
from tests.helpers.heroes import camp_snapshot, skin_backup_snapshot, world_snapshot


def _world(content: object) -> RawSourceDocument:
    return RawSourceDocument(source=SourceTag.WORLD, content=content, origin="world.json")


def test_world_uses_english_name_and_keeps_local_name() -> None:
    normalized = normalize_world_document(_world(world_snapshot()))

    angela = normalized.by_id[142]
    assert angela.name == "Angela"
    assert angela.extras == {"localName": "安琪拉"}
    assert angela.skins is not None
    assert [skin.name for skin in angela.skins] == ["Swan Princess", "Time Keeper"]
    assert angela.skins[0].series is None


def test_world_drops_nameless_records_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        normalized = normalize_world_document(_world(world_snapshot()))

    assert 999 not in normalized.by_id
    assert normalized.dropped == 1
    assert "Dropping world hero 999" in caplog.text


def test_world_falls_back_to_key_for_id() -> None:
    normalized = normalize_world_document(_world({"heroes": {"77": {"nameEN": "Keyed"}}}))

    assert normalized.by_id[77].name == "Keyed"


def test_world_rejects_wrong_shape() -> None:
    with pytest.raises(SourceFormatError, match=r"world\.json"):
        normalize_world_document(_world([1, 2, 3]))


def test_camp_builds_analytics_block() -> None:
    normalized = normalize_camp_document(
        RawSourceDocument(source=SourceTag.CAMP, content={"heroes": camp_snapshot()})
    )

    angela = normalized.by_id[142]
    analytics = angela.analytics
    assert analytics is not None
    assert angela.lane == "Mid Lane"
    assert angela.identity == "Student"
    assert analytics.abilities[0].cooldown == "7"
    assert analytics.recommended_items[0].price == 820
    assert analytics.recommended_augments[0].name == "Mutation"
    assert analytics.strong_against["Lian Po"].note == "Burst him down"
    assert list(analytics.best_partner) == ["Zhuangzi"]
    assert analytics.attributes.survival == "30%"
    assert analytics.attributes.difficulty == "0%"
    assert analytics.statistics.tier == "T1"
    assert analytics.build_title == "Burst Mage"
    assert normalized.dropped == 1


def test_camp_skips_malformed_record(caplog: pytest.LogCaptureFixture) -> None:
    content = [{"heroId": "x1", "heroName": "Bad", "skills": "nope"}, {"heroId": 1, "name": "Ok"}]

    with caplog.at_level("WARNING"):
        normalized = normalize_camp_document(
            RawSourceDocument(source=SourceTag.CAMP, content=content)
        )

    assert list(normalized.by_id) == [1]
    assert normalized.dropped == 1
    assert "malformed camp record #0" in caplog.text


def test_camp_rejects_non_list() -> None:
    with pytest.raises(SourceFormatError):
        normalize_camp_document(RawSourceDocument(source=SourceTag.CAMP, content="nope"))


def test_skin_backup_groups_rows_per_hero() -> None:
    normalized = normalize_skin_backup_document(
        RawSourceDocument(source=SourceTag.SKIN_BACKUP, content=skin_backup_snapshot())
    )

    angela = normalized.by_id[142]
    assert angela.skins is not None
    assert [skin.name for skin in angela.skins] == [
        "Swan Princess",
        "Time Keeper",
        "Campus Cutie",
    ]
    (lian_po,) = normalized.unkeyed
    assert lian_po.name == "lian po"
    assert lian_po.hero_id is None
    assert normalized.dropped == 1


def test_skin_backup_dedupes_skins_by_name() -> None:
    rows = [
        {"skinName": "Swan Princess", "hero": {"heroId": 142, "heroName": "Angela"}},
        {"skinName": "swan princess", "hero": {"heroId": 142, "heroName": "Angela"}},
    ]

    normalized = normalize_skin_backup_document(
        RawSourceDocument(source=SourceTag.SKIN_BACKUP, content={"skins": rows})
    )

    assert len(normalized.by_id[142].skins or ()) == 1
