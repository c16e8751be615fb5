from __future__ import annotations

from hokhub.domain.model import (
    AddEntityPayload,
    AddSkinPayload,
    EditRelationshipPayload,
    EditSkinPayload,
    RelabelSeriesPayload,
    RelationshipAction,
    RelationshipEntry,
    RelationshipKind,
    SkinFields,
    SkinRef,
)
from hokhub.domain.moderation import apply_payload
from tests.helpers.heroes import make_hero, make_skin, make_store


def test_add_skin_appends_new_skin() -> None:
    store = make_store(make_hero())

    result = apply_payload(
        store,
        AddSkinPayload(
            hero_id=142, skin_name="Swan Princess", skin=SkinFields(cover="https://x/a.png")
        ),
    )

    assert result.success
    assert result.store is not None
    (skin,) = result.store.heroes["Angela"].skins
    assert skin.name == "Swan Princess"
    assert skin.cover == "https://x/a.png"
    assert store.heroes["Angela"].skins == []


def test_add_skin_updates_same_name_in_place() -> None:
    store = make_store(make_hero(skins=[make_skin("Swan Princess", series="FUTURE ERA")]))

    result = apply_payload(
        store,
        AddSkinPayload(hero_id=142, skin_name="swan princess", skin=SkinFields(cover="new")),
    )

    assert result.store is not None
    (skin,) = result.store.heroes["Angela"].skins
    assert skin.name == "Swan Princess"
    assert skin.cover == "new"
    assert skin.series == "FUTURE ERA"


def test_add_skin_fails_for_unknown_hero() -> None:
    result = apply_payload(make_store(), AddSkinPayload(hero_id=1, skin_name="Nope"))

    assert not result.success
    assert result.store is None
    assert result.reason == "Hero 1 not found"


def test_add_entity_inserts_new_hero() -> None:
    store = make_store(make_hero())

    result = apply_payload(
        store,
        AddEntityPayload(name="Lian Po", hero_id=105, values={"role": "Tank"}),
    )

    assert result.store is not None
    lian_po = result.store.heroes["Lian Po"]
    assert lian_po.role == "Tank"
    assert lian_po.skins == []


def test_add_entity_merges_into_existing_by_upper_name() -> None:
    store = make_store(make_hero(role="Mage", skins=[make_skin()]))

    result = apply_payload(store, AddEntityPayload(name="ANGELA", values={"lane": "Mid"}))

    assert result.store is not None
    angela = result.store.heroes["Angela"]
    assert angela.lane == "Mid"
    assert angela.role == "Mage"
    assert len(angela.skins) == 1


def test_add_entity_new_hero_needs_id() -> None:
    result = apply_payload(make_store(), AddEntityPayload(name="Lian Po"))

    assert not result.success
    assert "heroId" in (result.reason or "")


def test_add_entity_refuses_taken_id() -> None:
    result = apply_payload(make_store(make_hero()), AddEntityPayload(name="Other", hero_id=142))

    assert not result.success


def test_relabel_series_counts_updates() -> None:
    store = make_store(make_hero(skins=[make_skin("Swan Princess"), make_skin("Time Keeper")]))

    result = apply_payload(
        store,
        RelabelSeriesPayload(
            series_name="FUTURE ERA",
            skins=(
                SkinRef(hero_id=142, skin_name="Swan Princess"),
                SkinRef(hero_id=142, skin_name="Missing"),
            ),
        ),
    )

    assert result.success
    assert result.updated == 1
    assert result.notes == ("skin not found: 142/Missing",)
    assert result.store is not None
    assert result.store.heroes["Angela"].skins[0].series == "FUTURE ERA"
    assert result.store.heroes["Angela"].skins[1].series is None


def test_relabel_series_fails_when_nothing_matches() -> None:
    result = apply_payload(
        make_store(make_hero()),
        RelabelSeriesPayload(
            series_name="FUTURE ERA", skins=(SkinRef(hero_id=142, skin_name="Missing"),)
        ),
    )

    assert not result.success


def test_bidirectional_add_writes_inverse() -> None:
    store = make_store(make_hero(142, "Angela"), make_hero(105, "Lian Po", icon="lp.png"))

    result = apply_payload(
        store,
        EditRelationshipPayload(
            hero_name="angela",
            target_name="lian po",
            relation=RelationshipKind.STRONG_AGAINST,
            note="Burst",
            bidirectional=True,
        ),
    )

    assert result.store is not None
    angela = result.store.heroes["Angela"]
    lian_po = result.store.heroes["Lian Po"]
    assert angela.strong_against == {
        "Lian Po": RelationshipEntry(name="Lian Po", icon="lp.png", note="Burst")
    }
    assert list(lian_po.weak_against) == ["Angela"]
    assert result.updated == 2


def test_bidirectional_remove_clears_both_sides() -> None:
    angela = make_hero(
        142, "Angela", best_partner={"Lian Po": RelationshipEntry(name="Lian Po")}
    )
    lian_po = make_hero(105, "Lian Po", best_partner={"ANGELA": RelationshipEntry(name="Angela")})

    result = apply_payload(
        make_store(angela, lian_po),
        EditRelationshipPayload(
            hero_name="Angela",
            target_name="Lian Po",
            relation=RelationshipKind.BEST_PARTNER,
            action=RelationshipAction.REMOVE,
            bidirectional=True,
        ),
    )

    assert result.store is not None
    assert result.store.heroes["Angela"].best_partner == {}
    assert result.store.heroes["Lian Po"].best_partner == {}


def test_bidirectional_with_missing_target_skips_inverse() -> None:
    result = apply_payload(
        make_store(make_hero()),
        EditRelationshipPayload(
            hero_name="Angela",
            target_name="Ghost",
            relation=RelationshipKind.WEAK_AGAINST,
            bidirectional=True,
        ),
    )

    assert result.success
    assert result.notes == ("inverse skipped: Ghost not found",)
    assert result.store is not None
    assert list(result.store.heroes["Angela"].weak_against) == ["Ghost"]


def test_remove_absent_relationship_fails() -> None:
    result = apply_payload(
        make_store(make_hero(), make_hero(105, "Lian Po")),
        EditRelationshipPayload(
            hero_name="Angela",
            target_name="Lian Po",
            relation=RelationshipKind.STRONG_AGAINST,
            action=RelationshipAction.REMOVE,
        ),
    )

    assert not result.success


def test_relationship_with_self_fails() -> None:
    result = apply_payload(
        make_store(make_hero()),
        EditRelationshipPayload(
            hero_name="Angela", target_name="angela", relation=RelationshipKind.BEST_PARTNER
        ),
    )

    assert not result.success


def test_edit_skin_by_hero_name() -> None:
    store = make_store(make_hero(skins=[make_skin("Swan Princess", cover="old")]))

    result = apply_payload(
        store,
        EditSkinPayload(
            skin_name="SWAN PRINCESS", hero_name="angela", changes=SkinFields(link="https://l")
        ),
    )

    assert result.store is not None
    skin = result.store.heroes["Angela"].skins[0]
    assert skin.link == "https://l"
    assert skin.cover == "old"


def test_edit_skin_fails_for_missing_skin() -> None:
    result = apply_payload(
        make_store(make_hero()),
        EditSkinPayload(skin_name="Nope", hero_id=142, changes=SkinFields(cover="x")),
    )

    assert not result.success
    assert result.reason == "Skin Nope not found on Angela"
