from __future__ import annotations

import pytest

from hokhub.domain.model import (
    NOT_AVAILABLE,
    ZERO_PERCENT,
    RelationshipEntry,
    SkinTier,
    SourceTag,
    Statistics,
)
from hokhub.domain.reconciliation import Analytics, PartialHero, resolve_entity
from tests.helpers.heroes import make_skin


def test_scalars_follow_declared_source_order() -> None:
    world = PartialHero(
        source=SourceTag.WORLD,
        name="Angela",
        hero_id=142,
        title="Magic Girl",
        role="Mage (world)",
        icon="https://world/icon.png",
    )
    camp = PartialHero(
        source=SourceTag.CAMP,
        name="Angela",
        hero_id=142,
        title="Camp Title",
        role="Mage",
        lane="Mid Lane",
        icon="https://camp/icon.png",
    )

    hero = resolve_entity(142, [world, camp])

    assert hero.title == "Magic Girl"
    assert hero.role == "Mage"
    assert hero.lane == "Mid Lane"
    assert hero.icon == "https://world/icon.png"
    assert hero.sources == frozenset({SourceTag.WORLD, SourceTag.CAMP})


def test_empty_values_fall_through_to_next_source() -> None:
    world = PartialHero(source=SourceTag.WORLD, name="Angela", hero_id=142, title="  ")
    camp = PartialHero(source=SourceTag.CAMP, name="Angela", hero_id=142, title="Camp Title")

    assert resolve_entity(142, [world, camp]).title == "Camp Title"


def test_skins_come_wholesale_from_most_complete_source() -> None:
    world = PartialHero(
        source=SourceTag.WORLD,
        name="Angela",
        hero_id=142,
        skins=(make_skin("Swan Princess", cover="https://world/swan.png"),),
    )
    backup = PartialHero(
        source=SourceTag.SKIN_BACKUP,
        name="Angela",
        hero_id=142,
        skins=(
            make_skin("Swan Princess", series="FUTURE ERA"),
            make_skin("Campus Cutie"),
        ),
    )

    hero = resolve_entity(142, [world, backup])

    assert [skin.name for skin in hero.skins] == ["Swan Princess", "Campus Cutie"]
    # no field-level blending with the world gallery
    assert hero.skins[0].cover is None
    assert hero.skins[0].tier is SkinTier.FLAWLESS
    assert hero.skins[1].tier is SkinTier.RARE


def test_skin_tie_goes_to_higher_priority_source() -> None:
    world = PartialHero(
        source=SourceTag.WORLD,
        name="Angela",
        hero_id=142,
        skins=(make_skin("Swan Princess", cover="https://world/swan.png"),),
    )
    backup = PartialHero(
        source=SourceTag.SKIN_BACKUP,
        name="Angela",
        hero_id=142,
        skins=(make_skin("Swan Princess", cover="https://backup/swan.png"),),
    )

    hero = resolve_entity(142, [backup, world])

    assert hero.skins[0].cover == "https://world/swan.png"


def test_explicit_skin_tier_is_kept() -> None:
    world = PartialHero(
        source=SourceTag.WORLD,
        name="Angela",
        hero_id=142,
        skins=(make_skin("Swan Princess", tier=SkinTier.EPIC),),
    )

    assert resolve_entity(142, [world]).skins[0].tier is SkinTier.EPIC


def test_analytics_taken_from_camp_only() -> None:
    analytics = Analytics(
        strong_against={"Lian Po": RelationshipEntry(name="Lian Po")},
        statistics=Statistics(win_rate="52%"),
        build_title="Burst Mage",
    )
    camp = PartialHero(source=SourceTag.CAMP, name="Angela", hero_id=142, analytics=analytics)

    hero = resolve_entity(142, [camp])

    assert hero.statistics.win_rate == "52%"
    assert list(hero.strong_against) == ["Lian Po"]
    assert hero.build_title == "Burst Mage"


def test_missing_analytics_uses_sentinels() -> None:
    world = PartialHero(source=SourceTag.WORLD, name="Angela", hero_id=142)

    hero = resolve_entity(142, [world])

    assert hero.statistics.win_rate == NOT_AVAILABLE
    assert hero.attributes.difficulty == ZERO_PERCENT
    assert hero.abilities == []
    assert hero.strong_against == {}


def test_extras_highest_priority_writes_last() -> None:
    world = PartialHero(
        source=SourceTag.WORLD, name="Angela", hero_id=142, extras={"localName": "world"}
    )
    backup = PartialHero(
        source=SourceTag.SKIN_BACKUP,
        name="Angela",
        hero_id=142,
        extras={"localName": "backup", "aka": "Angie"},
    )

    hero = resolve_entity(142, [world, backup])

    assert hero.extras == {"aka": "Angie", "localName": "world"}


def test_resolve_requires_partials() -> None:
    with pytest.raises(ValueError, match="142"):
        resolve_entity(142, [])
