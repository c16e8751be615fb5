"""Convert between domain heroes and their JSON documents.

Documents have a fixed key order so that serializing the same store twice
yields identical bytes.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from hokhub.domain.model import (
    Ability,
    Attributes,
    Hero,
    Item,
    MergedStore,
    RelationshipEntry,
    Skin,
    SkinFields,
    Statistics,
    WorldLore,
)

from .schema import HeroDocument, MergedStoreDocument

if TYPE_CHECKING:
    from .schema import (
        HeroFieldsDocument,
        ItemDocument,
        RelationshipDocument,
        SkinDocument,
        SkinFieldsDocument,
    )


def dumps(document: object) -> str:
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


# Domain -> document -----------------------------------------------------------


def skin_fields_to_document(fields: SkinFields) -> dict[str, object]:
    document: dict[str, object] = {
        "skinCover": fields.cover,
        "skinImage": fields.image,
        "skinImage2": fields.image_alt,
        "skinLink": fields.link,
        "skinSeries": fields.series,
        "tier": fields.tier.value if fields.tier else None,
        "tags": sorted(tag.value for tag in fields.tags) if fields.tags else None,
        "collab": fields.collab.value if fields.collab else None,
    }
    return {key: value for key, value in document.items() if value is not None}


def skin_to_document(skin: Skin) -> dict[str, object]:
    """Skin document with unset optional fields left out."""

    fields = SkinFields(
        cover=skin.cover,
        image=skin.image,
        image_alt=skin.image_alt,
        link=skin.link,
        series=skin.series,
        tier=skin.tier,
        tags=skin.tags or None,
        collab=skin.collab,
    )
    return {"skinName": skin.name, **skin_fields_to_document(fields)}


def _item_to_document(item: Item) -> dict[str, object]:
    return {
        "id": item.item_id,
        "name": item.name,
        "icon": item.icon,
        "description": item.description,
        "price": item.price,
        "isCore": item.is_core,
    }


def _relationships_to_document(
    entries: dict[str, RelationshipEntry],
) -> dict[str, dict[str, object]]:
    return {
        key: {"name": entry.name, "icon": entry.icon, "note": entry.note}
        for key, entry in entries.items()
    }


def hero_to_document(hero: Hero) -> dict[str, object]:
    document: dict[str, object] = {
        "heroId": hero.hero_id,
        "name": hero.name,
        "title": hero.title,
        "role": hero.role,
        "lane": hero.lane,
        "icon": hero.icon,
        "banner": hero.banner,
        "thumbnail": hero.thumbnail,
        "skins": [skin_to_document(skin) for skin in hero.skins],
        "abilities": [
            {
                "name": ability.name,
                "cooldown": ability.cooldown,
                "cost": ability.cost,
                "description": ability.description,
                "icon": ability.icon,
            }
            for ability in hero.abilities
        ],
        "recommendedItems": [_item_to_document(item) for item in hero.recommended_items],
        "recommendedAugments": [_item_to_document(item) for item in hero.recommended_augments],
        "buildTitle": hero.build_title,
        "strongAgainst": _relationships_to_document(hero.strong_against),
        "weakAgainst": _relationships_to_document(hero.weak_against),
        "bestPartner": _relationships_to_document(hero.best_partner),
        "statistics": {
            "winRate": hero.statistics.win_rate,
            "pickRate": hero.statistics.pick_rate,
            "banRate": hero.statistics.ban_rate,
            "tier": hero.statistics.tier,
        },
        "attributes": {
            "survival": hero.attributes.survival,
            "attack": hero.attributes.attack,
            "ability": hero.attributes.ability,
            "difficulty": hero.attributes.difficulty,
        },
        "world": {
            "region": hero.world_lore.region,
            "identity": hero.world_lore.identity,
            "energy": hero.world_lore.energy,
        },
        "sources": sorted(source.value for source in hero.sources),
    }
    for key in sorted(hero.extras):
        document.setdefault(key, hero.extras[key])
    return document


def store_to_document(store: MergedStore) -> dict[str, object]:
    return {"main": {name: hero_to_document(hero) for name, hero in store.heroes.items()}}


# Document -> domain -----------------------------------------------------------


def skin_fields_from_document(document: SkinFieldsDocument) -> SkinFields:
    return SkinFields(
        cover=document.skin_cover,
        image=document.skin_image,
        image_alt=document.skin_image2,
        link=document.skin_link,
        series=document.skin_series,
        tier=document.tier,
        tags=frozenset(document.tags) if document.tags is not None else None,
        collab=document.collab,
    )


def skin_from_document(document: SkinDocument) -> Skin:
    return skin_fields_from_document(document).create(document.skin_name)


def _item_from_document(document: ItemDocument) -> Item:
    return Item(
        name=document.name,
        item_id=document.item_id,
        icon=document.icon,
        description=document.description,
        price=document.price,
        is_core=document.is_core,
    )


def _relationships_from_document(
    entries: dict[str, RelationshipDocument],
) -> dict[str, RelationshipEntry]:
    return {
        key: RelationshipEntry(name=entry.name, icon=entry.icon, note=entry.note)
        for key, entry in entries.items()
    }


def hero_values_from_document(document: HeroFieldsDocument) -> dict[str, object]:
    """Domain attribute values for the fields actually present in ``document``."""

    values: dict[str, object] = {}
    provided = document.model_fields_set
    for name in ("title", "role", "lane", "icon", "banner", "thumbnail", "build_title"):
        if name in provided:
            values[name] = getattr(document, name)
    if "skins" in provided:
        values["skins"] = [skin_from_document(skin) for skin in document.skins or []]
    if "abilities" in provided:
        values["abilities"] = [
            Ability(
                name=ability.name,
                cooldown=ability.cooldown,
                cost=ability.cost,
                description=ability.description,
                icon=ability.icon,
            )
            for ability in document.abilities or []
        ]
    if "recommended_items" in provided:
        values["recommended_items"] = [
            _item_from_document(item) for item in document.recommended_items or []
        ]
    if "recommended_augments" in provided:
        values["recommended_augments"] = [
            _item_from_document(item) for item in document.recommended_augments or []
        ]
    for name in ("strong_against", "weak_against", "best_partner"):
        if name in provided:
            values[name] = _relationships_from_document(getattr(document, name) or {})
    if "statistics" in provided:
        stats = document.statistics
        values["statistics"] = (
            Statistics(
                win_rate=stats.win_rate,
                pick_rate=stats.pick_rate,
                ban_rate=stats.ban_rate,
                tier=stats.tier,
            )
            if stats is not None
            else Statistics()
        )
    if "attributes" in provided:
        attributes = document.attributes
        values["attributes"] = (
            Attributes(
                survival=attributes.survival,
                attack=attributes.attack,
                ability=attributes.ability,
                difficulty=attributes.difficulty,
            )
            if attributes is not None
            else Attributes()
        )
    if "world_lore" in provided:
        lore = document.world_lore
        values["world_lore"] = (
            WorldLore(region=lore.region, identity=lore.identity, energy=lore.energy)
            if lore is not None
            else WorldLore()
        )
    return values


def hero_from_document(document: HeroDocument) -> Hero:
    hero = Hero(
        hero_id=document.hero_id,
        name=document.name,
        sources=frozenset(document.sources),
        extras=dict(document.model_extra or {}),
    )
    for name, value in hero_values_from_document(document).items():
        setattr(hero, name, value)
    return hero


def store_from_document(content: object) -> MergedStore:
    """Validate a parsed ``{"main": {...}}`` document into a store.

    Raises ``pydantic.ValidationError`` for malformed heroes and ``ValueError``
    for duplicate ids or names.
    """

    document = MergedStoreDocument.model_validate(content)
    store = MergedStore()
    for key, hero_document in document.main.items():
        hero = hero_from_document(hero_document)
        if key != hero.name:
            raise ValueError(f"store key {key!r} does not match hero name {hero.name!r}")
        store.add(hero)
    return store
