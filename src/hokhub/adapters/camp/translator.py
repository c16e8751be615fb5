"""Translate camp-site hero details into partial hero records."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import (
    NOT_AVAILABLE,
    Ability,
    Attributes,
    Item,
    RelationshipEntry,
    SourceTag,
    Statistics,
)
from hokhub.domain.reconciliation import (
    Analytics,
    NormalizedSource,
    PartialHero,
    clean_text,
    format_percentage,
)

from .schema import (
    CampEquipmentPayload,
    CampHeroPayload,
    CampRelationPayload,
    CampStatsPayload,
)

if TYPE_CHECKING:
    from hokhub.domain.ports import RawSourceDocument

log = getLogger(__name__)


def _records(document: RawSourceDocument) -> list[object]:
    content = document.content
    if isinstance(content, Mapping):
        content = cast(Mapping[str, object], content).get("heroes")
    if not isinstance(content, list):
        raise SourceFormatError(f"Camp snapshot {document.origin} is not a list of heroes")
    return cast(list[object], content)


def normalize_camp_document(document: RawSourceDocument) -> NormalizedSource:
    """Camp site: analytics plus name, role, lane and title.

    Individual malformed records are skipped with a warning; only a document
    that is not a hero list is rejected outright.
    """

    by_id: dict[int, PartialHero] = {}
    unkeyed: list[PartialHero] = []
    dropped = 0
    for index, record in enumerate(_records(document)):
        try:
            hero = CampHeroPayload.model_validate(record)
        except ValidationError as exc:
            log.warning("Skipping malformed camp record #%s: %s", index, exc.error_count())
            dropped += 1
            continue
        if hero.hero_name is None:
            log.warning("Dropping camp record #%s (id=%s): no display name", index, hero.hero_id)
            dropped += 1
            continue

        partial = _to_partial(hero, hero.hero_name)
        if hero.hero_id is None:
            unkeyed.append(partial)
        elif hero.hero_id in by_id:
            log.warning(
                "Duplicate camp hero id %s (%s), keeping the first", hero.hero_id, hero.hero_name
            )
            dropped += 1
        else:
            by_id[hero.hero_id] = partial

    return NormalizedSource(
        source=SourceTag.CAMP, by_id=by_id, unkeyed=tuple(unkeyed), dropped=dropped
    )


def _to_partial(hero: CampHeroPayload, name: str) -> PartialHero:
    world = hero.world
    return PartialHero(
        source=SourceTag.CAMP,
        hero_id=hero.hero_id,
        name=name,
        title=hero.title,
        role=hero.role,
        lane=hero.lane,
        icon=hero.icon,
        analytics=_analytics(hero),
        region=world.region if world else None,
        identity=world.identity if world else None,
        energy=world.energy if world else None,
    )


def _analytics(hero: CampHeroPayload) -> Analytics:
    relationships = hero.relationships
    equipment = hero.equipment or CampEquipmentPayload()
    return Analytics(
        abilities=tuple(
            Ability(
                name=skill.name,
                cooldown=skill.cooldown,
                cost=skill.cost,
                description=skill.description,
                icon=skill.icon,
            )
            for skill in hero.skills
            if skill.name is not None
        ),
        recommended_items=tuple(
            Item(
                name=equip.name,
                item_id=equip.item_id,
                icon=equip.icon,
                description=equip.description,
                price=equip.price,
                is_core=equip.is_core,
            )
            for equip in equipment.equip_list
            if equip.name is not None
        ),
        recommended_augments=tuple(
            Item(
                name=arcana.name,
                item_id=arcana.item_id,
                icon=arcana.icon,
                description=arcana.description,
            )
            for arcana in equipment.inscription_data
            if arcana.name is not None
        ),
        strong_against=_relations(relationships.strong_against if relationships else []),
        weak_against=_relations(relationships.weak_against if relationships else []),
        best_partner=_relations(relationships.best_partner if relationships else []),
        statistics=_statistics(hero.stats),
        attributes=Attributes(
            survival=format_percentage(hero.survival),
            attack=format_percentage(hero.attack),
            ability=format_percentage(hero.ability),
            difficulty=format_percentage(hero.difficulty),
        ),
        build_title=hero.build_title or equipment.build_title or equipment.inscription_tips,
    )


def _relations(payloads: list[CampRelationPayload]) -> dict[str, RelationshipEntry]:
    entries: dict[str, RelationshipEntry] = {}
    for payload in payloads:
        if payload.name is None or payload.name in entries:
            continue
        entries[payload.name] = RelationshipEntry(
            name=payload.name, icon=payload.icon, note=payload.note
        )
    return entries


def _rate(value: object) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_percentage(value)
    return clean_text(value) or NOT_AVAILABLE


def _statistics(stats: CampStatsPayload | None) -> Statistics:
    if stats is None:
        return Statistics()
    return Statistics(
        win_rate=_rate(stats.win_rate),
        pick_rate=_rate(stats.pick_rate),
        ban_rate=_rate(stats.ban_rate),
        tier=stats.tier or NOT_AVAILABLE,
    )
