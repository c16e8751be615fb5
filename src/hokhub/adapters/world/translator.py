"""Translate the world-site snapshot into partial hero records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import Skin, SourceTag
from hokhub.domain.reconciliation import NormalizedSource, PartialHero

from .schema import WorldDocument, WorldHeroPayload, WorldSkinPayload

if TYPE_CHECKING:
    from hokhub.domain.ports import RawSourceDocument

log = getLogger(__name__)


def normalize_world_document(document: RawSourceDocument) -> NormalizedSource:
    """World site: identity, media, region and the skin gallery."""

    try:
        payload = WorldDocument.model_validate(document.content)
    except ValidationError as exc:
        raise SourceFormatError(f"Invalid world snapshot {document.origin}: {exc}") from exc

    by_id: dict[int, PartialHero] = {}
    unkeyed: list[PartialHero] = []
    dropped = 0
    for key, hero in payload.heroes.items():
        hero_id = hero.id if hero.id is not None else (int(key) if key.isdigit() else None)
        name = hero.display_name
        if name is None:
            log.warning("Dropping world hero %s: no display name", key)
            dropped += 1
            continue
        partial = _to_partial(hero, hero_id=hero_id, name=name)
        if hero_id is None:
            unkeyed.append(partial)
        elif hero_id in by_id:
            log.warning("Duplicate world hero id %s (%s), keeping the first", hero_id, name)
            dropped += 1
        else:
            by_id[hero_id] = partial

    return NormalizedSource(
        source=SourceTag.WORLD, by_id=by_id, unkeyed=tuple(unkeyed), dropped=dropped
    )


def _to_partial(hero: WorldHeroPayload, *, hero_id: int | None, name: str) -> PartialHero:
    extras: dict[str, object] = {}
    if hero.name_en and hero.name and hero.name != hero.name_en:
        extras["localName"] = hero.name
    return PartialHero(
        source=SourceTag.WORLD,
        hero_id=hero_id,
        name=name,
        title=hero.title,
        role=hero.role,
        icon=hero.icon,
        banner=hero.banner,
        thumbnail=hero.thumbnail,
        skins=_skins(hero.skins, hero_name=name),
        region=hero.region,
        extras=extras,
    )


def _skins(payloads: list[WorldSkinPayload], *, hero_name: str) -> tuple[Skin, ...]:
    skins: list[Skin] = []
    seen: set[str] = set()
    for payload in payloads:
        if payload.name is None:
            log.debug("Skipping unnamed world skin for %s", hero_name)
            continue
        skin = Skin(
            name=payload.name,
            cover=payload.cover,
            image=payload.image1,
            image_alt=payload.image2,
            link=payload.link,
            series=payload.series,
        )
        if skin.key in seen:
            continue
        seen.add(skin.key)
        skins.append(skin)
    return tuple(skins)
