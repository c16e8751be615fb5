"""Group the flat skin backup into per-hero partial records."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import Skin, SourceTag, name_key
from hokhub.domain.reconciliation import NormalizedSource, PartialHero

from .schema import BackupSkinPayload

if TYPE_CHECKING:
    from hokhub.domain.ports import RawSourceDocument

log = getLogger(__name__)


def _rows(document: RawSourceDocument) -> list[object]:
    content = document.content
    if isinstance(content, Mapping):
        content = cast(Mapping[str, object], content).get("skins")
    if not isinstance(content, list):
        raise SourceFormatError(f"Skin backup {document.origin} is not a list of skins")
    return cast(list[object], content)


class _HeroSkins:
    __slots__ = ("hero_id", "name", "seen", "skins")

    def __init__(self, hero_id: int | None, name: str) -> None:
        self.hero_id = hero_id
        self.name = name
        self.skins: list[Skin] = []
        self.seen: set[str] = set()

    def add(self, skin: Skin) -> None:
        if skin.key in self.seen:
            return
        self.seen.add(skin.key)
        self.skins.append(skin)

    def to_partial(self) -> PartialHero:
        return PartialHero(
            source=SourceTag.SKIN_BACKUP,
            hero_id=self.hero_id,
            name=self.name,
            skins=tuple(self.skins),
        )


def normalize_skin_backup_document(document: RawSourceDocument) -> NormalizedSource:
    """Skin backup: skins only, keyed by hero id where the row carries one."""

    keyed: dict[int, _HeroSkins] = {}
    named: dict[str, _HeroSkins] = {}
    dropped = 0
    for index, row in enumerate(_rows(document)):
        try:
            payload = BackupSkinPayload.model_validate(row)
        except ValidationError as exc:
            log.warning("Skipping malformed skin backup row #%s: %s", index, exc.error_count())
            dropped += 1
            continue
        hero = payload.hero
        if payload.skin_name is None or hero is None or hero.hero_name is None:
            log.warning("Dropping skin backup row #%s: missing skin or hero name", index)
            dropped += 1
            continue

        if hero.hero_id is not None:
            group = keyed.setdefault(hero.hero_id, _HeroSkins(hero.hero_id, hero.hero_name))
        else:
            group = named.setdefault(name_key(hero.hero_name), _HeroSkins(None, hero.hero_name))
        group.add(
            Skin(
                name=payload.skin_name,
                cover=payload.skin_cover,
                image=payload.skin_image,
                series=payload.skin_series,
            )
        )

    return NormalizedSource(
        source=SourceTag.SKIN_BACKUP,
        by_id={hero_id: keyed[hero_id].to_partial() for hero_id in sorted(keyed)},
        unkeyed=tuple(group.to_partial() for group in named.values()),
        dropped=dropped,
    )
