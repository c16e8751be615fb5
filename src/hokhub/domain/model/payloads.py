"""Typed contribution payloads, one variant per contribution type."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Literal

from .enums import ContributionType, RelationshipAction, RelationshipKind
from .hero import Hero, Skin

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .enums import CollabTag, SkinTier, SpecialTag

MERGEABLE_HERO_FIELDS: frozenset[str] = frozenset(
    item.name for item in fields(Hero) if item.name not in {"hero_id", "name", "sources"}
)


@dataclass(slots=True, kw_only=True, frozen=True)
class SkinFields:
    """Optional skin attributes; ``None`` means "not provided"."""

    cover: str | None = None
    image: str | None = None
    image_alt: str | None = None
    link: str | None = None
    series: str | None = None
    tier: SkinTier | None = None
    tags: frozenset[SpecialTag] | None = None
    collab: CollabTag | None = None

    def provided(self) -> dict[str, object]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def apply(self, skin: Skin) -> None:
        for name, value in self.provided().items():
            setattr(skin, name, value)

    def create(self, name: str) -> Skin:
        skin = Skin(name=name)
        self.apply(skin)
        return skin


@dataclass(slots=True, kw_only=True, frozen=True)
class SkinRef:
    hero_id: int
    skin_name: str


@dataclass(slots=True, kw_only=True, frozen=True)
class AddSkinPayload:
    hero_id: int
    skin_name: str
    skin: SkinFields = field(default_factory=SkinFields)
    kind: Literal[ContributionType.ADD_SKIN] = ContributionType.ADD_SKIN


@dataclass(slots=True, kw_only=True, frozen=True)
class AddEntityPayload:
    """New hero, or a shallow overwrite of an existing hero's top-level fields."""

    name: str
    hero_id: int | None = None
    values: Mapping[str, object] = field(default_factory=dict[str, object])
    kind: Literal[ContributionType.ADD_ENTITY] = ContributionType.ADD_ENTITY

    def __post_init__(self) -> None:
        unknown = set(self.values) - MERGEABLE_HERO_FIELDS
        if unknown:
            raise ValueError(f"unknown hero fields: {', '.join(sorted(unknown))}")


@dataclass(slots=True, kw_only=True, frozen=True)
class RelabelSeriesPayload:
    series_name: str
    skins: tuple[SkinRef, ...]
    kind: Literal[ContributionType.RELABEL_SERIES] = ContributionType.RELABEL_SERIES

    def __post_init__(self) -> None:
        if not self.skins:
            raise ValueError("series relabel requires at least one skin")


@dataclass(slots=True, kw_only=True, frozen=True)
class EditRelationshipPayload:
    hero_name: str
    target_name: str
    relation: RelationshipKind
    action: RelationshipAction = RelationshipAction.ADD
    note: str | None = None
    icon: str | None = None
    bidirectional: bool = False
    kind: Literal[ContributionType.EDIT_RELATIONSHIP] = ContributionType.EDIT_RELATIONSHIP


@dataclass(slots=True, kw_only=True, frozen=True)
class EditSkinPayload:
    skin_name: str
    hero_id: int | None = None
    hero_name: str | None = None
    changes: SkinFields = field(default_factory=SkinFields)
    kind: Literal[ContributionType.EDIT_SKIN] = ContributionType.EDIT_SKIN

    def __post_init__(self) -> None:
        if self.hero_id is None and not self.hero_name:
            raise ValueError("skin edit requires hero_id or hero_name")
        if not self.changes.provided():
            raise ValueError("skin edit carries no changes")


type ContributionPayload = (
    AddSkinPayload
    | AddEntityPayload
    | RelabelSeriesPayload
    | EditRelationshipPayload
    | EditSkinPayload
)
