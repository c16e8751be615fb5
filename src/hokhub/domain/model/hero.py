"""Hero aggregate: identity, media, skins and analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .enums import RelationshipKind

if TYPE_CHECKING:
    from .enums import CollabTag, SkinTier, SourceTag, SpecialTag

NOT_AVAILABLE: Final[str] = "N/A"
ZERO_PERCENT: Final[str] = "0%"


def name_key(name: str) -> str:
    """Case-insensitive comparison key for hero and skin names."""

    return name.strip().casefold()


@dataclass(slots=True, kw_only=True)
class Skin:
    name: str
    cover: str | None = None
    image: str | None = None
    image_alt: str | None = None
    link: str | None = None
    series: str | None = None
    tier: SkinTier | None = None
    tags: frozenset[SpecialTag] = frozenset()
    collab: CollabTag | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("skin name must not be blank")

    @property
    def key(self) -> str:
        return name_key(self.name)


@dataclass(slots=True, kw_only=True, frozen=True)
class Ability:
    name: str
    cooldown: str | None = None
    cost: str | None = None
    description: str | None = None
    icon: str | None = None


@dataclass(slots=True, kw_only=True, frozen=True)
class Item:
    """Recommended equipment or arcana entry."""

    name: str
    item_id: int | None = None
    icon: str | None = None
    description: str | None = None
    price: int | None = None
    is_core: bool = False


@dataclass(slots=True, kw_only=True, frozen=True)
class RelationshipEntry:
    name: str
    icon: str | None = None
    note: str | None = None


@dataclass(slots=True, kw_only=True, frozen=True)
class Statistics:
    win_rate: str = NOT_AVAILABLE
    pick_rate: str = NOT_AVAILABLE
    ban_rate: str = NOT_AVAILABLE
    tier: str = NOT_AVAILABLE


@dataclass(slots=True, kw_only=True, frozen=True)
class Attributes:
    survival: str = ZERO_PERCENT
    attack: str = ZERO_PERCENT
    ability: str = ZERO_PERCENT
    difficulty: str = ZERO_PERCENT


@dataclass(slots=True, kw_only=True, frozen=True)
class WorldLore:
    region: str = ""
    identity: str = ""
    energy: str = ""


@dataclass(slots=True, kw_only=True)
class Hero:
    hero_id: int
    name: str
    title: str | None = None
    role: str | None = None
    lane: str | None = None
    icon: str | None = None
    banner: str | None = None
    thumbnail: str | None = None
    skins: list[Skin] = field(default_factory=list["Skin"])
    abilities: list[Ability] = field(default_factory=list["Ability"])
    recommended_items: list[Item] = field(default_factory=list["Item"])
    recommended_augments: list[Item] = field(default_factory=list["Item"])
    build_title: str | None = None
    strong_against: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, "RelationshipEntry"]
    )
    weak_against: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, "RelationshipEntry"]
    )
    best_partner: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, "RelationshipEntry"]
    )
    statistics: Statistics = field(default_factory=Statistics)
    attributes: Attributes = field(default_factory=Attributes)
    world_lore: WorldLore = field(default_factory=WorldLore)
    sources: frozenset[SourceTag] = frozenset()
    extras: dict[str, object] = field(default_factory=dict[str, object])

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("hero display name must not be blank")

    @property
    def key(self) -> str:
        return name_key(self.name)

    def relationships(self, kind: RelationshipKind) -> dict[str, RelationshipEntry]:
        if kind is RelationshipKind.STRONG_AGAINST:
            return self.strong_against
        if kind is RelationshipKind.WEAK_AGAINST:
            return self.weak_against
        return self.best_partner

    def find_skin(self, skin_name: str) -> Skin | None:
        wanted = name_key(skin_name)
        for skin in self.skins:
            if skin.key == wanted:
                return skin
        return None

    def find_relationship(self, kind: RelationshipKind, hero_name: str) -> str | None:
        """Return the stored key of the entry for ``hero_name`` (case-insensitive)."""

        wanted = name_key(hero_name)
        for key in self.relationships(kind):
            if name_key(key) == wanted:
                return key
        return None
