"""Pydantic models for the persisted merged store document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hokhub.domain.model import (
    NOT_AVAILABLE,
    ZERO_PERCENT,
    CollabTag,
    SkinTier,
    SourceTag,
    SpecialTag,
    name_key,
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _required_text(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class DocumentBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SkinFieldsDocument(DocumentBaseModel):
    skin_cover: str | None = Field(default=None, alias="skinCover")
    skin_image: str | None = Field(default=None, alias="skinImage")
    skin_image2: str | None = Field(default=None, alias="skinImage2")
    skin_link: str | None = Field(default=None, alias="skinLink")
    skin_series: str | None = Field(default=None, alias="skinSeries")
    tier: SkinTier | None = None
    tags: list[SpecialTag] | None = None
    collab: CollabTag | None = None

    _normalize = field_validator(
        "skin_cover", "skin_image", "skin_image2", "skin_link", "skin_series", mode="before"
    )(_blank_to_none)


class SkinDocument(SkinFieldsDocument):
    skin_name: str = Field(alias="skinName", min_length=1)

    _strip_name = field_validator("skin_name", mode="before")(_required_text)


class AbilityDocument(DocumentBaseModel):
    name: str = Field(min_length=1)
    cooldown: str | None = None
    cost: str | None = None
    description: str | None = None
    icon: str | None = None


class ItemDocument(DocumentBaseModel):
    item_id: int | None = Field(default=None, alias="id")
    name: str = Field(min_length=1)
    icon: str | None = None
    description: str | None = None
    price: int | None = None
    is_core: bool = Field(default=False, alias="isCore")


class RelationshipDocument(DocumentBaseModel):
    name: str = Field(min_length=1)
    icon: str | None = None
    note: str | None = None


class StatisticsDocument(DocumentBaseModel):
    win_rate: str = Field(default=NOT_AVAILABLE, alias="winRate")
    pick_rate: str = Field(default=NOT_AVAILABLE, alias="pickRate")
    ban_rate: str = Field(default=NOT_AVAILABLE, alias="banRate")
    tier: str = NOT_AVAILABLE


class AttributesDocument(DocumentBaseModel):
    survival: str = ZERO_PERCENT
    attack: str = ZERO_PERCENT
    ability: str = ZERO_PERCENT
    difficulty: str = ZERO_PERCENT


class LoreDocument(DocumentBaseModel):
    region: str = ""
    identity: str = ""
    energy: str = ""


class HeroFieldsDocument(DocumentBaseModel):
    """Every mergeable hero field, all optional; see ``model_fields_set``."""

    title: str | None = None
    role: str | None = None
    lane: str | None = None
    icon: str | None = None
    banner: str | None = None
    thumbnail: str | None = None
    skins: list[SkinDocument] | None = None
    abilities: list[AbilityDocument] | None = None
    recommended_items: list[ItemDocument] | None = Field(default=None, alias="recommendedItems")
    recommended_augments: list[ItemDocument] | None = Field(
        default=None, alias="recommendedAugments"
    )
    build_title: str | None = Field(default=None, alias="buildTitle")
    strong_against: dict[str, RelationshipDocument] | None = Field(
        default=None, alias="strongAgainst"
    )
    weak_against: dict[str, RelationshipDocument] | None = Field(
        default=None, alias="weakAgainst"
    )
    best_partner: dict[str, RelationshipDocument] | None = Field(
        default=None, alias="bestPartner"
    )
    statistics: StatisticsDocument | None = None
    attributes: AttributesDocument | None = None
    world_lore: LoreDocument | None = Field(default=None, alias="world")

    @field_validator("skins")
    @classmethod
    def _unique_skin_names(cls, skins: list[SkinDocument] | None) -> list[SkinDocument] | None:
        seen: set[str] = set()
        for skin in skins or ():
            key = name_key(skin.skin_name)
            if key in seen:
                raise ValueError(f"duplicate skin name {skin.skin_name!r}")
            seen.add(key)
        return skins


class HeroDocument(HeroFieldsDocument):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    hero_id: int = Field(alias="heroId")
    name: str = Field(min_length=1)
    sources: list[SourceTag] = Field(default_factory=list[SourceTag])

    _strip_name = field_validator("name", mode="before")(_required_text)


class MergedStoreDocument(DocumentBaseModel):
    main: dict[str, HeroDocument] = Field(default_factory=dict[str, HeroDocument])
