"""Pydantic models describing the camp-site hero detail snapshot.

Field names drifted between scraper versions, so most fields accept several
aliases.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _number_to_text(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return _blank_to_none(value)


class CampBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CampSkillPayload(CampBaseModel):
    name: str | None = Field(default=None, validation_alias=AliasChoices("skillName", "name"))
    cooldown: str | None = Field(default=None, validation_alias=AliasChoices("cd", "cooldown"))
    cost: str | None = Field(default=None, validation_alias=AliasChoices("consume", "cost"))
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("description", "skillDesc")
    )
    icon: str | None = Field(
        default=None, validation_alias=AliasChoices("iconUrl", "skillIcon", "skillImg")
    )

    _normalize = field_validator("name", "cooldown", "cost", "description", "icon", mode="before")(
        _number_to_text
    )


class CampRelationPayload(CampBaseModel):
    name: str | None = Field(default=None, validation_alias=AliasChoices("heroName", "name"))
    icon: str | None = Field(default=None, validation_alias=AliasChoices("icon", "heroIcon"))
    note: str | None = Field(default=None, validation_alias=AliasChoices("tips", "description"))

    _normalize = field_validator("name", "icon", "note", mode="before")(_blank_to_none)


class CampRelationships(CampBaseModel):
    best_partner: list[CampRelationPayload] = Field(
        default_factory=list[CampRelationPayload],
        validation_alias=AliasChoices("bestPartner", "bestPartners"),
    )
    strong_against: list[CampRelationPayload] = Field(
        default_factory=list[CampRelationPayload],
        validation_alias=AliasChoices("winOddsHero", "strongAgainst", "suppressingHeroes"),
    )
    weak_against: list[CampRelationPayload] = Field(
        default_factory=list[CampRelationPayload],
        validation_alias=AliasChoices("weakOddsHero", "weakAgainst", "suppressedHeroes"),
    )


class CampInscriptionPayload(CampBaseModel):
    item_id: int | None = Field(default=None, validation_alias=AliasChoices("inscriptionId", "id"))
    name: str | None = Field(
        default=None, validation_alias=AliasChoices("inscriptionName", "name")
    )
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("inscriptionEffect", "description")
    )
    icon: str | None = Field(default=None, validation_alias=AliasChoices("inscriptionIcon", "icon"))

    _normalize = field_validator("name", "description", "icon", mode="before")(_blank_to_none)


class CampEquipPayload(CampBaseModel):
    item_id: int | None = Field(default=None, validation_alias=AliasChoices("equipId", "id"))
    name: str | None = Field(default=None, validation_alias=AliasChoices("equipName", "name"))
    icon: str | None = Field(default=None, validation_alias=AliasChoices("equipIcon", "icon"))
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("equipDesc", "description")
    )
    price: int | None = Field(default=None, validation_alias=AliasChoices("equipPrice", "price"))
    is_core: bool = Field(default=False, validation_alias=AliasChoices("isCore", "core"))

    _normalize = field_validator("name", "description", "icon", mode="before")(_blank_to_none)


class CampEquipmentPayload(CampBaseModel):
    inscription_data: list[CampInscriptionPayload] = Field(
        default_factory=list[CampInscriptionPayload], alias="inscriptionData"
    )
    inscription_tips: str | None = Field(default=None, alias="inscriptionTips")
    equip_list: list[CampEquipPayload] = Field(
        default_factory=list[CampEquipPayload],
        validation_alias=AliasChoices("equipList", "recommendedEquipment"),
    )
    build_title: str | None = Field(
        default=None, validation_alias=AliasChoices("buildTitle", "equipTitle")
    )

    _normalize = field_validator("inscription_tips", "build_title", mode="before")(
        _blank_to_none
    )


class CampStatsPayload(CampBaseModel):
    win_rate: object = Field(default=None, validation_alias=AliasChoices("winRate", "win_rate"))
    pick_rate: object = Field(
        default=None, validation_alias=AliasChoices("matchRate", "pickRate", "pick_rate")
    )
    ban_rate: object = Field(default=None, validation_alias=AliasChoices("banRate", "ban_rate"))
    tier: str | None = Field(default=None, validation_alias=AliasChoices("tier", "hot"))

    _normalize = field_validator("tier", mode="before")(_number_to_text)


class CampWorldPayload(CampBaseModel):
    region: str | None = None
    identity: str | None = None
    energy: str | None = None

    _normalize = field_validator("region", "identity", "energy", mode="before")(_blank_to_none)


class CampHeroPayload(CampBaseModel):
    hero_id: int | None = Field(default=None, validation_alias=AliasChoices("heroId", "id"))
    hero_name: str | None = Field(
        default=None, validation_alias=AliasChoices("heroName", "name")
    )
    title: str | None = Field(default=None, validation_alias=AliasChoices("cover", "title"))
    role: str | None = Field(default=None, validation_alias=AliasChoices("mainJobName", "role"))
    lane: str | None = Field(
        default=None, validation_alias=AliasChoices("recommendRoadName", "lane")
    )
    icon: str | None = None
    skills: list[CampSkillPayload] = Field(default_factory=list[CampSkillPayload])
    survival: object = Field(default=None, alias="survivalAbility")
    attack: object = Field(default=None, alias="attackDamage")
    ability: object = Field(default=None, alias="skillEffect")
    difficulty: object = None
    relationships: CampRelationships | None = None
    equipment: CampEquipmentPayload | None = None
    stats: CampStatsPayload | None = None
    world: CampWorldPayload | None = None
    build_title: str | None = Field(default=None, alias="buildTitle")

    _normalize = field_validator(
        "hero_name", "title", "role", "lane", "icon", "build_title", mode="before"
    )(_blank_to_none)

    @field_validator("hero_id", mode="before")
    @classmethod
    def _parse_id(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped) if stripped.isdigit() else None
        return value
