"""Pydantic models describing the world-site hero snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class WorldBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WorldSkinPayload(WorldBaseModel):
    name: str | None = None
    hero_name: str | None = Field(default=None, alias="heroName")
    series: str | None = None
    cover: str | None = None
    image1: str | None = None
    image2: str | None = None
    link: str | None = None

    _normalize_blanks = field_validator(
        "name", "hero_name", "series", "cover", "image1", "image2", "link", mode="before"
    )(_blank_to_none)


class WorldHeroPayload(WorldBaseModel):
    id: int | None = None
    name: str | None = None
    name_en: str | None = Field(default=None, alias="nameEN")
    role: str | None = None
    title: str | None = None
    region: str | None = None
    icon: str | None = None
    banner: str | None = None
    thumbnail: str | None = None
    skins: list[WorldSkinPayload] = Field(default_factory=list[WorldSkinPayload])

    _normalize_blanks = field_validator(
        "name", "name_en", "role", "title", "region", "icon", "banner", "thumbnail", mode="before"
    )(_blank_to_none)

    @field_validator("id", mode="before")
    @classmethod
    def _parse_id(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped) if stripped.isdigit() else None
        return value

    @property
    def display_name(self) -> str | None:
        return self.name_en or self.name


class WorldDocument(WorldBaseModel):
    heroes: dict[str, WorldHeroPayload]
