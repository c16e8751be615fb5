"""Pydantic models describing the flat skin backup list."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SkinBackupBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BackupHeroRef(SkinBackupBaseModel):
    hero_id: int | None = Field(default=None, validation_alias=AliasChoices("heroId", "id"))
    hero_name: str | None = Field(
        default=None, validation_alias=AliasChoices("heroName", "name")
    )

    _normalize = field_validator("hero_name", mode="before")(_blank_to_none)


class BackupSkinPayload(SkinBackupBaseModel):
    skin_name: str | None = Field(default=None, alias="skinName")
    skin_cover: str | None = Field(default=None, alias="skinCover")
    skin_image: str | None = Field(default=None, alias="skinImage")
    skin_series: str | None = Field(default=None, alias="skinSeries")
    hero: BackupHeroRef | None = None

    _normalize = field_validator(
        "skin_name", "skin_cover", "skin_image", "skin_series", mode="before"
    )(_blank_to_none)
