"""Pydantic models for raw contribution payloads as submitted by clients."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from hokhub.adapters.documents import HeroFieldsDocument, SkinDocument, SkinFieldsDocument
from hokhub.domain.model import ContributionStatus, RelationshipAction, RelationshipKind


def _required_text(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SubmissionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AddSkinDocument(SubmissionBaseModel):
    hero_id: int = Field(alias="heroId")
    skin: SkinDocument


class AddEntityDocument(HeroFieldsDocument):
    name: str = Field(min_length=1)
    hero_id: int | None = Field(default=None, alias="heroId")

    _strip_name = field_validator("name", mode="before")(_required_text)


class SkinRefDocument(SubmissionBaseModel):
    hero_id: int = Field(alias="heroId")
    skin_name: str = Field(alias="skinName", min_length=1)

    _strip_name = field_validator("skin_name", mode="before")(_required_text)


class RelabelSeriesDocument(SubmissionBaseModel):
    series_name: str = Field(alias="seriesName", min_length=1)
    skins: list[SkinRefDocument] = Field(min_length=1)

    _strip_name = field_validator("series_name", mode="before")(_required_text)


class EditRelationshipDocument(SubmissionBaseModel):
    hero_name: str = Field(alias="heroName", min_length=1)
    target_name: str = Field(
        validation_alias=AliasChoices("targetHeroName", "targetName"),
        serialization_alias="targetHeroName",
        min_length=1,
    )
    relation: RelationshipKind = Field(validation_alias=AliasChoices("relation", "relationType"))
    action: RelationshipAction = RelationshipAction.ADD
    note: str | None = None
    icon: str | None = None
    bidirectional: bool = False

    _strip_names = field_validator("hero_name", "target_name", mode="before")(_required_text)
    _normalize = field_validator("note", "icon", mode="before")(_blank_to_none)


class EditSkinDocument(SubmissionBaseModel):
    hero_id: int | None = Field(default=None, alias="heroId")
    hero_name: str | None = Field(default=None, alias="heroName")
    skin_name: str = Field(alias="skinName", min_length=1)
    changes: SkinFieldsDocument

    _strip_name = field_validator("skin_name", mode="before")(_required_text)
    _normalize = field_validator("hero_name", mode="before")(_blank_to_none)


class ContributionDocument(SubmissionBaseModel):
    """Stored contribution file; ``data`` is the key older files used."""

    id: str = Field(min_length=1)
    type: str
    status: ContributionStatus = ContributionStatus.PENDING
    submitter_id: str | None = Field(default=None, alias="submitterId")
    submitted_at: datetime = Field(alias="submittedAt")
    reviewed_at: datetime | None = Field(default=None, alias="reviewedAt")
    payload: dict[str, object] = Field(validation_alias=AliasChoices("payload", "data"))


class HistoryRecordDocument(SubmissionBaseModel):
    contribution_id: str = Field(validation_alias=AliasChoices("contributionId", "id"))
    type: str
    action: str
    submitted_at: datetime = Field(alias="submittedAt")
    reviewed_at: datetime = Field(alias="reviewedAt")
    payload: dict[str, object] = Field(validation_alias=AliasChoices("payload", "data"))
