"""Translate raw contribution payloads and stored contribution files.

``parse_payload`` is the validation gate for submissions: every failure is a
``SubmissionValidationError`` carrying a readable reason.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, assert_never

from pydantic import BaseModel, ValidationError

from hokhub.adapters.documents import (
    hero_to_document,
    hero_values_from_document,
    skin_fields_from_document,
    skin_fields_to_document,
)
from hokhub.domain.errors import SubmissionValidationError
from hokhub.domain.model import (
    AddEntityPayload,
    AddSkinPayload,
    Contribution,
    ContributionType,
    EditRelationshipPayload,
    EditSkinPayload,
    Hero,
    HistoryRecord,
    RelabelSeriesPayload,
    ReviewAction,
    SkinRef,
)

from .schema import (
    AddEntityDocument,
    AddSkinDocument,
    ContributionDocument,
    EditRelationshipDocument,
    EditSkinDocument,
    HistoryRecordDocument,
    RelabelSeriesDocument,
)

if TYPE_CHECKING:
    from hokhub.domain.model import ContributionPayload

_SCHEMAS: dict[ContributionType, type[BaseModel]] = {
    ContributionType.ADD_SKIN: AddSkinDocument,
    ContributionType.ADD_ENTITY: AddEntityDocument,
    ContributionType.RELABEL_SERIES: RelabelSeriesDocument,
    ContributionType.EDIT_RELATIONSHIP: EditRelationshipDocument,
    ContributionType.EDIT_SKIN: EditSkinDocument,
}

_HISTORY_ACTIONS: dict[str, ReviewAction] = {
    **{action.outcome.value: action for action in ReviewAction},
    **{action.value: action for action in ReviewAction},
}


def _describe(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
        for error in exc.errors()
    ]
    return "; ".join(problems)


def parse_contribution_type(value: str) -> ContributionType:
    try:
        return ContributionType.parse(value)
    except ValueError as exc:
        raise SubmissionValidationError(f"Unknown contribution type: {value!r}") from exc


def parse_payload(contribution_type: str | ContributionType, raw: object) -> ContributionPayload:
    """Validate a raw JSON payload into the typed payload for its contribution type."""

    kind = (
        contribution_type
        if isinstance(contribution_type, ContributionType)
        else parse_contribution_type(contribution_type)
    )
    try:
        document = _SCHEMAS[kind].model_validate(raw)
        return _to_payload(document)
    except ValidationError as exc:
        raise SubmissionValidationError(f"Invalid {kind} payload: {_describe(exc)}") from exc
    except ValueError as exc:
        raise SubmissionValidationError(f"Invalid {kind} payload: {exc}") from exc


def _to_payload(document: BaseModel) -> ContributionPayload:
    match document:
        case AddSkinDocument():
            return AddSkinPayload(
                hero_id=document.hero_id,
                skin_name=document.skin.skin_name,
                skin=skin_fields_from_document(document.skin),
            )
        case AddEntityDocument():
            return AddEntityPayload(
                name=document.name,
                hero_id=document.hero_id,
                values=hero_values_from_document(document),
            )
        case RelabelSeriesDocument():
            return RelabelSeriesPayload(
                series_name=document.series_name,
                skins=tuple(
                    SkinRef(hero_id=ref.hero_id, skin_name=ref.skin_name)
                    for ref in document.skins
                ),
            )
        case EditRelationshipDocument():
            return EditRelationshipPayload(
                hero_name=document.hero_name,
                target_name=document.target_name,
                relation=document.relation,
                action=document.action,
                note=document.note,
                icon=document.icon,
                bidirectional=document.bidirectional,
            )
        case EditSkinDocument():
            return EditSkinPayload(
                skin_name=document.skin_name,
                hero_id=document.hero_id,
                hero_name=document.hero_name,
                changes=skin_fields_from_document(document.changes),
            )
        case _:
            raise TypeError(f"Unsupported payload document: {type(document).__name__}")


def payload_to_document(payload: ContributionPayload) -> dict[str, object]:
    """Inverse of ``parse_payload`` using the submitted camelCase keys."""

    match payload:
        case AddSkinPayload():
            return {
                "heroId": payload.hero_id,
                "skin": {"skinName": payload.skin_name, **skin_fields_to_document(payload.skin)},
            }
        case AddEntityPayload():
            # serialize through the hero codec, keeping only the provided keys
            rendered = hero_to_document(Hero(hero_id=0, name=payload.name, **payload.values))
            document: dict[str, object] = {"name": payload.name}
            if payload.hero_id is not None:
                document["heroId"] = payload.hero_id
            for key in _hero_keys(payload):
                document[key] = rendered[key]
            return document
        case RelabelSeriesPayload():
            return {
                "seriesName": payload.series_name,
                "skins": [
                    {"heroId": ref.hero_id, "skinName": ref.skin_name} for ref in payload.skins
                ],
            }
        case EditRelationshipPayload():
            return {
                "heroName": payload.hero_name,
                "targetHeroName": payload.target_name,
                "relation": payload.relation.value,
                "action": payload.action.value,
                "note": payload.note,
                "icon": payload.icon,
                "bidirectional": payload.bidirectional,
            }
        case EditSkinPayload():
            document = {
                "skinName": payload.skin_name,
                "changes": skin_fields_to_document(payload.changes),
            }
            if payload.hero_id is not None:
                document["heroId"] = payload.hero_id
            if payload.hero_name is not None:
                document["heroName"] = payload.hero_name
            return document
        case _:
            assert_never(payload)


_DOCUMENT_KEYS: dict[str, str] = {
    "title": "title",
    "role": "role",
    "lane": "lane",
    "icon": "icon",
    "banner": "banner",
    "thumbnail": "thumbnail",
    "skins": "skins",
    "abilities": "abilities",
    "recommended_items": "recommendedItems",
    "recommended_augments": "recommendedAugments",
    "build_title": "buildTitle",
    "strong_against": "strongAgainst",
    "weak_against": "weakAgainst",
    "best_partner": "bestPartner",
    "statistics": "statistics",
    "attributes": "attributes",
    "world_lore": "world",
}


def _hero_keys(payload: AddEntityPayload) -> list[str]:
    return [_DOCUMENT_KEYS[name] for name in payload.values if name in _DOCUMENT_KEYS]


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def _isoformat(value: datetime | None) -> str | None:
    return _as_utc(value).isoformat() if value is not None else None


def contribution_to_document(contribution: Contribution) -> dict[str, object]:
    return {
        "id": contribution.contribution_id,
        "type": contribution.contribution_type.value,
        "status": contribution.status.value,
        "submitterId": contribution.submitter_id,
        "submittedAt": _isoformat(contribution.submitted_at),
        "reviewedAt": _isoformat(contribution.reviewed_at),
        "payload": payload_to_document(contribution.payload),
    }


def contribution_from_document(content: object) -> Contribution:
    document = ContributionDocument.model_validate(content)
    return Contribution(
        contribution_id=document.id,
        payload=parse_payload(document.type, document.payload),
        submitter_id=document.submitter_id,
        status=document.status,
        submitted_at=_as_utc(document.submitted_at),
        reviewed_at=_as_utc(document.reviewed_at) if document.reviewed_at else None,
    )


def history_record_to_document(record: HistoryRecord) -> dict[str, object]:
    return {
        "contributionId": record.contribution_id,
        "type": record.contribution_type.value,
        "action": record.action.outcome.value,
        "submittedAt": _isoformat(record.submitted_at),
        "reviewedAt": _isoformat(record.reviewed_at),
        "payload": payload_to_document(record.payload),
    }


def history_record_from_document(content: object) -> HistoryRecord:
    document = HistoryRecordDocument.model_validate(content)
    action = _HISTORY_ACTIONS.get(document.action)
    if action is None:
        raise ValueError(f"Unknown history action: {document.action!r}")
    kind = parse_contribution_type(document.type)
    return HistoryRecord(
        contribution_id=document.contribution_id,
        contribution_type=kind,
        action=action,
        submitted_at=_as_utc(document.submitted_at),
        reviewed_at=_as_utc(document.reviewed_at),
        payload=parse_payload(kind, document.payload),
    )

