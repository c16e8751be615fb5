"""Type-specific merge functions applying an approved payload to the store.

Every function works on a private copy of the store and reports failure
through ``MergeResult``; the caller's store is never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, assert_never

from hokhub.domain.model import (
    AddEntityPayload,
    AddSkinPayload,
    EditRelationshipPayload,
    EditSkinPayload,
    Hero,
    RelabelSeriesPayload,
    RelationshipAction,
    RelationshipEntry,
)

if TYPE_CHECKING:
    from hokhub.domain.model import ContributionPayload, MergedStore

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True, frozen=True)
class MergeResult:
    success: bool
    store: MergedStore | None = None
    reason: str | None = None
    updated: int = 0
    notes: tuple[str, ...] = ()

    @classmethod
    def ok(
        cls, store: MergedStore, *, updated: int = 1, notes: tuple[str, ...] = ()
    ) -> MergeResult:
        return cls(success=True, store=store, updated=updated, notes=notes)

    @classmethod
    def failed(cls, reason: str) -> MergeResult:
        return cls(success=False, reason=reason)


def apply_payload(store: MergedStore, payload: ContributionPayload) -> MergeResult:
    """Dispatch ``payload`` to its merge function over a copy of ``store``."""

    working = store.copy()
    match payload:
        case AddSkinPayload():
            return merge_skin(working, payload)
        case AddEntityPayload():
            return merge_entity(working, payload)
        case RelabelSeriesPayload():
            return merge_series(working, payload)
        case EditRelationshipPayload():
            return merge_relationship(working, payload)
        case EditSkinPayload():
            return merge_skin_edit(working, payload)
        case _:
            assert_never(payload)


def merge_skin(store: MergedStore, payload: AddSkinPayload) -> MergeResult:
    hero = store.find_by_id(payload.hero_id)
    if hero is None:
        return MergeResult.failed(f"Hero {payload.hero_id} not found")

    existing = hero.find_skin(payload.skin_name)
    if existing is not None:
        payload.skin.apply(existing)
        return MergeResult.ok(store, notes=(f"updated skin {existing.name}",))

    hero.skins.append(payload.skin.create(payload.skin_name))
    return MergeResult.ok(store, notes=(f"added skin {payload.skin_name}",))


def merge_entity(store: MergedStore, payload: AddEntityPayload) -> MergeResult:
    existing = _find_by_upper_name(store, payload.name)
    if existing is not None:
        if payload.hero_id is not None and payload.hero_id != existing.hero_id:
            return MergeResult.failed(
                f"Hero {existing.name} has id {existing.hero_id}, not {payload.hero_id}"
            )
        try:
            store.replace(existing, replace(existing, **payload.values))
        except (TypeError, ValueError) as exc:
            return MergeResult.failed(f"Cannot update hero {existing.name}: {exc}")
        return MergeResult.ok(
            store,
            updated=len(payload.values),
            notes=(f"updated hero {existing.name}",),
        )

    if payload.hero_id is None:
        return MergeResult.failed(f"New hero {payload.name} requires a heroId")
    try:
        store.add(Hero(hero_id=payload.hero_id, name=payload.name, **payload.values))
    except (TypeError, ValueError) as exc:
        return MergeResult.failed(f"Cannot add hero {payload.name}: {exc}")
    return MergeResult.ok(store, notes=(f"added hero {payload.name}",))


def _find_by_upper_name(store: MergedStore, name: str) -> Hero | None:
    wanted = name.strip().upper()
    for hero in store:
        if hero.name.strip().upper() == wanted:
            return hero
    return None


def merge_series(store: MergedStore, payload: RelabelSeriesPayload) -> MergeResult:
    updated = 0
    missing: list[str] = []
    for ref in payload.skins:
        hero = store.find_by_id(ref.hero_id)
        skin = hero.find_skin(ref.skin_name) if hero is not None else None
        if skin is None:
            missing.append(f"{ref.hero_id}/{ref.skin_name}")
            continue
        skin.series = payload.series_name
        updated += 1

    if updated == 0:
        return MergeResult.failed(f"No listed skin found for series {payload.series_name}")
    notes = tuple(f"skin not found: {item}" for item in missing)
    return MergeResult.ok(store, updated=updated, notes=notes)


def merge_relationship(store: MergedStore, payload: EditRelationshipPayload) -> MergeResult:
    hero = store.find_by_name(payload.hero_name)
    if hero is None:
        return MergeResult.failed(f"Hero {payload.hero_name} not found")
    target = store.find_by_name(payload.target_name)
    if target is hero:
        return MergeResult.failed(f"Hero {hero.name} cannot be related to itself")

    target_name = target.name if target is not None else payload.target_name.strip()
    entries = hero.relationships(payload.relation)
    current_key = hero.find_relationship(payload.relation, target_name)

    if payload.action is RelationshipAction.ADD:
        if current_key is not None:
            del entries[current_key]
        entries[target_name] = RelationshipEntry(
            name=target_name,
            icon=payload.icon or (target.icon if target is not None else None),
            note=payload.note,
        )
    else:
        if current_key is None:
            return MergeResult.failed(
                f"{hero.name} has no {payload.relation} entry for {target_name}"
            )
        del entries[current_key]

    if not payload.bidirectional:
        return MergeResult.ok(store)
    if target is None:
        log.warning(
            "Inverse %s edit skipped: hero %s not in store", payload.relation, target_name
        )
        return MergeResult.ok(store, notes=(f"inverse skipped: {target_name} not found",))

    inverse = payload.relation.inverse
    inverse_entries = target.relationships(inverse)
    inverse_key = target.find_relationship(inverse, hero.name)
    if inverse_key is not None:
        del inverse_entries[inverse_key]
    if payload.action is RelationshipAction.ADD:
        inverse_entries[hero.name] = RelationshipEntry(
            name=hero.name, icon=hero.icon, note=payload.note
        )
    return MergeResult.ok(store, updated=2)


def merge_skin_edit(store: MergedStore, payload: EditSkinPayload) -> MergeResult:
    hero = (
        store.find_by_id(payload.hero_id)
        if payload.hero_id is not None
        else store.find_by_name(payload.hero_name or "")
    )
    if hero is None:
        return MergeResult.failed(f"Hero {payload.hero_id or payload.hero_name} not found")
    skin = hero.find_skin(payload.skin_name)
    if skin is None:
        return MergeResult.failed(f"Skin {payload.skin_name} not found on {hero.name}")
    payload.changes.apply(skin)
    return MergeResult.ok(store, notes=(f"edited skin {skin.name}",))
