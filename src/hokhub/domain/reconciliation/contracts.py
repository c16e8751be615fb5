"""Shared reconciliation contract components.

This module holds only the values passed between stages:
- per-source partial hero records and normalizer output
- matcher groups and data-quality alarms
- the coverage report returned with a reconciled store
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from hokhub.domain.model import (
    Ability,
    Attributes,
    Item,
    RelationshipEntry,
    Skin,
    SourceTag,
    Statistics,
)

if TYPE_CHECKING:
    from hokhub.domain.model import MergedStore


@dataclass(slots=True, kw_only=True)
class Analytics:
    """Camp-style analytics block, always taken wholesale from one source."""

    abilities: tuple[Ability, ...] = ()
    recommended_items: tuple[Item, ...] = ()
    recommended_augments: tuple[Item, ...] = ()
    strong_against: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, RelationshipEntry]
    )
    weak_against: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, RelationshipEntry]
    )
    best_partner: dict[str, RelationshipEntry] = field(
        default_factory=dict[str, RelationshipEntry]
    )
    statistics: Statistics = field(default_factory=Statistics)
    attributes: Attributes = field(default_factory=Attributes)
    build_title: str | None = None


@dataclass(slots=True, kw_only=True)
class PartialHero:
    """Fields one source is authoritative for; ``None`` means "not supplied"."""

    source: SourceTag
    name: str
    hero_id: int | None = None
    title: str | None = None
    role: str | None = None
    lane: str | None = None
    icon: str | None = None
    banner: str | None = None
    thumbnail: str | None = None
    skins: tuple[Skin, ...] | None = None
    analytics: Analytics | None = None
    region: str | None = None
    identity: str | None = None
    energy: str | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object])


@dataclass(slots=True, kw_only=True)
class NormalizedSource:
    source: SourceTag
    by_id: dict[int, PartialHero] = field(default_factory=dict[int, PartialHero])
    unkeyed: tuple[PartialHero, ...] = ()
    dropped: int = 0


type GroupsById = dict[int, tuple[PartialHero, ...]]


class AlarmKind(StrEnum):
    NAME_COLLISION = "name_collision"
    ID_NAME_MISMATCH = "id_name_mismatch"
    UNMATCHED_NAME = "unmatched_name"
    AMBIGUOUS_NAME = "ambiguous_name"

    @property
    def blocking(self) -> bool:
        return self is AlarmKind.NAME_COLLISION


@dataclass(slots=True, kw_only=True, frozen=True)
class DataQualityAlarm:
    kind: AlarmKind
    message: str
    hero_ids: tuple[int, ...] = ()
    names: tuple[str, ...] = ()
    source: SourceTag | None = None

    @property
    def blocking(self) -> bool:
        return self.kind.blocking


@dataclass(slots=True, kw_only=True)
class MatchResult:
    groups: GroupsById
    alarms: list[DataQualityAlarm] = field(default_factory=list[DataQualityAlarm])


@dataclass(slots=True, kw_only=True)
class CoverageReport:
    source_counts: dict[SourceTag, int] = field(default_factory=dict[SourceTag, int])
    singletons: dict[SourceTag, tuple[int, ...]] = field(
        default_factory=dict[SourceTag, tuple[int, ...]]
    )
    missing_analytics: tuple[int, ...] = ()
    dropped_records: int = 0
    alarms: tuple[DataQualityAlarm, ...] = ()

    @property
    def blocking_alarms(self) -> tuple[DataQualityAlarm, ...]:
        return tuple(alarm for alarm in self.alarms if alarm.blocking)


@dataclass(slots=True, kw_only=True)
class ReconciliationResult:
    store: MergedStore
    report: CoverageReport

    @property
    def blocked(self) -> bool:
        return bool(self.report.blocking_alarms)
