"""Domain model for reconciled heroes and community contributions."""

from __future__ import annotations

from .contribution import Contribution, HistoryRecord
from .contributor import Contributor
from .enums import (
    CollabTag,
    ContributionStatus,
    ContributionType,
    RelationshipAction,
    RelationshipKind,
    ReviewAction,
    SkinTier,
    SourceTag,
    SpecialTag,
)
from .hero import (
    NOT_AVAILABLE,
    ZERO_PERCENT,
    Ability,
    Attributes,
    Hero,
    Item,
    RelationshipEntry,
    Skin,
    Statistics,
    WorldLore,
    name_key,
)
from .payloads import (
    MERGEABLE_HERO_FIELDS,
    AddEntityPayload,
    AddSkinPayload,
    ContributionPayload,
    EditRelationshipPayload,
    EditSkinPayload,
    RelabelSeriesPayload,
    SkinFields,
    SkinRef,
)
from .store import MergedStore

__all__ = [
    "MERGEABLE_HERO_FIELDS",
    "NOT_AVAILABLE",
    "ZERO_PERCENT",
    "Ability",
    "AddEntityPayload",
    "AddSkinPayload",
    "Attributes",
    "CollabTag",
    "Contribution",
    "ContributionPayload",
    "ContributionStatus",
    "ContributionType",
    "Contributor",
    "EditRelationshipPayload",
    "EditSkinPayload",
    "Hero",
    "HistoryRecord",
    "Item",
    "MergedStore",
    "RelabelSeriesPayload",
    "RelationshipAction",
    "RelationshipEntry",
    "RelationshipKind",
    "ReviewAction",
    "Skin",
    "SkinFields",
    "SkinRef",
    "SkinTier",
    "SourceTag",
    "SpecialTag",
    "Statistics",
    "WorldLore",
    "name_key",
]
