"""Multi-source hero reconciliation."""

from __future__ import annotations

from .contracts import (
    AlarmKind,
    Analytics,
    CoverageReport,
    DataQualityAlarm,
    MatchResult,
    NormalizedSource,
    PartialHero,
    ReconciliationResult,
)
from .engine import ReconciliationEngine
from .match import match_entities
from .normalize import Normalizer, SourceNormalizer, clean_text, format_percentage
from .policy import DEFAULT_POLICY, FieldGroup, ReconciliationPolicy, SourcePriority
from .resolve import resolve_entity, skin_completeness
from .tiers import SkinClassification, classify_skin

__all__ = [
    "DEFAULT_POLICY",
    "AlarmKind",
    "Analytics",
    "CoverageReport",
    "DataQualityAlarm",
    "FieldGroup",
    "MatchResult",
    "NormalizedSource",
    "Normalizer",
    "PartialHero",
    "ReconciliationEngine",
    "ReconciliationPolicy",
    "ReconciliationResult",
    "SkinClassification",
    "SourceNormalizer",
    "SourcePriority",
    "classify_skin",
    "clean_text",
    "format_percentage",
    "match_entities",
    "resolve_entity",
    "skin_completeness",
]
