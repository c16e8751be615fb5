"""Declared source precedence per field group.

Every field the reconciler writes is listed here with the ordered sources it
may come from. Nothing is inferred from the order in which sources happen to be
loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from hokhub.domain.model import SourceTag

if TYPE_CHECKING:
    from collections.abc import Iterable


class FieldGroup(StrEnum):
    IDENTITY = "identity"
    MEDIA = "media"
    SKINS = "skins"
    ANALYTICS = "analytics"
    LORE = "lore"


@dataclass(slots=True, frozen=True)
class SourcePriority:
    """Global ordering of sources, highest first.

    Used by the matcher (name fallback only joins against higher-priority
    sources), as the skin tie-breaker, and for last-writer-wins extras.
    """

    order: tuple[SourceTag, ...] = (SourceTag.WORLD, SourceTag.CAMP, SourceTag.SKIN_BACKUP)

    def __post_init__(self) -> None:
        if len(set(self.order)) != len(self.order):
            raise ValueError("source priority must not repeat a source")

    def rank(self, source: SourceTag) -> int:
        """Lower is higher priority; undeclared sources rank last."""

        try:
            return self.order.index(source)
        except ValueError:
            return len(self.order)

    def outranks(self, source: SourceTag, other: SourceTag) -> bool:
        return self.rank(source) < self.rank(other)

    def descending(self, sources: Iterable[SourceTag]) -> list[SourceTag]:
        return sorted(sources, key=lambda tag: (self.rank(tag), tag.value))


@dataclass(slots=True, frozen=True, kw_only=True)
class ReconciliationPolicy:
    priority: SourcePriority = field(default_factory=SourcePriority)
    name: tuple[SourceTag, ...] = (SourceTag.CAMP, SourceTag.WORLD, SourceTag.SKIN_BACKUP)
    title: tuple[SourceTag, ...] = (SourceTag.WORLD, SourceTag.CAMP)
    role: tuple[SourceTag, ...] = (SourceTag.CAMP, SourceTag.WORLD)
    lane: tuple[SourceTag, ...] = (SourceTag.CAMP, SourceTag.WORLD)
    # world assets are the high-resolution renders
    media: tuple[SourceTag, ...] = (SourceTag.WORLD, SourceTag.CAMP)
    analytics: SourceTag = SourceTag.CAMP
    region: tuple[SourceTag, ...] = (SourceTag.WORLD, SourceTag.CAMP)
    lore: tuple[SourceTag, ...] = (SourceTag.CAMP, SourceTag.WORLD)

    def sources_for(self, group: FieldGroup) -> tuple[SourceTag, ...]:
        """Declared sources for a field group, for reporting and tests."""

        match group:
            case FieldGroup.IDENTITY:
                return tuple(dict.fromkeys((*self.name, *self.title, *self.role, *self.lane)))
            case FieldGroup.MEDIA:
                return self.media
            case FieldGroup.SKINS:
                return tuple(self.priority.order)
            case FieldGroup.ANALYTICS:
                return (self.analytics,)
            case FieldGroup.LORE:
                return tuple(dict.fromkeys((*self.region, *self.lore)))


DEFAULT_POLICY = ReconciliationPolicy()
