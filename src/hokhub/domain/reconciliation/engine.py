"""Orchestrator for the reconciliation subsystem.

The engine composes stage callables but does not prescribe concrete adapters:
the normalizer is injected with the per-source translators, the matcher and
resolver default to the domain implementations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hokhub.domain.model import MergedStore

from .contracts import AlarmKind, CoverageReport, DataQualityAlarm, ReconciliationResult
from .match import match_entities
from .policy import ReconciliationPolicy
from .resolve import resolve_entity

if TYPE_CHECKING:
    from hokhub.domain.model import Hero, SourceTag
    from hokhub.domain.ports import RawSourceDocument

    from .contracts import MatchResult, PartialHero
    from .normalize import Normalizer

type MatchEntities = Callable[..., MatchResult]
type ResolveEntity = Callable[..., Hero]

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run normalize, match and resolve over a full set of source snapshots."""

    normalize: Normalizer
    match: MatchEntities = field(default=match_entities)
    resolve: ResolveEntity = field(default=resolve_entity)
    policy: ReconciliationPolicy = field(default_factory=ReconciliationPolicy)

    def reconcile(self, documents: Sequence[RawSourceDocument]) -> ReconciliationResult:
        """Rebuild the merged store from scratch.

        Display-name collisions between different ids are blocking alarms: the
        later hero (by id) is left out of the store and the result is marked
        blocked so callers do not persist it.
        """

        normalized = [self.normalize(document) for document in documents]
        matched = self.match(normalized, priority=self.policy.priority)
        alarms: list[DataQualityAlarm] = list(matched.alarms)

        store = MergedStore()
        missing_analytics: list[int] = []
        for hero_id, partials in matched.groups.items():
            hero = self.resolve(hero_id, partials, policy=self.policy)
            clash = store.find_by_name(hero.name)
            if clash is not None:
                message = (
                    f"Heroes {clash.hero_id} and {hero.hero_id} both resolve to {hero.name!r}"
                )
                log.warning(message)
                alarms.append(
                    DataQualityAlarm(
                        kind=AlarmKind.NAME_COLLISION,
                        message=message,
                        hero_ids=(clash.hero_id, hero.hero_id),
                        names=(clash.name, hero.name),
                    )
                )
                continue
            store.add(hero)
            if self.policy.analytics not in hero.sources:
                missing_analytics.append(hero_id)

        report = CoverageReport(
            source_counts={item.source: len(item.by_id) for item in normalized},
            singletons=_singletons(matched.groups),
            missing_analytics=tuple(missing_analytics),
            dropped_records=sum(item.dropped for item in normalized),
            alarms=tuple(alarms),
        )
        log.info(
            "Reconciled %s heroes (%s without analytics, %s alarms)",
            len(store),
            len(missing_analytics),
            len(alarms),
        )
        return ReconciliationResult(store=store, report=report)


def _singletons(groups: dict[int, tuple[PartialHero, ...]]) -> dict[SourceTag, tuple[int, ...]]:
    singles: dict[SourceTag, list[int]] = {}
    for hero_id, partials in groups.items():
        if len({partial.source for partial in partials}) == 1:
            singles.setdefault(partials[0].source, []).append(hero_id)
    return {source: tuple(ids) for source, ids in sorted(singles.items())}
