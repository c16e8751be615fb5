"""Field reconciliation: one canonical hero from a matched group of partials."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from hokhub.domain.model import Attributes, Hero, Statistics, WorldLore

from .contracts import Analytics
from .policy import DEFAULT_POLICY
from .tiers import classify_skin

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hokhub.domain.model import Skin, SourceTag

    from .contracts import PartialHero
    from .policy import ReconciliationPolicy, SourcePriority


def resolve_entity(
    hero_id: int,
    partials: Sequence[PartialHero],
    *,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
) -> Hero:
    """Build the reconciled hero for ``hero_id``.

    Pure and deterministic. Scalar fields take the first non-empty value in the
    declared source order. Skins and analytics are taken wholesale from a single
    source, never merged field by field.
    """

    if not partials:
        raise ValueError(f"no partial records for hero {hero_id}")

    by_source: dict[SourceTag, PartialHero] = {}
    for partial in partials:
        by_source.setdefault(partial.source, partial)

    name = _first(by_source, policy.name, "name") or partials[0].name
    analytics_source = by_source.get(policy.analytics)
    analytics = (
        analytics_source.analytics
        if analytics_source is not None and analytics_source.analytics is not None
        else None
    )
    block = analytics or Analytics()

    return Hero(
        hero_id=hero_id,
        name=name,
        title=_first(by_source, policy.title, "title"),
        role=_first(by_source, policy.role, "role"),
        lane=_first(by_source, policy.lane, "lane"),
        icon=_first(by_source, policy.media, "icon"),
        banner=_first(by_source, policy.media, "banner"),
        thumbnail=_first(by_source, policy.media, "thumbnail"),
        skins=_resolve_skins(partials, policy.priority),
        abilities=list(block.abilities),
        recommended_items=list(block.recommended_items),
        recommended_augments=list(block.recommended_augments),
        build_title=block.build_title,
        strong_against=dict(block.strong_against),
        weak_against=dict(block.weak_against),
        best_partner=dict(block.best_partner),
        statistics=block.statistics if analytics is not None else Statistics(),
        attributes=block.attributes if analytics is not None else Attributes(),
        world_lore=WorldLore(
            region=_first(by_source, policy.region, "region") or "",
            identity=_first(by_source, policy.lore, "identity") or "",
            energy=_first(by_source, policy.lore, "energy") or "",
        ),
        sources=frozenset(by_source),
        extras=_resolve_extras(partials, policy.priority),
    )


def _first(
    by_source: dict[SourceTag, PartialHero],
    order: Sequence[SourceTag],
    attribute: str,
) -> str | None:
    for tag in order:
        partial = by_source.get(tag)
        if partial is None:
            continue
        value = getattr(partial, attribute)
        if isinstance(value, str) and value.strip():
            return value
    return None


def skin_completeness(skins: Sequence[Skin]) -> tuple[int, int]:
    """Completeness score: skin count, then how many carry a series."""

    return len(skins), sum(1 for skin in skins if skin.series)


def _resolve_skins(partials: Sequence[PartialHero], priority: SourcePriority) -> list[Skin]:
    candidates = [partial for partial in partials if partial.skins is not None]
    if not candidates:
        return []
    winner = max(
        candidates,
        key=lambda partial: (
            skin_completeness(partial.skins or ()),
            -priority.rank(partial.source),
        ),
    )
    return [_classified(skin) for skin in winner.skins or ()]


def _classified(skin: Skin) -> Skin:
    if skin.tier is not None:
        return replace(skin)
    classification = classify_skin(skin.name, skin.series)
    return replace(
        skin,
        tier=classification.tier,
        tags=skin.tags | classification.tags,
        collab=skin.collab or classification.collab,
    )


def _resolve_extras(
    partials: Sequence[PartialHero],
    priority: SourcePriority,
) -> dict[str, object]:
    extras: dict[str, object] = {}
    # ascending priority, so the highest-priority source writes last
    for partial in sorted(partials, key=lambda item: -priority.rank(item.source)):
        extras.update(partial.extras)
    return dict(sorted(extras.items()))
