"""Entity matching across normalized sources."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from hokhub.domain.model import name_key

from .contracts import AlarmKind, DataQualityAlarm, MatchResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .contracts import GroupsById, NormalizedSource, PartialHero
    from .policy import SourcePriority

log = logging.getLogger(__name__)


def match_entities(
    sources: Sequence[NormalizedSource],
    *,
    priority: SourcePriority,
) -> MatchResult:
    """Group partial records that describe the same hero.

    Hero id is the primary key. Records without an id are joined by
    case-insensitive display name, but only against ids already contributed by a
    strictly higher-priority source. Singletons are kept. Each group is ordered by
    descending source priority and groups are ordered by id.
    """

    tags = [normalized.source for normalized in sources]
    if len(set(tags)) != len(tags):
        raise ValueError(f"duplicate source documents: {sorted(tags)}")

    by_source = {normalized.source: normalized for normalized in sources}
    groups: dict[int, list[PartialHero]] = {}
    alarms: list[DataQualityAlarm] = []

    for tag in priority.descending(by_source):
        normalized = by_source[tag]
        names = _name_index(groups)
        for hero_id in sorted(normalized.by_id):
            partial = normalized.by_id[hero_id]
            members = groups.setdefault(hero_id, [])
            if members and name_key(members[0].name) != name_key(partial.name):
                alarms.append(_id_name_mismatch(hero_id, members[0], partial))
            members.append(partial)
        for partial in normalized.unkeyed:
            matched = _match_by_name(partial, names, alarms)
            if matched is not None:
                groups[matched].append(replace(partial, hero_id=matched))

    result: GroupsById = {hero_id: tuple(groups[hero_id]) for hero_id in sorted(groups)}
    return MatchResult(groups=result, alarms=alarms)


def _name_index(groups: dict[int, list[PartialHero]]) -> dict[str, set[int]]:
    index: dict[str, set[int]] = {}
    for hero_id, members in groups.items():
        for member in members:
            index.setdefault(name_key(member.name), set()).add(hero_id)
    return index


def _match_by_name(
    partial: PartialHero,
    names: dict[str, set[int]],
    alarms: list[DataQualityAlarm],
) -> int | None:
    candidates = names.get(name_key(partial.name), set())
    if len(candidates) == 1:
        return next(iter(candidates))
    if not candidates:
        message = f"No higher-priority hero named {partial.name!r} for {partial.source} record"
        log.warning(message)
        alarms.append(
            DataQualityAlarm(
                kind=AlarmKind.UNMATCHED_NAME,
                message=message,
                names=(partial.name,),
                source=partial.source,
            )
        )
        return None
    ids = tuple(sorted(candidates))
    message = f"Name {partial.name!r} from {partial.source} matches several heroes: {ids}"
    log.warning(message)
    alarms.append(
        DataQualityAlarm(
            kind=AlarmKind.AMBIGUOUS_NAME,
            message=message,
            hero_ids=ids,
            names=(partial.name,),
            source=partial.source,
        )
    )
    return None


def _id_name_mismatch(hero_id: int, first: PartialHero, other: PartialHero) -> DataQualityAlarm:
    message = (
        f"Hero {hero_id} is {first.name!r} in {first.source} "
        f"but {other.name!r} in {other.source}"
    )
    log.warning(message)
    return DataQualityAlarm(
        kind=AlarmKind.ID_NAME_MISMATCH,
        message=message,
        hero_ids=(hero_id,),
        names=(first.name, other.name),
        source=other.source,
    )
