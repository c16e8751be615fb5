"""The merged store: one reconciled hero per display name."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .hero import Hero, name_key

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(slots=True)
class MergedStore:
    """Heroes keyed by display name.

    Both the hero id and the display name (case-insensitively) are unique. The
    mapping preserves insertion order; reconciliation inserts by ascending id.
    """

    heroes: dict[str, Hero] = field(default_factory=dict[str, Hero])

    def __len__(self) -> int:
        return len(self.heroes)

    def __iter__(self) -> Iterator[Hero]:
        return iter(self.heroes.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_by_name(name) is not None

    def find_by_id(self, hero_id: int) -> Hero | None:
        for hero in self.heroes.values():
            if hero.hero_id == hero_id:
                return hero
        return None

    def find_by_name(self, name: str) -> Hero | None:
        hero = self.heroes.get(name)
        if hero is not None:
            return hero
        wanted = name_key(name)
        for candidate in self.heroes.values():
            if candidate.key == wanted:
                return candidate
        return None

    def add(self, hero: Hero) -> None:
        if self.find_by_name(hero.name) is not None:
            raise ValueError(f"hero name already present: {hero.name}")
        if self.find_by_id(hero.hero_id) is not None:
            raise ValueError(f"hero id already present: {hero.hero_id}")
        self.heroes[hero.name] = hero

    def replace(self, previous: Hero, updated: Hero) -> None:
        """Swap ``previous`` for ``updated``, re-keying when the display name changed."""

        if self.heroes.get(previous.name) is not previous:
            raise ValueError(f"hero not owned by this store: {previous.name}")
        for other in self.heroes.values():
            if other is previous:
                continue
            if other.key == updated.key:
                raise ValueError(f"hero name already present: {updated.name}")
            if other.hero_id == updated.hero_id:
                raise ValueError(f"hero id already present: {updated.hero_id}")
        if previous.name == updated.name:
            self.heroes[previous.name] = updated
            return
        self.heroes = {
            (updated.name if key == previous.name else key): (
                updated if key == previous.name else hero
            )
            for key, hero in self.heroes.items()
        }

    def copy(self) -> MergedStore:
        """Deep copy used as the working snapshot of a merge."""

        return MergedStore(heroes=copy.deepcopy(self.heroes))
