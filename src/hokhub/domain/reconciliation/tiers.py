"""Skin tier and tag classification from fixed lookup tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from hokhub.domain.model import CollabTag, SkinTier, SpecialTag, name_key


@dataclass(slots=True, kw_only=True, frozen=True)
class SkinClassification:
    tier: SkinTier
    tags: frozenset[SpecialTag] = frozenset()
    collab: CollabTag | None = None


def _plain(tier: SkinTier, *series: str) -> dict[str, SkinClassification]:
    return {name: SkinClassification(tier=tier) for name in series}


SERIES_CLASSIFICATION: Final[dict[str, SkinClassification]] = {
    "DETECTIVE CONAN": SkinClassification(
        tier=SkinTier.EPIC, collab=CollabTag.DETECTIVE_CONAN
    ),
    "PRETTY GUARDIAN SAILOR MOON COSMOS THE MOVIE COLLAB": SkinClassification(
        tier=SkinTier.EPIC, collab=CollabTag.SAILOR_MOON
    ),
    "SNK": SkinClassification(tier=SkinTier.EPIC, collab=CollabTag.SNK),
    "WORLD CUP": SkinClassification(
        tier=SkinTier.EPIC, tags=frozenset({SpecialTag.LIMITED})
    ),
    "EWC": SkinClassification(tier=SkinTier.LEGEND, tags=frozenset({SpecialTag.KIC})),
    "ASCENSION": SkinClassification(tier=SkinTier.EPIC, tags=frozenset({SpecialTag.WORLDLY})),
    **_plain(
        SkinTier.LEGEND,
        "HELLFIRE",
        "LIMBO",
        "FIVE HONORS",
        "FIVE TIGER GENERALS",
        "FIVE MOUNTAINS",
        "DUNHUANG ENCOUNTER",
        "SHI YI'S TALE",
        "AMPED UP: TRUE HERTZ",
    ),
    **_plain(SkinTier.RARE, "CAMPUS DIARIES"),
    **_plain(
        SkinTier.EPIC,
        "FUTURE ERA",
        "DOOMSDAY MECHA",
        "COSMIC SONG",
        "SPACE ODYSSEY",
        "INTERSTELLAR",
        "MAGIC",
        "MAGIC - MAGIC ACADEMY",
        "JOURNEY TO THE WEST",
        "GAMER",
        "MANGA CROSSOVER",
        "SIRIUS SQUAD",
        "DRAGON HUNTER",
        "YEAR OF THE DRAGON",
        "NUTCRACKER MONARCH",
        "CHRISTMAS CAROL",
        "ODE TO WINTER",
        "BEACH VACATION",
        "HOME SWEET HOME",
        "FLOWER WHISPER",
        "COLORS OF THE SOUL",
        "TALES OLD AND NEW",
        "STRANGE TALES",
        "MASK SPIRITS",
        "DAWNVILLE",
        "RAIN PLAY",
        "ENDLESS LOVE",
        "AMPED UP",
        "AMBER ERA",
    ),
}

SPECIAL_SKIN_CLASSIFICATION: Final[dict[str, SkinClassification]] = {
    **_plain(
        SkinTier.FLAWLESS,
        "Eternal Night",
        "Nine-Tailed Fox",
        "Swan Princess",
        "Drunken Swordsman",
    ),
    **_plain(SkinTier.MYTHIC, "Frostfire Dragon", "Time Keeper", "Blazing Stars"),
    **_plain(SkinTier.LEGEND, "Astral Magic"),
}

_SERIES_BY_KEY: Final = {name_key(key): value for key, value in SERIES_CLASSIFICATION.items()}
_SPECIAL_BY_KEY: Final = {
    name_key(key): value for key, value in SPECIAL_SKIN_CLASSIFICATION.items()
}

_UNKNOWN_SERIES: Final = SkinClassification(tier=SkinTier.EPIC)
_NO_SERIES: Final = SkinClassification(tier=SkinTier.RARE)


def classify_skin(skin_name: str, series: str | None) -> SkinClassification:
    """Derive tier, tags and collab for a skin.

    An exact skin-name entry wins over the series table. Unknown series default
    to EPIC, skins without a series to RARE.
    """

    special = _SPECIAL_BY_KEY.get(name_key(skin_name))
    if special is not None:
        return special
    if series:
        return _SERIES_BY_KEY.get(name_key(series), _UNKNOWN_SERIES)
    return _NO_SERIES
