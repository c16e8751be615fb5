from __future__ import annotations

import pytest

from hokhub.domain.model import CollabTag, SkinTier, SpecialTag
from hokhub.domain.reconciliation import classify_skin


def test_special_skin_name_wins_over_series() -> None:
    classification = classify_skin("Swan Princess", "CAMPUS DIARIES")

    assert classification.tier is SkinTier.FLAWLESS


@pytest.mark.parametrize(
    ("series", "tier"),
    [
        ("HELLFIRE", SkinTier.LEGEND),
        ("campus diaries", SkinTier.RARE),
        ("Future Era", SkinTier.EPIC),
        ("Some Brand New Series", SkinTier.EPIC),
        (None, SkinTier.RARE),
        ("", SkinTier.RARE),
    ],
)
def test_series_lookup_and_defaults(series: str | None, tier: SkinTier) -> None:
    assert classify_skin("Ordinary Skin", series).tier is tier


def test_collab_and_tags_come_from_series() -> None:
    conan = classify_skin("Detective Outfit", "DETECTIVE CONAN")
    world_cup = classify_skin("Striker", "WORLD CUP")

    assert conan.collab is CollabTag.DETECTIVE_CONAN
    assert world_cup.tags == frozenset({SpecialTag.LIMITED})
