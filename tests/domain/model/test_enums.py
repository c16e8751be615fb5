from __future__ import annotations

import pytest

from hokhub.domain.model import (
    ContributionStatus,
    ContributionType,
    RelationshipKind,
    ReviewAction,
    SkinTier,
)


def test_relationship_inverse_pairs() -> None:
    assert RelationshipKind.STRONG_AGAINST.inverse is RelationshipKind.WEAK_AGAINST
    assert RelationshipKind.WEAK_AGAINST.inverse is RelationshipKind.STRONG_AGAINST
    assert RelationshipKind.BEST_PARTNER.inverse is RelationshipKind.BEST_PARTNER


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("add-skin", ContributionType.ADD_SKIN),
        ("skin", ContributionType.ADD_SKIN),
        ("HERO", ContributionType.ADD_ENTITY),
        ("counter", ContributionType.EDIT_RELATIONSHIP),
        ("skin-edit", ContributionType.EDIT_SKIN),
        (" relabel-series ", ContributionType.RELABEL_SERIES),
    ],
)
def test_contribution_type_parse_accepts_legacy_names(
    raw: str, expected: ContributionType
) -> None:
    assert ContributionType.parse(raw) is expected


def test_contribution_type_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="delete-hero"):
        ContributionType.parse("delete-hero")


def test_id_prefixes_follow_legacy_names() -> None:
    assert ContributionType.ADD_SKIN.id_prefix == "skin"
    assert ContributionType.EDIT_SKIN.id_prefix == "skinedit"


def test_only_pending_is_not_terminal() -> None:
    assert not ContributionStatus.PENDING.is_terminal
    assert ContributionStatus.APPROVED.is_terminal
    assert ContributionStatus.REJECTED.is_terminal


def test_skin_tier_labels() -> None:
    assert SkinTier.NO_TAG.label == "No Tag"
    assert SkinTier.FLAWLESS.label == "Flawless"


def test_review_actions_lead_to_terminal_statuses() -> None:
    assert ReviewAction.APPROVE.outcome is ContributionStatus.APPROVED
    assert ReviewAction.REJECT.outcome is ContributionStatus.REJECTED
