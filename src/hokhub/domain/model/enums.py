"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceTag(StrEnum):
    """Scraped datasets that feed reconciliation."""

    WORLD = "world"
    CAMP = "camp"
    SKIN_BACKUP = "skin-backup"


class SkinTier(StrEnum):
    NO_TAG = "NO_TAG"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGEND = "LEGEND"
    PRECIOUS = "PRECIOUS"
    MYTHIC = "MYTHIC"
    FLAWLESS = "FLAWLESS"

    @property
    def label(self) -> str:
        return "No Tag" if self is SkinTier.NO_TAG else self.value.title()


class SpecialTag(StrEnum):
    BLESSED = "BLESSED"
    NOBILITY = "NOBILITY"
    EVENT = "EVENT"
    LIMITED = "LIMITED"
    HONOR_PASS = "HONOR_PASS"
    WORLDLY = "WORLDLY"
    SEASON = "SEASON"
    CHARMED = "CHARMED"
    KIC = "KIC"
    GRANDMASTER = "GRANDMASTER"
    KINGS_DEED = "KINGS_DEED"
    REPUTATION = "REPUTATION"


class CollabTag(StrEnum):
    SAINT_SEIYA = "SAINT_SEIYA"
    SAILOR_MOON = "SAILOR_MOON"
    SANRIO = "SANRIO"
    JUJUTSU_KAISEN = "JUJUTSU_KAISEN"
    BLEACH = "BLEACH"
    DETECTIVE_CONAN = "DETECTIVE_CONAN"
    FROZEN = "FROZEN"
    SNK = "SNK"
    LORD_MYSTERIES = "LORD_MYSTERIES"


class RelationshipKind(StrEnum):
    STRONG_AGAINST = "strongAgainst"
    WEAK_AGAINST = "weakAgainst"
    BEST_PARTNER = "bestPartner"

    @property
    def inverse(self) -> RelationshipKind:
        if self is RelationshipKind.STRONG_AGAINST:
            return RelationshipKind.WEAK_AGAINST
        if self is RelationshipKind.WEAK_AGAINST:
            return RelationshipKind.STRONG_AGAINST
        return RelationshipKind.BEST_PARTNER


class RelationshipAction(StrEnum):
    ADD = "add"
    REMOVE = "remove"


class ContributionType(StrEnum):
    ADD_SKIN = "add-skin"
    ADD_ENTITY = "add-entity"
    RELABEL_SERIES = "relabel-series"
    EDIT_RELATIONSHIP = "edit-relationship"
    EDIT_SKIN = "edit-skin"

    @property
    def id_prefix(self) -> str:
        return _ID_PREFIXES[self]

    @classmethod
    def parse(cls, value: str) -> ContributionType:
        """Accept canonical values and the short names used by older submissions."""

        normalized = value.strip().lower()
        legacy = _LEGACY_ALIASES.get(normalized)
        if legacy is not None:
            return legacy
        return cls(normalized)


_ID_PREFIXES: dict[ContributionType, str] = {
    ContributionType.ADD_SKIN: "skin",
    ContributionType.ADD_ENTITY: "hero",
    ContributionType.RELABEL_SERIES: "series",
    ContributionType.EDIT_RELATIONSHIP: "counter",
    ContributionType.EDIT_SKIN: "skinedit",
}

_LEGACY_ALIASES: dict[str, ContributionType] = {
    "skin": ContributionType.ADD_SKIN,
    "hero": ContributionType.ADD_ENTITY,
    "series": ContributionType.RELABEL_SERIES,
    "counter": ContributionType.EDIT_RELATIONSHIP,
    "skin-edit": ContributionType.EDIT_SKIN,
}


class ContributionStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ContributionStatus.PENDING


class ReviewAction(StrEnum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def outcome(self) -> ContributionStatus:
        """Terminal status this action leads to, as written to the history log."""

        return (
            ContributionStatus.APPROVED
            if self is ReviewAction.APPROVE
            else ContributionStatus.REJECTED
        )
