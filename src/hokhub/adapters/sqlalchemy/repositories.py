"""Contributor ledger backed by a SQLAlchemy session."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select

from hokhub.adapters.sqlalchemy.mappings import contributor_table
from hokhub.domain.model import Contributor
from hokhub.domain.ports import ContributorStanding

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

log = getLogger(__name__)


class SqlAlchemyContributorLedger:
    def __init__(self, session: Session) -> None:
        self.session = session

    def register(self, *, display_name: str, email: str | None = None) -> str:
        """Create a contributor, or return the existing id for a known e-mail."""

        normalized_email = email.strip().lower() if email and email.strip() else None
        if normalized_email is not None:
            existing = self._by_email(normalized_email)
            if existing is not None:
                return existing.contributor_id
        contributor = Contributor(display_name=display_name.strip(), email=normalized_email)
        self.session.add(contributor)
        self.session.flush()
        log.info("Registered contributor %s", contributor.contributor_id)
        return contributor.contributor_id

    def get(self, contributor_id: str) -> Contributor | None:
        return self.session.get(Contributor, contributor_id)

    def record_approval(self, contributor_id: str) -> int:
        contributor = self.get(contributor_id)
        if contributor is None:
            # submitters can be credited before they register a display name
            contributor = Contributor(contributor_id=contributor_id, display_name=contributor_id)
            self.session.add(contributor)
        total = contributor.record_approval()
        self.session.flush()
        return total

    def count(self) -> int:
        stmt = select(func.count()).select_from(contributor_table)
        return self.session.execute(stmt).scalar_one()

    def leaderboard(self, *, limit: int = 10) -> list[ContributorStanding]:
        if limit <= 0:
            return []
        stmt = (
            select(Contributor)
            .order_by(
                contributor_table.c.total_contributions.desc(),
                contributor_table.c.created_at.asc(),
                contributor_table.c.contributor_id.asc(),
            )
            .limit(limit)
        )
        contributors = cast(list[Contributor], self.session.execute(stmt).scalars().all())
        return [
            ContributorStanding(
                contributor_id=contributor.contributor_id,
                display_name=contributor.display_name,
                total_contributions=contributor.total_contributions,
                joined_at=contributor.created_at,
            )
            for contributor in contributors
        ]

    def _by_email(self, email: str) -> Contributor | None:
        stmt = select(Contributor).where(contributor_table.c.email == email)
        return self.session.execute(stmt).scalar_one_or_none()
