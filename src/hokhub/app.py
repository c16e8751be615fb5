"""Application orchestration entry points."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from hokhub.adapters.json_store import FileModerationUnitOfWork
from hokhub.adapters.notifications import build_notifier
from hokhub.adapters.snapshots import SnapshotDirectoryLoader, build_source_normalizer
from hokhub.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyContributorUnitOfWork,
    is_started,
    startup,
)
from hokhub.adapters.submissions import parse_payload
from hokhub.config import (
    get_database_config,
    get_notification_config,
    get_source_config,
    get_storage_config,
)
from hokhub.domain.errors import AuthorizationError, ReconciliationBlockedError
from hokhub.domain.moderation import ContributionIdGenerator, ModerationService
from hokhub.domain.reconciliation import DEFAULT_POLICY, ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from hokhub.config import StorageConfig
    from hokhub.domain.model import Contribution, ContributionType, HistoryRecord
    from hokhub.domain.moderation import (
        ApprovalOutcome,
        BulkOutcome,
        ContributorUnitOfWorkFactory,
        RejectionOutcome,
    )
    from hokhub.domain.ports import (
        AuthVerifier,
        ContributorStanding,
        Notifier,
        Principal,
        SourceLoader,
    )
    from hokhub.domain.reconciliation import ReconciliationPolicy, ReconciliationResult

log = getLogger(__name__)

_NEW_ID = ContributionIdGenerator()


def start_contributor_ledger(*, storage: StorageConfig | None = None) -> None:
    """Initialise the SQLAlchemy adapter once per process."""

    if not is_started():
        startup(database_uri=get_database_config(storage=storage).uri)


def build_moderation_service(
    *,
    storage: StorageConfig | None = None,
    notifier: Notifier | None = None,
    contributors: ContributorUnitOfWorkFactory | None = None,
) -> ModerationService:
    """Wire the moderation service to the file store, ledger and notifier."""

    effective_storage = storage or get_storage_config()
    if contributors is None:
        start_contributor_ledger(storage=effective_storage)
        contributors = SqlAlchemyContributorUnitOfWork
    return ModerationService(
        unit_of_work=partial(FileModerationUnitOfWork, effective_storage),
        notifier=notifier or build_notifier(get_notification_config()),
        contributors=contributors,
        new_id=_NEW_ID,
    )


def reconcile_sources(
    *,
    snapshot_dir: Path | None = None,
    loader: SourceLoader | None = None,
    storage: StorageConfig | None = None,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
) -> ReconciliationResult:
    """Rebuild the merged store from the source snapshots and persist it.

    Raises ``ReconciliationBlockedError`` without writing anything when the run
    produced blocking data-quality alarms.
    """

    effective_storage = storage or get_storage_config()
    effective_loader = loader or SnapshotDirectoryLoader(
        snapshot_dir or get_source_config(storage=effective_storage).snapshot_dir
    )
    documents = effective_loader()
    log.info("Starting reconciliation over %s source snapshots", len(documents))

    engine = ReconciliationEngine(normalize=build_source_normalizer(), policy=policy)
    result = engine.reconcile(documents)
    for alarm in result.report.alarms:
        log.warning("Data quality alarm %s: %s", alarm.kind, alarm.message)
    if result.blocked:
        raise ReconciliationBlockedError(
            f"Reconciliation raised {len(result.report.blocking_alarms)} blocking alarm(s); "
            "merged store left unchanged"
        )

    with FileModerationUnitOfWork(effective_storage) as uow:
        uow.repositories.store.save(result.store)
        uow.commit()

    log.info(
        "Finished reconciliation: heroes=%s, dropped=%s, missing_analytics=%s",
        len(result.store),
        result.report.dropped_records,
        len(result.report.missing_analytics),
    )
    return result


def submit_contribution(
    contribution_type: str | ContributionType,
    raw: object,
    *,
    submitter_id: str | None = None,
    credential: str | None = None,
    verifier: AuthVerifier | None = None,
    service: ModerationService | None = None,
) -> str:
    """Validate and queue a contribution, returning its id.

    With a ``verifier`` the credential is mandatory and the verified principal
    replaces ``submitter_id``.
    """

    if verifier is not None:
        principal = verifier.verify(credential or "")
        if principal is None:
            raise AuthorizationError("Invalid or missing credential")
        submitter_id = principal.contributor_id
    payload = parse_payload(contribution_type, raw)
    contribution = (service or build_moderation_service()).submit(
        payload, submitter_id=submitter_id
    )
    return contribution.contribution_id


def list_pending(*, service: ModerationService | None = None) -> list[Contribution]:
    return (service or build_moderation_service()).list_pending()


def list_contributions_by_submitter(
    submitter_id: str, *, service: ModerationService | None = None
) -> list[Contribution]:
    return (service or build_moderation_service()).list_by_submitter(submitter_id)


def approve(
    contribution_id: str,
    *,
    principal: Principal | None = None,
    service: ModerationService | None = None,
) -> ApprovalOutcome:
    _require_moderator(principal)
    return (service or build_moderation_service()).approve(contribution_id)


def reject(
    contribution_id: str,
    *,
    principal: Principal | None = None,
    service: ModerationService | None = None,
) -> RejectionOutcome:
    _require_moderator(principal)
    return (service or build_moderation_service()).reject(contribution_id)


def approve_bulk(
    contribution_ids: Sequence[str],
    *,
    principal: Principal | None = None,
    service: ModerationService | None = None,
) -> BulkOutcome:
    _require_moderator(principal)
    return (service or build_moderation_service()).approve_bulk(contribution_ids)


def reject_bulk(
    contribution_ids: Sequence[str],
    *,
    principal: Principal | None = None,
    service: ModerationService | None = None,
) -> BulkOutcome:
    _require_moderator(principal)
    return (service or build_moderation_service()).reject_bulk(contribution_ids)


def get_history(
    *, limit: int | None = None, service: ModerationService | None = None
) -> list[HistoryRecord]:
    return (service or build_moderation_service()).get_history(limit=limit)


def register_contributor(
    *,
    display_name: str,
    email: str | None = None,
    unit_of_work_factory: ContributorUnitOfWorkFactory | None = None,
) -> str:
    """Create a contributor row and return its id."""

    if unit_of_work_factory is None:
        start_contributor_ledger()
        unit_of_work_factory = SqlAlchemyContributorUnitOfWork
    with unit_of_work_factory() as uow:
        contributor_id = uow.repositories.contributors.register(
            display_name=display_name, email=email
        )
        uow.commit()
    return contributor_id


def leaderboard(
    *,
    limit: int = 10,
    unit_of_work_factory: ContributorUnitOfWorkFactory | None = None,
) -> list[ContributorStanding]:
    if unit_of_work_factory is None:
        start_contributor_ledger()
        unit_of_work_factory = SqlAlchemyContributorUnitOfWork
    with unit_of_work_factory() as uow:
        return uow.repositories.contributors.leaderboard(limit=limit)


def _require_moderator(principal: Principal | None) -> None:
    # ``None`` means a trusted local caller such as the CLI
    if principal is not None and not principal.is_moderator:
        raise AuthorizationError(f"{principal.contributor_id} is not a moderator")
