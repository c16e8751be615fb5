"""Community contribution pipeline."""

from __future__ import annotations

from hokhub.domain.errors import (
    AuthorizationError,
    InvalidTransitionError,
    MergeFailureError,
    ModerationError,
    NotFoundError,
    PersistenceError,
    SubmissionValidationError,
)

from .history import HISTORY_LIMIT, prepend_record
from .ids import ContributionIdGenerator, utcnow
from .merge import MergeResult, apply_payload
from .service import (
    ApprovalOutcome,
    BulkItemResult,
    BulkOutcome,
    ContributorUnitOfWorkFactory,
    ModerationService,
    ModerationUnitOfWorkFactory,
    RejectionOutcome,
)

__all__ = [
    "HISTORY_LIMIT",
    "ApprovalOutcome",
    "AuthorizationError",
    "BulkItemResult",
    "BulkOutcome",
    "ContributionIdGenerator",
    "ContributorUnitOfWorkFactory",
    "InvalidTransitionError",
    "MergeFailureError",
    "MergeResult",
    "ModerationError",
    "ModerationService",
    "ModerationUnitOfWorkFactory",
    "NotFoundError",
    "PersistenceError",
    "RejectionOutcome",
    "SubmissionValidationError",
    "apply_payload",
    "prepend_record",
    "utcnow",
]
