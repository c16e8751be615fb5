"""Domain error taxonomy surfaced to callers."""

from __future__ import annotations


class ModerationError(RuntimeError):
    """Base class for contribution pipeline failures.

    ``reason`` is the human-readable message reported per item by bulk operations.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SubmissionValidationError(ModerationError):
    """Payload is malformed or the contribution type is unknown."""


class NotFoundError(ModerationError):
    """Referenced contribution does not exist."""


class InvalidTransitionError(ModerationError):
    """Contribution already left the pending state."""


class MergeFailureError(ModerationError):
    """Merge precondition not met; nothing was written."""


class PersistenceError(ModerationError):
    """Reading or writing durable state failed."""


class SourceFormatError(ValueError):
    """A raw source document does not have the expected shape."""


class ReconciliationBlockedError(RuntimeError):
    """A reconciliation run raised blocking data-quality alarms and was not persisted."""


class AuthorizationError(ModerationError):
    """Credential rejected or principal lacks the moderator role."""
