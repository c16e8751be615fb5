"""Contribution payload validation and stored contribution codecs."""

from __future__ import annotations

from .translator import (
    contribution_from_document,
    contribution_to_document,
    history_record_from_document,
    history_record_to_document,
    parse_contribution_type,
    parse_payload,
    payload_to_document,
)

__all__ = [
    "contribution_from_document",
    "contribution_to_document",
    "history_record_from_document",
    "history_record_to_document",
    "parse_contribution_type",
    "parse_payload",
    "payload_to_document",
]
