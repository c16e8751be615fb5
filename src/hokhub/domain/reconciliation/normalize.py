"""Source normalization stage.

Responsibilities of this stage:
- turn one raw source document into partial hero records keyed by hero id
- keep only the fields that source is authoritative for
- drop records without a display name (with a warning), never guess one

Concrete per-source translators live in the adapters; this module owns the
dispatch contract and the value cleaning rules they share.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import ZERO_PERCENT, SourceTag

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hokhub.domain.ports import RawSourceDocument

    from .contracts import NormalizedSource

log = logging.getLogger(__name__)


class Normalizer(Protocol):
    """Translate one raw document of a known source into partial records."""

    def __call__(self, document: RawSourceDocument) -> NormalizedSource: ...


@dataclass(slots=True)
class SourceNormalizer:
    """Dispatch raw documents to the normalizer registered for their source tag."""

    normalizers: Mapping[SourceTag, Normalizer] = field(
        default_factory=dict[SourceTag, Normalizer]
    )

    def __call__(self, document: RawSourceDocument) -> NormalizedSource:
        normalizer = self.normalizers.get(document.source)
        if normalizer is None:
            raise SourceFormatError(f"No normalizer registered for source {document.source}")
        normalized = normalizer(document)
        log.info(
            "Normalized %s: keyed=%s, unkeyed=%s, dropped=%s",
            document.source,
            len(normalized.by_id),
            len(normalized.unkeyed),
            normalized.dropped,
        )
        return normalized


def clean_text(value: object) -> str | None:
    """Strip strings and map blanks to ``None``; other values pass through as text."""

    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def format_percentage(value: object) -> str:
    """Render a ratio as a whole percentage string.

    Fractions in ``[0, 1]`` are scaled by 100, larger numbers are taken as
    percentage points. Strings already carrying ``%`` are kept. Anything else is
    ``"0%"``.
    """

    if isinstance(value, bool):
        return ZERO_PERCENT
    if isinstance(value, (int, float)):
        if math.isnan(value) or value < 0:
            return ZERO_PERCENT
        points = value * 100 if value <= 1 else value
        return f"{math.floor(points + 0.5)}%"
    if isinstance(value, str) and "%" in value:
        return value.strip()
    return ZERO_PERCENT
