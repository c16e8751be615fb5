"""Ports for loading raw scraped source documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hokhub.domain.model import SourceTag


@dataclass(slots=True, frozen=True)
class RawSourceDocument:
    """Parsed JSON of one scraped snapshot, tagged with its source."""

    source: SourceTag
    content: object
    origin: str | None = None


@runtime_checkable
class SourceLoader(Protocol):
    """Callable port returning every available raw source document."""

    def __call__(self) -> tuple[RawSourceDocument, ...]: ...


__all__ = ["RawSourceDocument", "SourceLoader"]
