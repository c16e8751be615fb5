"""Load scraped snapshot files and wire the per-source normalizers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from hokhub.adapters.camp import normalize_camp_document
from hokhub.adapters.skin_backup import normalize_skin_backup_document
from hokhub.adapters.world import normalize_world_document
from hokhub.domain.errors import SourceFormatError
from hokhub.domain.model import SourceTag
from hokhub.domain.ports import RawSourceDocument
from hokhub.domain.reconciliation import SourceNormalizer

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

SNAPSHOT_FILENAMES: Final[dict[SourceTag, str]] = {
    SourceTag.WORLD: "world-heroes-data.json",
    SourceTag.CAMP: "camp-heroes.json",
    SourceTag.SKIN_BACKUP: "hok-skins-data.json",
}


@dataclass(slots=True)
class SnapshotDirectoryLoader:
    """``SourceLoader`` reading one JSON file per source from a directory."""

    directory: Path
    filenames: dict[SourceTag, str] = field(default_factory=lambda: dict(SNAPSHOT_FILENAMES))

    def __call__(self) -> tuple[RawSourceDocument, ...]:
        documents: list[RawSourceDocument] = []
        for source, filename in self.filenames.items():
            path = self.directory / filename
            if not path.is_file():
                log.warning("Snapshot for %s not found at %s, skipping", source, path)
                continue
            documents.append(load_snapshot(path, source))
        return tuple(documents)


def load_snapshot(path: Path, source: SourceTag) -> RawSourceDocument:
    try:
        content: object = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SourceFormatError(f"Snapshot {path} is not valid JSON: {exc}") from exc
    return RawSourceDocument(source=source, content=content, origin=str(path))


def build_source_normalizer() -> SourceNormalizer:
    return SourceNormalizer(
        normalizers={
            SourceTag.WORLD: normalize_world_document,
            SourceTag.CAMP: normalize_camp_document,
            SourceTag.SKIN_BACKUP: normalize_skin_backup_document,
        }
    )
