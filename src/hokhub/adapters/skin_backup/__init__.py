"""Skin backup snapshot adapter."""

from __future__ import annotations

from .schema import BackupHeroRef, BackupSkinPayload
from .translator import normalize_skin_backup_document

__all__ = ["BackupHeroRef", "BackupSkinPayload", "normalize_skin_backup_document"]
