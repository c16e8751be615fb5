"""World-site snapshot adapter."""

from __future__ import annotations

from .schema import WorldDocument, WorldHeroPayload, WorldSkinPayload
from .translator import normalize_world_document

__all__ = [
    "WorldDocument",
    "WorldHeroPayload",
    "WorldSkinPayload",
    "normalize_world_document",
]
