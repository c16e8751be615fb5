"""Camp-site snapshot adapter."""

from __future__ import annotations

from .schema import CampHeroPayload
from .translator import normalize_camp_document

__all__ = ["CampHeroPayload", "normalize_camp_document"]
