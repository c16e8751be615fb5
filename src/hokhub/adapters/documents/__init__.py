"""JSON document schemas and codecs for the merged store."""

from __future__ import annotations

from .codec import (
    dumps,
    hero_from_document,
    hero_to_document,
    hero_values_from_document,
    skin_fields_from_document,
    skin_fields_to_document,
    skin_from_document,
    skin_to_document,
    store_from_document,
    store_to_document,
)
from .schema import (
    HeroDocument,
    HeroFieldsDocument,
    MergedStoreDocument,
    SkinDocument,
    SkinFieldsDocument,
)

__all__ = [
    "HeroDocument",
    "HeroFieldsDocument",
    "MergedStoreDocument",
    "SkinDocument",
    "SkinFieldsDocument",
    "dumps",
    "hero_from_document",
    "hero_to_document",
    "hero_values_from_document",
    "skin_fields_from_document",
    "skin_fields_to_document",
    "skin_from_document",
    "skin_to_document",
    "store_from_document",
    "store_to_document",
]
