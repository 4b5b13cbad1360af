# backend/fishkeeper/errors.py
"""Domain errors.

ルータ側で HTTPException に変換する。検索エンジンは例外を投げない。
"""


class FishKeeperError(Exception):
    pass


class ValidationError(FishKeeperError, ValueError):
    """Annotation form fails the non-empty-after-trim rule."""


class StoreError(FishKeeperError):
    """Insert / delete / commit against the record store failed."""


class DuplicateRecordError(StoreError):
    """The species is already in the saved collection."""


class CatalogError(FishKeeperError):
    """Catalog file is missing or malformed."""
