"""Error taxonomy shared by the stores and the API layer."""

from __future__ import annotations


class ShoplistError(Exception):
    """Base class for failures reported to API callers."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(ShoplistError, ValueError):
    """Missing or malformed input, including an update that sets no fields."""

    status_code = 400


class NotFoundError(ShoplistError, LookupError):
    """The targeted row does not exist."""

    status_code = 404


class ConflictError(ShoplistError):
    """The write would violate a uniqueness rule (duplicate catalog name)."""

    status_code = 409


class StoreError(ShoplistError):
    """The underlying database failed; reported to callers generically."""

    status_code = 500


__all__ = [
    "ShoplistError",
    "InvalidInputError",
    "NotFoundError",
    "ConflictError",
    "StoreError",
]
