"""
Exception types for the recipe catalog.

Only network-level failures are raised as errors. Malformed records and
unparseable query parameters are handled where they are read (see
catalog.fields and catalog.view_state) and never surface as exceptions.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for all catalog errors."""


class RecordFetchError(CatalogError):
    """
    Raised when fetching the collection or a single recipe fails.

    Covers timeouts, connection errors, non-2xx responses and response bodies
    that do not carry the expected {"data": ...} envelope.

    Attributes:
        operation: "fetch_all" or "fetch_by_id"
        record_id: Recipe identity for single-record fetches, otherwise None
        status_code: HTTP status code when the backend answered, otherwise None
    """

    def __init__(
        self,
        message: str,
        operation: str,
        record_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.record_id = record_id
        self.status_code = status_code


class FavoritesError(CatalogError):
    """Raised when a favorites endpoint call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FavoritesAuthError(FavoritesError):
    """Raised when a favorites call has no bearer token or the token is rejected."""
