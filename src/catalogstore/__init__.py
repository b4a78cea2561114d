# ABOUTME: catalogstore - durable item catalog with content-addressed images.
# ABOUTME: Exposes the CatalogStore facade and its error types.

from catalogstore.core.store import CatalogStore, open_store
from catalogstore.errors import (
    CatalogError,
    NotFoundError,
    OperationCancelled,
    StorageError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "CatalogStore",
    "NotFoundError",
    "OperationCancelled",
    "StorageError",
    "ValidationError",
    "open_store",
]
