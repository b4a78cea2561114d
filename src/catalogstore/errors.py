# ABOUTME: Exception taxonomy shared by every catalogstore component.
# ABOUTME: Validation, not-found, conflict, storage, and cancellation errors.


class CatalogError(Exception):
    """Base class for all catalogstore errors."""


class ValidationError(CatalogError):
    """Raised when caller input is missing or malformed.

    Detected before any mutation, so nothing has been written when this is raised.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class NotFoundError(CatalogError):
    """Raised when an item or category does not exist."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class ConflictError(CatalogError):
    """Raised by a backend when a concurrent writer created the same category first.

    Backends retry the operation as a lookup; this never reaches callers.
    """


class StorageError(CatalogError):
    """Raised when the database, document file, or blob directory fails."""


class OperationCancelled(CatalogError):
    """Raised when the caller's cancellation event is set mid-operation."""
