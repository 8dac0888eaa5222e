class StoreError(Exception):
    """Base exception for document store failures."""


class DocumentNotFoundError(StoreError):
    """Raised when no document exists for the given URL key."""
