class IngestionError(Exception):
    """Raised when the blog listing page cannot be fetched."""
