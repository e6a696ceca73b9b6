class IngestionError(Exception):
    """Base exception for errors surfaced to callers of the ingestion service."""


class NotFoundError(IngestionError):
    """Raised when a referenced entity does not exist."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found in the database."""


class OwnerNotFoundError(NotFoundError):
    """Raised when a document is submitted for a user that does not exist."""


class ForbiddenError(IngestionError):
    """Raised when the caller does not own the document."""


class InvalidInputError(IngestionError):
    """Raised for empty, unsupported or otherwise unusable input."""
