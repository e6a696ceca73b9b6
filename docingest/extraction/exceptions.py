class ExtractionError(Exception):
    """Raised when usable text cannot be extracted from a document."""


class UnsupportedFormatError(ExtractionError):
    """Raised when no extractor is registered for a document's MIME type."""
