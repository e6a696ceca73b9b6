from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            data: Raw file content as fetched from the object store.

        Returns:
            Extracted text as a single string, stripped of surrounding whitespace.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """
