from abc import ABC, abstractmethod


class BaseSummarizer(ABC):
    """Contract for all summarization adapters."""

    @abstractmethod
    def summarize(self, text: str) -> str:
        """Produce a short summary of document text.

        Args:
            text: Cleaned document text, already bounded in length.

        Returns:
            Non-empty summary text.

        Raises:
            SummarizationError: on any failure, including an empty answer.
        """
