"""Example summarization client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseSummarizationClient and register the provider in SummarizerFactory.
"""

from typing import ClassVar

from docingest.summarization.client_base import BaseSummarizationClient


class ExampleClientAdapter(BaseSummarizationClient):
    """Example adapter that returns a fixed summary.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[str] = (
        "Example summary: the document was received and its text was extracted."
    )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return self.DEFAULT_RESPONSE
