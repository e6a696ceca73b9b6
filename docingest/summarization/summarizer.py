"""AI-powered document summarizer."""

from pathlib import Path

from docingest.logging.logger import Log
from docingest.summarization.base import BaseSummarizer
from docingest.summarization.client_base import BaseSummarizationClient
from docingest.summarization.exceptions import SummarizationError
from docingest.summarization.prompt_loader import load_prompt_template, load_system_prompt


class Summarizer(BaseSummarizer):
    """Summarizes document text with an AI provider."""

    def __init__(
        self,
        *,
        client: BaseSummarizationClient,
        model: str,
        temperature: float = 0.2,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    def summarize(self, text: str) -> str:
        prompt = self._prompt_template.format(document_text=text)
        Log.debug(f"Summary prompt length: {len(prompt)} chars")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )

        summary = raw_response.strip()
        if not summary:
            raise SummarizationError("AI returned an empty summary")

        Log.info(f"Summary complete: {len(summary)} chars")
        return summary
