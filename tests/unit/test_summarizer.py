"""Tests for the Summarizer (AI-powered summaries)."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docingest.summarization.exceptions import SummarizationError, SummarizationNetworkError
from docingest.summarization.summarizer import Summarizer


def _make_summarizer(client: MagicMock, **kwargs: object) -> Summarizer:
    return Summarizer(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


class TestSummarizeSuccess:
    def test_returns_stripped_summary(self) -> None:
        client = MagicMock()
        client.create_chat_completion.return_value = "  A concise summary.  \n"

        assert _make_summarizer(client).summarize("text") == "A concise summary."

    def test_passes_document_text_to_prompt(self) -> None:
        client = MagicMock()
        client.create_chat_completion.return_value = "ok"

        _make_summarizer(client).summarize("clinical {input} with braces")

        user_prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "clinical {input} with braces" in user_prompt

    def test_calls_ai_with_model_and_system_prompt(self) -> None:
        client = MagicMock()
        client.create_chat_completion.return_value = "ok"

        _make_summarizer(client).summarize("text")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["system_prompt"]

    def test_clamps_temperature(self) -> None:
        client = MagicMock()
        client.create_chat_completion.return_value = "ok"

        _make_summarizer(client, temperature=5.0).summarize("text")

        assert client.create_chat_completion.call_args.kwargs["temperature"] == 1.0

    def test_uses_custom_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("TL;DR: {document_text}")
        client = MagicMock()
        client.create_chat_completion.return_value = "ok"

        _make_summarizer(client, prompt_template_path=template).summarize("body")

        assert client.create_chat_completion.call_args.kwargs["user_prompt"] == "TL;DR: body"


class TestSummarizeFailure:
    def test_empty_answer_raises(self) -> None:
        client = MagicMock()
        client.create_chat_completion.return_value = "   "

        with pytest.raises(SummarizationError, match="empty summary"):
            _make_summarizer(client).summarize("text")

    def test_propagates_network_errors(self) -> None:
        client = MagicMock()
        client.create_chat_completion.side_effect = SummarizationNetworkError("down")

        with pytest.raises(SummarizationNetworkError):
            _make_summarizer(client).summarize("text")
