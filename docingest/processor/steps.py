from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.extraction.exceptions import ExtractionError
from docingest.extraction.factory import ExtractorRegistry
from docingest.ingestion.exceptions import InvalidInputError
from docingest.logging.logger import Log
from docingest.processor.pipeline import PipelineContext, PipelineStep
from docingest.storage.base import BaseObjectStore
from docingest.summarization.base import BaseSummarizer
from docingest.text.cleaning import clean_text, take_segments, truncate_text
from docingest.text.segmentation import segment


class LoadDocumentStep(PipelineStep):
    def __init__(
        self,
        doc_repo: DocumentsRepository,
        object_store: BaseObjectStore,
    ) -> None:
        self._doc_repo = doc_repo
        self._object_store = object_store

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._doc_repo.find_by_id(context.ticket.document_id)
        raw_bytes = self._object_store.fetch(document.storage_key)
        if not raw_bytes:
            raise InvalidInputError("The downloaded file is empty")
        context.document = document
        context.raw_bytes = raw_bytes
        Log.info(f"Loaded {len(raw_bytes)} bytes for document {document.id}")
        return context


class ExtractTextStep(PipelineStep):
    """Extract, clean and bound the document text.

    Text shorter than ``min_text_chars`` fails the attempt: it usually means an
    image-only scan. Text longer than ``max_text_chars`` is cut, not summarized.
    """

    def __init__(
        self,
        extractors: ExtractorRegistry,
        min_text_chars: int,
        max_text_chars: int,
    ) -> None:
        self._extractors = extractors
        self._min_text_chars = min_text_chars
        self._max_text_chars = max_text_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before extraction")
        extractor = self._extractors.for_mime_type(context.document.mime_type)
        text = clean_text(extractor.extract(context.raw_bytes))
        if len(text) < self._min_text_chars:
            raise ExtractionError(
                "Not enough text could be extracted from the document. "
                "It may be image-based or contain no text."
            )
        context.extracted_text = truncate_text(text, self._max_text_chars)
        Log.info(
            f"Extracted {len(text)} chars from document {context.document.id}"
            f" (stored {len(context.extracted_text)})"
        )
        return context


class SegmentTextStep(PipelineStep):
    def __init__(self, target_chars: int) -> None:
        self._target_chars = target_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        context.segments = segment(context.extracted_text, self._target_chars)
        Log.debug(
            f"Split document {context.ticket.document_id} into {len(context.segments)} segments"
        )
        return context


class SummarizeStep(PipelineStep):
    """Summarize the leading whole segments that fit the input budget."""

    def __init__(self, summarizer: BaseSummarizer, input_chars: int) -> None:
        self._summarizer = summarizer
        self._input_chars = input_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        context.summary_input = take_segments(context.segments, self._input_chars)
        context.summary = self._summarizer.summarize(context.summary_input)
        Log.info(f"Summarized document {context.ticket.document_id}")
        return context


class PersistDoneStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        written = self._doc_repo.mark_done(
            context.ticket,
            text_content=context.extracted_text,
            summary=context.summary,
        )
        if written:
            Log.info(f"Document {context.ticket.document_id} marked as done")
        else:
            Log.warning(
                f"Attempt {context.ticket.attempt} of document "
                f"{context.ticket.document_id} was superseded; result discarded"
            )
        return context
