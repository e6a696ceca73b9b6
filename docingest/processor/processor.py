from collections.abc import Sequence

from docingest.config.settings import Settings
from docingest.database.models import ProcessingTicket
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.extraction.factory import ExtractorFactory, ExtractorRegistry
from docingest.logging.logger import Log
from docingest.processor.pipeline import PipelineContext, PipelineStep
from docingest.processor.steps import (
    ExtractTextStep,
    LoadDocumentStep,
    PersistDoneStep,
    SegmentTextStep,
    SummarizeStep,
)
from docingest.storage.base import BaseObjectStore
from docingest.storage.factory import ObjectStoreFactory
from docingest.summarization.base import BaseSummarizer
from docingest.summarization.factory import SummarizerFactory


class Processor:
    """Runs the processing steps for one claimed attempt.

    Pipeline: load -> extract -> segment -> summarize -> persist.
    Any step may raise; the caller records the failure.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(self, ticket: ProcessingTicket) -> PipelineContext:
        Log.info(
            f"Processing document {ticket.document_id} (attempt {ticket.attempt})"
        )
        context = PipelineContext(ticket=ticket)
        for step in self._steps:
            context = step.run(context)
        return context


def build_processor(
    settings: Settings,
    doc_repo: DocumentsRepository,
    object_store: BaseObjectStore | None = None,
    extractors: ExtractorRegistry | None = None,
    summarizer: BaseSummarizer | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    if object_store is None:
        object_store = ObjectStoreFactory.create(settings)
    if extractors is None:
        extractors = ExtractorFactory.create(settings)
    if summarizer is None:
        summarizer = SummarizerFactory.create(settings)
    steps: list[PipelineStep] = [
        LoadDocumentStep(doc_repo=doc_repo, object_store=object_store),
        ExtractTextStep(
            extractors=extractors,
            min_text_chars=settings.min_text_chars,
            max_text_chars=settings.max_text_chars,
        ),
        SegmentTextStep(target_chars=settings.segment_target_chars),
        SummarizeStep(summarizer=summarizer, input_chars=settings.summary_input_chars),
        PersistDoneStep(doc_repo=doc_repo),
    ]
    return Processor(steps)
