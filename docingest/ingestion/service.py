from typing import Protocol
from uuid import uuid4

from docingest.config.settings import Settings
from docingest.database.models import ProcessingTicket
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.extraction.factory import ExtractorFactory, ExtractorRegistry
from docingest.ingestion.exceptions import (
    ForbiddenError,
    InvalidInputError,
    OwnerNotFoundError,
)
from docingest.ingestion.filenames import normalize_original_name
from docingest.ingestion.models import (
    Document,
    DocumentListing,
    DocumentUpload,
    ParseStatus,
)
from docingest.logging.logger import Log
from docingest.processor.processor import build_processor
from docingest.worker.dispatcher import BackgroundDispatcher
from docingest.worker.job_runner import JobRunner

MIN_SUMMARY_CHARS = 20


class Dispatcher(Protocol):
    def dispatch(self, ticket: ProcessingTicket) -> object: ...

    def close(self, wait: bool = True) -> None: ...


class IngestionService:
    """Owner-facing operations of the document processing state machine.

    ``request_processing`` only records the 'pending' transition and hands the
    attempt to the dispatcher; extraction and summarization happen elsewhere.
    Their failures are never raised here, they show up on ``get_status``.
    """

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        dispatcher: Dispatcher,
        extractors: ExtractorRegistry,
    ) -> None:
        self._doc_repo = doc_repo
        self._dispatcher = dispatcher
        self._extractors = extractors

    def submit(self, upload: DocumentUpload, owner_id: int) -> str:
        """Register an uploaded file in state 'none' and return its ID.

        Raises:
            OwnerNotFoundError: if the owner does not exist.
            InvalidInputError: for empty files, missing storage keys or
                unsupported MIME types.
        """
        if not self._doc_repo.owner_exists(owner_id):
            raise OwnerNotFoundError(f"User {owner_id} not found")
        if not upload.storage_key:
            raise InvalidInputError("storage key is required")
        if upload.size_bytes <= 0:
            raise InvalidInputError("uploaded file is empty")
        if not self._extractors.supports(upload.mime_type):
            raise InvalidInputError(f"Unsupported document format '{upload.mime_type}'")

        document_id = str(uuid4())
        normalized = DocumentUpload(
            original_name=normalize_original_name(upload.original_name),
            storage_key=upload.storage_key,
            mime_type=upload.mime_type.lower(),
            size_bytes=upload.size_bytes,
        )
        self._doc_repo.insert(document_id, owner_id, normalized)
        Log.info(f"Document {document_id} submitted by user {owner_id}")
        return document_id

    def request_processing(self, document_id: str, owner_id: int) -> ProcessingTicket:
        """Move the document to 'pending' and schedule a new attempt.

        Allowed from every state; a newer request supersedes older attempts.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            ForbiddenError: if ``owner_id`` does not own the document.
        """
        self.get_status(document_id, owner_id)
        ticket = self._doc_repo.mark_pending(document_id)
        Log.info(f"Document {document_id} pending (attempt {ticket.attempt})")
        self._dispatcher.dispatch(ticket)
        return ticket

    def get_status(self, document_id: str, owner_id: int) -> Document:
        """Return the current snapshot of an owned document.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            ForbiddenError: if ``owner_id`` does not own the document.
        """
        document = self._doc_repo.find_by_id(document_id)
        if document.user_id != owner_id:
            raise ForbiddenError(f"Document {document_id} is not owned by user {owner_id}")
        return document

    def list_documents(self, owner_id: int) -> list[DocumentListing]:
        return self._doc_repo.list_by_owner(owner_id)

    def update_summary(self, document_id: str, owner_id: int, summary: str) -> None:
        """Replace the generated summary of a finished document.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            ForbiddenError: if ``owner_id`` does not own the document.
            InvalidInputError: if the summary is too short or the document
                is not 'done'.
        """
        summary = summary.strip()
        if len(summary) < MIN_SUMMARY_CHARS:
            raise InvalidInputError(
                f"summary must be at least {MIN_SUMMARY_CHARS} characters"
            )
        document = self.get_status(document_id, owner_id)
        if document.parse_status is not ParseStatus.DONE:
            raise InvalidInputError(
                f"Document {document_id} is {document.parse_status.value}, not done"
            )
        self._doc_repo.update_summary(document_id, summary)

    def close(self, wait: bool = True) -> None:
        """Stop the dispatcher. Attempts it never started stay 'pending'."""
        self._dispatcher.close(wait=wait)


def build_ingestion_service(
    settings: Settings,
    doc_repo: DocumentsRepository,
    dispatcher: Dispatcher | None = None,
) -> IngestionService:
    """Wire the service; without a dispatcher, attempts run on a local thread pool.

    Call ``close()`` on the returned service to shut that pool down.
    """
    Log.configure(settings.log_level)
    extractors = ExtractorFactory.create(settings)
    if dispatcher is None:
        processor = build_processor(settings, doc_repo, extractors=extractors)
        dispatcher = BackgroundDispatcher(
            JobRunner(processor, doc_repo),
            max_workers=settings.worker_pool_size,
        )
    return IngestionService(
        doc_repo=doc_repo,
        dispatcher=dispatcher,
        extractors=extractors,
    )
