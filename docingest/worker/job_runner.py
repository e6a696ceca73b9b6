from docingest.database.models import ProcessingTicket
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.extraction.exceptions import ExtractionError
from docingest.ingestion.exceptions import IngestionError
from docingest.logging.logger import Log
from docingest.processor.processor import Processor
from docingest.storage.exceptions import StorageError
from docingest.summarization.exceptions import SummarizationError

_DESCRIBED_ERRORS = (IngestionError, ExtractionError, SummarizationError, StorageError)


def describe_failure(exc: Exception) -> str:
    """Turn a worker exception into the message stored on the document."""
    detail = str(exc) or type(exc).__name__
    if isinstance(exc, _DESCRIBED_ERRORS):
        return detail
    return f"Document processing failed: {detail}"


class JobRunner:
    """Run one processing attempt and record its terminal state.

    Failures are final for the attempt; there is no automatic retry.
    """

    def __init__(self, processor: Processor, doc_repo: DocumentsRepository) -> None:
        self._processor = processor
        self._doc_repo = doc_repo

    def claim_and_run(self, ticket: ProcessingTicket) -> bool:
        """Claim a pending attempt, then run it. Returns False if not claimed."""
        if not self._doc_repo.claim(ticket):
            Log.info(
                f"Attempt {ticket.attempt} of document {ticket.document_id} "
                "already claimed or superseded, skipping"
            )
            return False
        self.run(ticket)
        return True

    def run(self, ticket: ProcessingTicket) -> None:
        """Execute an already claimed attempt with error handling."""
        try:
            self._processor.process(ticket)
        except Exception as exc:
            self._handle_failure(ticket, exc)

    def _handle_failure(self, ticket: ProcessingTicket, exc: Exception) -> None:
        message = describe_failure(exc)
        if isinstance(exc, _DESCRIBED_ERRORS):
            Log.error(f"Document {ticket.document_id} attempt {ticket.attempt} failed: {message}")
        else:
            Log.exception(
                f"Document {ticket.document_id} attempt {ticket.attempt} crashed: {message}"
            )
        try:
            written = self._doc_repo.mark_error(ticket, message)
        except Exception as write_exc:
            Log.exception(
                f"Could not record failure of document {ticket.document_id} "
                f"attempt {ticket.attempt}: {write_exc}"
            )
            return
        if not written:
            Log.warning(
                f"Attempt {ticket.attempt} of document {ticket.document_id} "
                "was superseded; failure not recorded"
            )
