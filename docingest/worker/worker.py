import time

from docingest.config.settings import Settings
from docingest.database.connection import get_connection
from docingest.database.models import ProcessingTicket
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.logging.logger import Log
from docingest.worker.job_runner import JobRunner


class Worker:
    """Poll loop: sleep -> claim pending document -> run."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after processing that many documents (for testing).
        """
        Log.info("Worker started, polling for pending documents")
        jobs_done = 0
        try:
            while True:
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                ticket = self._try_claim()
                if ticket:
                    self._job_runner.run(ticket)
                    jobs_done += 1
                else:
                    Log.debug("No pending documents, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _try_claim(self) -> ProcessingTicket | None:
        """Attempt to claim the next pending document. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._doc_repo.claim_next_pending(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None
