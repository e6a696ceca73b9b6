from concurrent.futures import Future, ThreadPoolExecutor

from docingest.database.models import ProcessingTicket
from docingest.logging.logger import Log
from docingest.worker.job_runner import JobRunner


class BackgroundDispatcher:
    """Fire-and-forget execution of processing attempts on a thread pool.

    A ticket that cannot be scheduled stays 'pending' in the database and is
    picked up later by the poll loop.
    """

    def __init__(self, job_runner: JobRunner, max_workers: int = 4) -> None:
        self._job_runner = job_runner
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="docingest-worker",
        )

    def dispatch(self, ticket: ProcessingTicket) -> Future[bool] | None:
        """Schedule a ticket and return without waiting for it."""
        try:
            future = self._executor.submit(self._job_runner.claim_and_run, ticket)
        except RuntimeError as exc:
            Log.warning(
                f"Could not schedule document {ticket.document_id}: {exc}; "
                "it stays pending"
            )
            return None
        future.add_done_callback(self._log_crash)
        return future

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_crash(future: Future[bool]) -> None:
        exc = future.exception()
        if exc is not None:
            Log.error(f"Background processing crashed: {exc}")
