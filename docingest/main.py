from docingest.config.settings import Settings
from docingest.database.connection import close_pool, init_pool
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.logging.logger import Log
from docingest.processor.processor import build_processor
from docingest.worker.job_runner import JobRunner
from docingest.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start poll loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        doc_repo = DocumentsRepository()
        processor = build_processor(settings, doc_repo)
        job_runner = JobRunner(processor, doc_repo)
        worker = Worker(doc_repo, job_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
