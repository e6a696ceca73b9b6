from pathlib import Path

import pytest

from docingest.config.settings import Settings
from docingest.database.repositories.documents_repository import DocumentsRepository
from docingest.ingestion.models import DocumentUpload, ParseStatus
from docingest.ingestion.service import build_ingestion_service
from docingest.processor.processor import build_processor
from docingest.storage.local_file_store import LocalFileStore
from docingest.summarization.example_client_adapter import ExampleClientAdapter
from docingest.summarization.summarizer import Summarizer
from docingest.worker.job_runner import JobRunner
from docingest.worker.worker import Worker


class _NoopDispatcher:
    def dispatch(self, ticket: object) -> None:
        return None

    def close(self, wait: bool = True) -> None:
        return None


@pytest.mark.integration
class TestIngestionLifecycle:
    def test_poll_worker_finishes_pending_document(
        self,
        test_settings: Settings,
        seed_owner: int,
        files_root: Path,
        resume_on_disk: DocumentUpload,
    ) -> None:
        repo = DocumentsRepository()
        service = build_ingestion_service(test_settings, repo, dispatcher=_NoopDispatcher())
        document_id = service.submit(resume_on_disk, seed_owner)
        service.request_processing(document_id, seed_owner)
        assert service.get_status(document_id, seed_owner).parse_status is ParseStatus.PENDING

        processor = build_processor(
            test_settings,
            repo,
            object_store=LocalFileStore(files_root),
            summarizer=Summarizer(client=ExampleClientAdapter(), model="example"),
        )
        worker = Worker(repo, JobRunner(processor, repo), test_settings)
        worker.run(max_jobs=1)

        document = service.get_status(document_id, seed_owner)
        assert document.parse_status is ParseStatus.DONE
        assert document.summary == ExampleClientAdapter.DEFAULT_RESPONSE
        assert document.text_content is not None
