import threading
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from docingest.database.models import ProcessingTicket
from docingest.ingestion.exceptions import DocumentNotFoundError, InvalidInputError
from docingest.ingestion.models import (
    Document,
    DocumentListing,
    DocumentUpload,
    ParseStatus,
    state_from_row,
)


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


class InMemoryDocumentsRepository:
    """Thread-safe stand-in for DocumentsRepository with the same guards."""

    def __init__(self, owners: set[int] | None = None) -> None:
        self._owners = owners if owners is not None else {10}
        self._rows: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    def owner_exists(self, user_id: int) -> bool:
        return user_id in self._owners

    def insert(self, document_id: str, user_id: int, upload: DocumentUpload) -> None:
        with self._lock:
            self._clock += timedelta(seconds=1)
            self._rows[document_id] = {
                "id": document_id,
                "user_id": user_id,
                "original_name": upload.original_name,
                "storage_key": upload.storage_key,
                "mime_type": upload.mime_type,
                "size_bytes": upload.size_bytes,
                "parse_status": "none",
                "error_message": None,
                "text_content": None,
                "summary": None,
                "attempt": 0,
                "created_at": self._clock,
            }

    def find_by_id(self, document_id: str) -> Document:
        with self._lock:
            row = self._rows.get(document_id) if _is_uuid(document_id) else None
            if row is None:
                raise DocumentNotFoundError(f"Document {document_id} not found")
            row = dict(row)
        return Document(
            id=row["id"],
            user_id=row["user_id"],
            original_name=row["original_name"],
            storage_key=row["storage_key"],
            mime_type=row["mime_type"],
            size_bytes=row["size_bytes"],
            state=state_from_row(
                row["parse_status"],
                error_message=row["error_message"],
                text_content=row["text_content"],
                summary=row["summary"],
            ),
            attempt=row["attempt"],
            created_at=row["created_at"],
        )

    def list_by_owner(self, user_id: int) -> list[DocumentListing]:
        with self._lock:
            rows = [dict(r) for r in self._rows.values() if r["user_id"] == user_id]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [
            DocumentListing(
                id=r["id"],
                original_name=r["original_name"],
                mime_type=r["mime_type"],
                size_bytes=r["size_bytes"],
                parse_status=ParseStatus(r["parse_status"]),
                has_summary=r["summary"] is not None,
                created_at=r["created_at"],
            )
            for r in rows
        ]

    def mark_pending(self, document_id: str) -> ProcessingTicket:
        with self._lock:
            row = self._rows.get(document_id) if _is_uuid(document_id) else None
            if row is None:
                raise DocumentNotFoundError(f"Document {document_id} not found")
            row.update(
                parse_status="pending",
                error_message=None,
                text_content=None,
                summary=None,
                attempt=row["attempt"] + 1,
            )
            return ProcessingTicket(document_id=document_id, attempt=row["attempt"])

    def claim(self, ticket: ProcessingTicket) -> bool:
        return self._transition(ticket, "pending", parse_status="processing")

    def mark_done(self, ticket: ProcessingTicket, text_content: str, summary: str) -> bool:
        return self._transition(
            ticket,
            "processing",
            parse_status="done",
            text_content=text_content,
            summary=summary,
            error_message=None,
        )

    def mark_error(self, ticket: ProcessingTicket, error_message: str) -> bool:
        return self._transition(
            ticket,
            "processing",
            parse_status="error",
            error_message=error_message,
            text_content=None,
            summary=None,
        )

    def update_summary(self, document_id: str, summary: str) -> None:
        with self._lock:
            row = self._rows.get(document_id) if _is_uuid(document_id) else None
            if row is None:
                raise DocumentNotFoundError(f"Document {document_id} not found")
            if row["parse_status"] != "done":
                raise InvalidInputError(
                    f"Document {document_id} is {row['parse_status']}, not done"
                )
            row["summary"] = summary

    def _transition(
        self, ticket: ProcessingTicket, expected_status: str, **values: Any
    ) -> bool:
        with self._lock:
            row = self._rows.get(ticket.document_id)
            if (
                row is None
                or row["attempt"] != ticket.attempt
                or row["parse_status"] != expected_status
            ):
                return False
            row.update(values)
            return True


@pytest.fixture()
def memory_repo() -> InMemoryDocumentsRepository:
    return InMemoryDocumentsRepository()
