import uuid
from typing import Any

import psycopg
from psycopg.rows import dict_row

from docingest.database.connection import get_connection
from docingest.database.models import ProcessingTicket
from docingest.ingestion.exceptions import DocumentNotFoundError, InvalidInputError
from docingest.ingestion.models import (
    Document,
    DocumentListing,
    DocumentUpload,
    ParseStatus,
    state_from_row,
)


def _require_document_id(document_id: str) -> None:
    """Reject IDs that cannot name a row before they reach the UUID column."""
    try:
        uuid.UUID(document_id)
    except (TypeError, ValueError, AttributeError) as exc:
        raise DocumentNotFoundError(f"Document {document_id} not found") from exc


class DocumentsRepository:
    """Database operations for the documents table.

    Every state transition is a single conditional UPDATE, so each one is
    atomic on its own row. Worker-side transitions are guarded by ``attempt``
    so a superseded worker cannot overwrite a newer attempt.
    """

    def owner_exists(self, user_id: int) -> bool:
        """Check that a user row exists."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM users WHERE id = %s", (user_id,))
                row = cur.fetchone()
        return row is not None

    def insert(self, document_id: str, user_id: int, upload: DocumentUpload) -> None:
        """Insert a freshly submitted document in state 'none'."""
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO documents
                (id, user_id, original_name, storage_key, mime_type, size_bytes,
                 parse_status, attempt, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, 'none', 0, NOW(), NOW())
                """,
                (
                    document_id,
                    user_id,
                    upload.original_name,
                    upload.storage_key,
                    upload.mime_type,
                    upload.size_bytes,
                ),
            )
            conn.commit()

    def find_by_id(self, document_id: str) -> Document:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        _require_document_id(document_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, original_name, storage_key, mime_type,
                           size_bytes, parse_status, error_message, text_content,
                           summary, attempt, created_at
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return Document(
            id=str(row["id"]),
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
        """List a user's documents, newest first, without their text."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, original_name, mime_type, size_bytes, parse_status,
                           summary IS NOT NULL AS has_summary, created_at
                    FROM documents
                    WHERE user_id = %s
                    ORDER BY created_at DESC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()

        return [
            DocumentListing(
                id=str(row["id"]),
                original_name=row["original_name"],
                mime_type=row["mime_type"],
                size_bytes=row["size_bytes"],
                parse_status=ParseStatus(row["parse_status"]),
                has_summary=bool(row["has_summary"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def mark_pending(self, document_id: str) -> ProcessingTicket:
        """Restart processing: move to 'pending', clear results, bump attempt.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        _require_document_id(document_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET parse_status = 'pending', error_message = NULL,
                        text_content = NULL, summary = NULL,
                        attempt = attempt + 1, updated_at = NOW()
                    WHERE id = %s
                    RETURNING attempt
                    """,
                    (document_id,),
                )
                row = cur.fetchone()
                if row is None:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
        return ProcessingTicket(document_id=document_id, attempt=row[0])

    def claim(self, ticket: ProcessingTicket) -> bool:
        """Move 'pending' to 'processing' for exactly this attempt.

        Returns False when another worker already claimed the attempt or a
        newer attempt superseded it.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET parse_status = 'processing', updated_at = NOW()
                    WHERE id = %s AND attempt = %s AND parse_status = 'pending'
                    """,
                    (ticket.document_id, ticket.attempt),
                )
                claimed = cur.rowcount == 1
            conn.commit()
        return claimed

    def claim_next_pending(self, conn: psycopg.Connection[Any]) -> ProcessingTicket | None:
        """Claim the oldest pending document using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, attempt
                FROM documents
                WHERE parse_status = 'pending'
                ORDER BY updated_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE documents
            SET parse_status = 'processing', updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return ProcessingTicket(document_id=str(row["id"]), attempt=row["attempt"])

    def mark_done(self, ticket: ProcessingTicket, text_content: str, summary: str) -> bool:
        """Write the successful terminal state for a claimed attempt.

        Returns False when the attempt was superseded and nothing was written.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET parse_status = 'done', text_content = %s, summary = %s,
                        error_message = NULL, updated_at = NOW()
                    WHERE id = %s AND attempt = %s AND parse_status = 'processing'
                    """,
                    (text_content, summary, ticket.document_id, ticket.attempt),
                )
                written = cur.rowcount == 1
            conn.commit()
        return written

    def mark_error(self, ticket: ProcessingTicket, error_message: str) -> bool:
        """Write the failed terminal state for a claimed attempt.

        Returns False when the attempt was superseded and nothing was written.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET parse_status = 'error', error_message = %s,
                        text_content = NULL, summary = NULL, updated_at = NOW()
                    WHERE id = %s AND attempt = %s AND parse_status = 'processing'
                    """,
                    (error_message, ticket.document_id, ticket.attempt),
                )
                written = cur.rowcount == 1
            conn.commit()
        return written

    def update_summary(self, document_id: str, summary: str) -> None:
        """Replace the summary of a finished document.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            InvalidInputError: if the document is not 'done' any more.
        """
        _require_document_id(document_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET summary = %s, updated_at = NOW()
                    WHERE id = %s AND parse_status = 'done'
                    """,
                    (summary, document_id),
                )
                if cur.rowcount == 0:
                    cur.execute(
                        "SELECT parse_status FROM documents WHERE id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
                    if row is None:
                        raise DocumentNotFoundError(f"Document {document_id} not found")
                    raise InvalidInputError(f"Document {document_id} is {row[0]}, not done")
            conn.commit()
