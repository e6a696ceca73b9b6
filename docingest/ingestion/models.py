from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar


class ParseStatus(str, Enum):
    """Persisted value of the documents.parse_status column."""

    NONE = "none"
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class NotStarted:
    """Submitted, never requested for processing."""

    status: ClassVar[ParseStatus] = ParseStatus.NONE


@dataclass(frozen=True)
class Pending:
    """Processing requested, waiting for a worker to claim it."""

    status: ClassVar[ParseStatus] = ParseStatus.PENDING


@dataclass(frozen=True)
class Processing:
    """Claimed by a worker; extraction and summarization in flight."""

    status: ClassVar[ParseStatus] = ParseStatus.PROCESSING


@dataclass(frozen=True)
class Done:
    """Extraction and summarization succeeded."""

    text_content: str
    summary: str
    status: ClassVar[ParseStatus] = ParseStatus.DONE


@dataclass(frozen=True)
class Failed:
    """The last attempt failed; the message is shown to the owner."""

    error_message: str
    status: ClassVar[ParseStatus] = ParseStatus.ERROR


ParseState = NotStarted | Pending | Processing | Done | Failed


def state_from_row(
    status: str,
    error_message: str | None = None,
    text_content: str | None = None,
    summary: str | None = None,
) -> ParseState:
    """Rebuild the tagged state from the loosely typed status columns.

    Raises:
        ValueError: if the status is unknown.
    """
    parse_status = ParseStatus(status)
    if parse_status is ParseStatus.DONE:
        return Done(text_content=text_content or "", summary=summary or "")
    if parse_status is ParseStatus.ERROR:
        return Failed(error_message=error_message or "Document processing failed")
    if parse_status is ParseStatus.PROCESSING:
        return Processing()
    if parse_status is ParseStatus.PENDING:
        return Pending()
    return NotStarted()


@dataclass(frozen=True)
class DocumentUpload:
    """Metadata of a file already stored in the object store."""

    original_name: str
    storage_key: str
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class Document:
    """Snapshot of one uploaded document and its processing state."""

    id: str
    user_id: int
    original_name: str
    storage_key: str
    mime_type: str
    size_bytes: int
    state: ParseState
    attempt: int = 0
    created_at: datetime | None = None

    @property
    def parse_status(self) -> ParseStatus:
        return self.state.status

    @property
    def error_message(self) -> str | None:
        return self.state.error_message if isinstance(self.state, Failed) else None

    @property
    def text_content(self) -> str | None:
        return self.state.text_content if isinstance(self.state, Done) else None

    @property
    def summary(self) -> str | None:
        return self.state.summary if isinstance(self.state, Done) else None


@dataclass(frozen=True)
class DocumentListing:
    """Lightweight listing row; omits the stored text."""

    id: str
    original_name: str
    mime_type: str
    size_bytes: int
    parse_status: ParseStatus
    has_summary: bool
    created_at: datetime | None = None
