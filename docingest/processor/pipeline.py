from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docingest.database.models import ProcessingTicket
from docingest.ingestion.models import Document


@dataclass(slots=True)
class PipelineContext:
    ticket: ProcessingTicket
    document: Document | None = None
    raw_bytes: bytes = b""
    extracted_text: str = ""
    segments: list[str] = field(default_factory=list)
    summary_input: str = ""
    summary: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
