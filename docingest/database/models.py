from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessingTicket:
    """One processing attempt of a document.

    ``attempt`` is bumped by every processing request; workers only write
    state for the attempt they claimed.
    """

    document_id: str
    attempt: int
