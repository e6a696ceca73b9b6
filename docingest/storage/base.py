from abc import ABC, abstractmethod


class BaseObjectStore(ABC):
    """Read-only view of the object store that holds uploaded files."""

    @abstractmethod
    def fetch(self, storage_key: str) -> bytes:
        """Download the raw bytes stored under ``storage_key``.

        Raises:
            ObjectNotFoundError: if the key does not exist.
            TransientIOError: on I/O or network failures.
        """
