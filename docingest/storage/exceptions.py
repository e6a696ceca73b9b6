class StorageError(Exception):
    """Base exception for object store failures."""


class ObjectNotFoundError(StorageError):
    """Raised when no object exists under the storage key."""


class TransientIOError(StorageError):
    """Raised on network, timeout or other retryable storage failures."""
